"""MCP tool handlers for Superthread operations.

This package contains MCP tool implementations that wrap the core
SuperthreadClient with async handlers, mention formatting, sequential batch
execution, and structured error responses.
"""

from .boards import BOARD_SPECS, BOARD_TOOLS
from .cards import CARD_SPECS, CARD_TOOLS
from .comments import COMMENT_SPECS, COMMENT_TOOLS
from .errors import build_error_response
from .notes import NOTE_SPECS, NOTE_TOOLS
from .pages import PAGE_SPECS, PAGE_TOOLS
from .projects import PROJECT_SPECS, PROJECT_TOOLS
from .registry import ToolRegistry, ToolSpec
from .search import SEARCH_SPECS, SEARCH_TOOLS
from .spaces import SPACE_SPECS, SPACE_TOOLS
from .sprints import SPRINT_SPECS, SPRINT_TOOLS
from .tags import TAG_SPECS, TAG_TOOLS
from .users import USER_SPECS, USER_TOOLS

# Registration order follows constants.DOMAINS
ALL_SPECS: list[ToolSpec] = (
    USER_SPECS
    + PROJECT_SPECS
    + SPACE_SPECS
    + BOARD_SPECS
    + CARD_SPECS
    + SPRINT_SPECS
    + SEARCH_SPECS
    + PAGE_SPECS
    + COMMENT_SPECS
    + NOTE_SPECS
    + TAG_SPECS
)

__all__ = [
    "build_error_response",
    # Registry
    "ToolSpec",
    "ToolRegistry",
    # Spec lists
    "ALL_SPECS",
    "USER_SPECS",
    "PROJECT_SPECS",
    "SPACE_SPECS",
    "BOARD_SPECS",
    "CARD_SPECS",
    "SPRINT_SPECS",
    "SEARCH_SPECS",
    "PAGE_SPECS",
    "COMMENT_SPECS",
    "NOTE_SPECS",
    "TAG_SPECS",
    # Tool lists
    "USER_TOOLS",
    "PROJECT_TOOLS",
    "SPACE_TOOLS",
    "BOARD_TOOLS",
    "CARD_TOOLS",
    "SPRINT_TOOLS",
    "SEARCH_TOOLS",
    "PAGE_TOOLS",
    "COMMENT_TOOLS",
    "NOTE_TOOLS",
    "TAG_TOOLS",
]
