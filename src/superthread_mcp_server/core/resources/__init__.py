"""Resource clients, one per Superthread entity family."""

from .boards import BoardResource
from .cards import CardResource
from .comments import CommentResource
from .notes import NoteResource
from .pages import PageResource
from .projects import ProjectResource
from .search import SearchResource
from .spaces import SpaceResource
from .sprints import SprintResource
from .tags import TagResource
from .users import UserResource

__all__ = [
    "BoardResource",
    "CardResource",
    "CommentResource",
    "NoteResource",
    "PageResource",
    "ProjectResource",
    "SearchResource",
    "SpaceResource",
    "SprintResource",
    "TagResource",
    "UserResource",
]
