"""Resolve ``{{@Display Name}}`` tokens into Superthread user mentions.

Superthread renders a mention from an inline ``<user-mention>`` element.
Agents write the human-friendly ``{{@Jane Doe}}`` form instead and this
module swaps in the element for every name found in the workspace
directory. ``\\{{@Jane Doe}}`` is an escape and yields the literal token.
A backslash that is itself escaped does not count: ``\\\\{{@Jane Doe}}``
keeps both backslashes and still mentions Jane.
"""

import html
import logging
import re
import time
from typing import Any, Protocol

from .core.async_utils import run_sync

logger = logging.getLogger(__name__)

MENTION_MARKER = "{{@"

# Group 1 is the run of backslashes before the token, group 2 the raw name.
# An odd run escapes the token.
_MENTION_TOKEN = re.compile(r"(\\*)\{\{@([^}]*)\}\}")
_LEADING_TAG = re.compile(r"^\s*<[A-Za-z]")


class MemberDirectory(Protocol):
    def get_members(self, workspace_id: str) -> list[dict[str, Any]]: ...


def _wrap_paragraph(content: str) -> str:
    if _LEADING_TAG.match(content):
        return content
    return f"<p>{content}</p>"


def _mention_element(member: dict[str, Any], timestamp: int) -> str:
    user_id = html.escape(str(member.get("id", "")), quote=True)
    name = html.escape(str(member.get("display_name", "")), quote=True)
    return (
        f'<user-mention data-type="mention" user-id="{user_id}" '
        f'time-created="{timestamp}" user-value="{name}"></user-mention>'
    )


async def format_mentions(
    content: str, workspace_id: str, users: MemberDirectory
) -> str:
    """
    Replace mention tokens in card/comment content.

    Args:
        content: Content as supplied by the agent (plain text or HTML)
        workspace_id: Workspace whose members can be mentioned
        users: Anything with ``get_members(workspace_id)``, normally
            ``client.users``

    Returns:
        Content with known names turned into ``<user-mention>`` elements,
        wrapped in ``<p>`` unless it already starts with a tag. Empty
        content is returned unchanged.
    """
    if not content:
        return content

    if MENTION_MARKER not in content:
        return _wrap_paragraph(content)

    try:
        members = await run_sync(users.get_members, workspace_id)
    except Exception as e:
        # Unresolved tokens stay literal; the write itself must still go out.
        logger.warning(
            "Could not fetch members of workspace %s for mentions: %s",
            workspace_id,
            e,
        )
        members = []

    by_name: dict[str, dict[str, Any]] = {}
    for member in members or []:
        display_name = member.get("display_name")
        if display_name:
            by_name.setdefault(display_name.strip().lower(), member)

    timestamp = int(time.time())

    def _replace(match: re.Match) -> str:
        backslashes, raw_name = match.group(1), match.group(2)
        token = match.group(0)[len(backslashes):]
        if len(backslashes) % 2:
            return backslashes[1:] + token
        member = by_name.get(raw_name.strip().lower())
        if member is None:
            return match.group(0)
        return backslashes + _mention_element(member, timestamp)

    return _wrap_paragraph(_MENTION_TOKEN.sub(_replace, content))
