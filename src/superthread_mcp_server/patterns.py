"""List-name pattern matching and delimited config parsing.

Used by configuration loading (enabled tool domains, "add to top" list
patterns) and by card position inference in the card tool handlers.
"""

import re
from collections.abc import Callable, Iterable
from functools import lru_cache


def parse_delimited_string(
    raw: str | None,
    delimiter: str = ",",
    transform: Callable[[str], str] | None = None,
) -> list[str]:
    """Split a delimited config value into trimmed, non-empty items.

    A backslash before the delimiter escapes it, so ``"Tasks\\, Urgent"``
    stays a single item ``"Tasks, Urgent"``.

    Args:
        raw: Raw string (e.g. from an environment variable). ``None`` or
            empty yields an empty list.
        delimiter: Item separator.
        transform: Optional function applied to every kept item
            (e.g. ``str.lower`` for domain names).

    Returns:
        Items in input order.

    Examples:
        >>> parse_delimited_string("Done,Tasks\\\\, Urgent")
        ['Done', 'Tasks, Urgent']
        >>> parse_delimited_string("a,,b,,,c")
        ['a', 'b', 'c']
    """
    if not raw:
        return []

    escaped = "\\" + delimiter
    parts = re.split(r"(?<!\\)" + re.escape(delimiter), raw)

    items = []
    for part in parts:
        item = part.replace(escaped, delimiter).strip()
        if not item:
            continue
        items.append(transform(item) if transform else item)
    return items


@lru_cache(maxsize=256)
def _compile_pattern(pattern: str) -> re.Pattern[str]:
    # Only "*" is special; everything else is matched literally.
    body = ".*".join(re.escape(part) for part in pattern.split("*"))
    return re.compile(body, re.IGNORECASE | re.DOTALL)


def matches_pattern(candidate: str, pattern: str) -> bool:
    """Case-insensitive glob match supporting ``*`` wildcards.

    The whole candidate must match: ``"Done"`` matches ``"done"`` but not
    ``"Redone"``; ``"*done"`` matches both.
    """
    return _compile_pattern(pattern).fullmatch(candidate) is not None


def should_position_at_top(
    list_name: str | None,
    explicit_position: int | None,
    patterns: Iterable[str],
) -> int | None:
    """Decide a card's position within its destination list.

    Resolution order:
        1. An explicit position always wins (including 0).
        2. Position 0 (top of list) if ``list_name`` matches any pattern.
        3. ``None`` -- leave ordering to the API default (bottom).

    Args:
        list_name: Title of the destination list, if known.
        explicit_position: Position supplied by the caller, if any.
        patterns: Configured glob patterns (``Config.lists_add_to_top``).
    """
    if explicit_position is not None:
        return explicit_position
    if not list_name:
        return None
    for pattern in patterns:
        if matches_pattern(list_name, pattern):
            return 0
    return None
