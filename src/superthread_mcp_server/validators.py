"""
Input validation for identifiers interpolated into Superthread API paths.

Caller-supplied IDs (workspace, card, board, ...) end up as URL path
segments. ``safe_id`` strips everything outside ``[A-Za-z0-9_-]`` so that
no separator, dot, percent sign or control character can reach URL
construction. Inputs that still contain at least one allowed character are
accepted as-is after stripping; the upstream API simply 404s on them.
"""

import re

# Anything outside the ASCII whitelist is removed (not just rejected).
_DISALLOWED_ID_CHARS = re.compile(r"[^A-Za-z0-9_-]")


class PathValidationError(ValueError):
    """Raised when an identifier cannot be made safe for a URL path."""

    def __init__(self, field_name: str, reason: str):
        self.field_name = field_name
        self.reason = reason
        super().__init__(format_validation_error(field_name, reason))


def format_validation_error(field_name: str, reason: str) -> str:
    """
    Generate consistent error message for validation failures.

    Args:
        field_name: Name of the offending argument (e.g., "workspaceId")
        reason: Description of validation failure (e.g., "must be a non-empty string")

    Returns:
        Formatted error message string
    """
    return f"{field_name} {reason}"


def safe_id(field_name: str, raw_value: object) -> str:
    """
    Sanitize an identifier for use as a URL path segment.

    Args:
        field_name: Argument name used in error messages
        raw_value: Caller-supplied identifier

    Returns:
        The identifier with surrounding whitespace trimmed and every
        character outside ``[A-Za-z0-9_-]`` removed.

    Raises:
        PathValidationError: If the value is not a non-empty string, or if
            nothing is left after stripping disallowed characters.

    Examples:
        >>> safe_id("workspaceId", "../../etc/passwd")
        'etcpasswd'
        >>> safe_id("cardId", "%2e%2e")
        '2e2e'
    """
    if not isinstance(raw_value, str) or not raw_value:
        raise PathValidationError(field_name, "must be a non-empty string")

    cleaned = _DISALLOWED_ID_CHARS.sub("", raw_value.strip())
    if not cleaned:
        raise PathValidationError(
            field_name,
            "must contain only letters, numbers, hyphen, or underscore",
        )
    return cleaned
