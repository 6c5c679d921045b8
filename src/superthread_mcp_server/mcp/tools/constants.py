"""Shared constants for MCP tool handlers."""

# Tool domains, in registration order. SUPERTHREAD_ENABLED_TOOLS selects
# a subset of these.
DOMAINS = (
    "users",
    "projects",
    "spaces",
    "boards",
    "cards",
    "sprints",
    "search",
    "pages",
    "comments",
    "notes",
    "tags",
)

# Every tool is scoped to a workspace.
WORKSPACE_ID_PROPERTY = {
    "type": "string",
    "description": "Workspace ID (use user_get_my_account to discover it)",
}

UNDOCUMENTED_WARNING = (
    "WARNING: This endpoint is undocumented in Superthread's public API "
    "and may change without notice."
)
