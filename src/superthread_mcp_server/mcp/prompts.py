"""MCP prompt templates.

Prompts are user-driven templates that MCP clients surface as slash
commands.
"""

import mcp.types as types

SCREENSHOT_TO_TASKS = types.Prompt(
    name="screenshot-to-tasks",
    title="Screenshot to Tasks",
    description="Convert screenshot content into actionable Superthread tasks with proper structure and priorities",
    arguments=[
        types.PromptArgument(
            name="screenshot_description",
            description="Description of what's shown in the screenshot",
            required=True,
        ),
        types.PromptArgument(
            name="board_id",
            description="Target board ID for task creation",
            required=False,
        ),
        types.PromptArgument(
            name="list_id",
            description="Target list ID (status column)",
            required=False,
        ),
        types.PromptArgument(
            name="project_context",
            description="Context about the project these tasks belong to",
            required=False,
        ),
    ],
)

PROMPTS = [SCREENSHOT_TO_TASKS]


def _screenshot_to_tasks(arguments: dict[str, str]) -> types.GetPromptResult:
    description = arguments.get("screenshot_description")
    if not description:
        raise ValueError("Missing required argument: screenshot_description")

    board_id = arguments.get("board_id")
    list_id = arguments.get("list_id")
    project_context = arguments.get("project_context")

    lines = [
        f'I need to convert this screenshot content into actionable Superthread tasks: "{description}"',
        "",
    ]
    if project_context:
        lines += [f"Project context: {project_context}", ""]
    lines += [
        "Please create specific, actionable tasks that:",
        "1. Are clearly defined and measurable",
        "2. Can be completed by a single person",
        "3. Have clear acceptance criteria",
        "4. Are properly prioritized",
        "",
        "For each task, provide:",
        "- Title: Clear, concise task name",
        "- Description: Detailed description with acceptance criteria",
        "- Priority: High, Medium, or Low (as numeric value)",
        "- Estimated effort: Time or complexity estimate (in story points)",
        "",
    ]
    if board_id and list_id:
        lines.append(f"Create the tasks in board {board_id}, list {list_id}.")
    else:
        lines.append("List the tasks for me to review before creating them.")
    lines += [
        "",
        "Create the tasks with the card_creates tool, one array item per task.",
    ]

    return types.GetPromptResult(
        description="Turn a screenshot into Superthread cards",
        messages=[
            types.PromptMessage(
                role="user",
                content=types.TextContent(type="text", text="\n".join(lines)),
            )
        ],
    )


def get_prompt(name: str, arguments: dict[str, str] | None) -> types.GetPromptResult:
    """Render a prompt by name.

    Raises:
        ValueError: If the prompt is unknown or a required argument is missing.
    """
    if name == SCREENSHOT_TO_TASKS.name:
        return _screenshot_to_tasks(arguments or {})
    raise ValueError(f"Unknown prompt: {name}")
