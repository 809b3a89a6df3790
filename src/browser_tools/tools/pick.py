"""
Element Picker Tool

Tool-registry wrapper around the interactive picker.
"""

from playwright.async_api import Page

from ..picker import run_picker
from .base import tool, ToolResult


@tool(
    name="pick",
    description="Let the user select elements in the page. Click picks one element, Cmd/Ctrl+click collects several and Enter finishes, Esc cancels. Returns element info (tag, id, class, text, html, parents), a list of them, or null when cancelled.",
    parameters={
        "type": "object",
        "properties": {
            "message": {
                "type": "string",
                "description": "Prompt shown to the user in the picker banner",
            },
        },
        "required": ["message"],
    },
)
async def pick(page: Page, message: str) -> ToolResult:
    """
    Run the interactive picker.

    Args:
        page: Playwright Page instance
        message: Prompt shown in the picker banner

    Returns:
        ToolResult whose data is the raw selection (dict, list or None)
    """
    selection = await run_picker(page, message)
    return ToolResult.ok(
        selection.to_raw(),
        kind=selection.kind.value,
        count=len(selection.elements),
        url=page.url,
    )
