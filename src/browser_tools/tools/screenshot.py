"""
Screenshot Tools

Captures the active tab to a PNG file and reports its path.
"""

import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from playwright.async_api import Page

from .base import tool, ToolResult


def format_timestamp_for_filename(moment: Optional[datetime] = None) -> str:
    """
    Format a timestamp for use in file names.

    ISO-8601 in UTC with millisecond precision, with ':' and '.' replaced by
    '-', e.g. ``2026-10-19T08-24-05-123Z``.
    """
    moment = (moment or datetime.now(timezone.utc)).astimezone(timezone.utc)
    iso = moment.strftime("%Y-%m-%dT%H:%M:%S") + f".{moment.microsecond // 1000:03d}Z"
    return iso.replace(":", "-").replace(".", "-")


def default_screenshot_path(moment: Optional[datetime] = None) -> Path:
    """Build ``<tmpdir>/screenshot-<timestamp>.png``."""
    filename = f"screenshot-{format_timestamp_for_filename(moment)}.png"
    return Path(tempfile.gettempdir()) / filename


@tool(
    name="screenshot",
    description="Take a screenshot of the current page and save it as PNG. Returns the file path.",
    parameters={
        "type": "object",
        "properties": {
            "path": {
                "type": "string",
                "description": "Output file (default: screenshot-<timestamp>.png in the temp dir)",
            },
            "full_page": {
                "type": "boolean",
                "description": "Whether to capture the full scrollable page (default: false)",
                "default": False,
            },
        },
    },
)
async def screenshot(
    page: Page,
    path: Optional[str] = None,
    full_page: bool = False,
) -> ToolResult:
    """
    Take a screenshot and save it to a file.

    Args:
        page: Playwright Page instance
        path: Output path (default: timestamped file in the temp dir)
        full_page: Whether to capture full scrollable page

    Returns:
        ToolResult with the saved file path
    """
    target = Path(path) if path else default_screenshot_path()
    target.parent.mkdir(parents=True, exist_ok=True)

    png = await page.screenshot(path=str(target), full_page=full_page)
    return ToolResult.ok(
        {"path": str(target), "size_bytes": len(png)},
        full_page=full_page,
        url=page.url,
    )
