"""
Navigation Tools

Opens a URL in the active tab or in a new one.
"""

from playwright.async_api import Page, TimeoutError as PlaywrightTimeout

from .base import tool, ToolResult

# Schemes that must not get an https:// prefix
_KNOWN_SCHEMES = ("http://", "https://", "file://", "about:", "data:", "chrome://")


def normalize_url(url: str) -> str:
    """Add https:// to bare hosts like 'example.com'."""
    url = url.strip()
    if not url.startswith(_KNOWN_SCHEMES):
        url = f"https://{url}"
    return url


@tool(
    name="navigate",
    description="Load a URL in the given tab and report where it ended up. Bare hosts get https://.",
    parameters={
        "type": "object",
        "properties": {
            "url": {"type": "string", "description": "Address to open, e.g. 'example.com'"},
            "wait_until": {
                "type": "string",
                "enum": ["load", "domcontentloaded", "networkidle", "commit"],
                "default": "domcontentloaded",
            },
            "timeout": {"type": "integer", "description": "Milliseconds", "default": 30000},
        },
        "required": ["url"],
    },
)
async def navigate(
    page: Page,
    url: str,
    wait_until: str = "domcontentloaded",
    timeout: int = 30000,
) -> ToolResult:
    """
    Navigate a tab.

    Data is ``{url, title, status}`` where url is the final address after
    redirects. Pages loaded without an HTTP response (about:blank, data:
    URLs) count as success with status None.
    """
    if not url or not url.strip():
        return ToolResult.fail("navigate() requires a URL")

    target = normalize_url(url)
    try:
        response = await page.goto(target, wait_until=wait_until, timeout=timeout)
    except PlaywrightTimeout:
        return ToolResult.fail(f"Navigation timeout after {timeout}ms", url=target, timeout=timeout)

    status = response.status if response else None
    succeeded = status is None or response.ok

    return ToolResult(
        success=succeeded,
        data={"url": page.url, "title": await page.title(), "status": status},
        error=None if succeeded else f"HTTP {status} for {target}",
        metadata={"wait_until": wait_until, "requested_url": target},
    )
