"""
Cookie Tools

Reads the cookies of the default browser context. Values of cookies whose
name looks like a credential can be masked before printing.
"""

from typing import Any, Optional

from playwright.async_api import BrowserContext

from .base import tool, ToolResult

SENSITIVE_PATTERNS = ("session", "token", "auth", "jwt", "password")
MASKED_VALUE = "***MASKED***"


def is_sensitive_cookie(name: str) -> bool:
    """Check if a cookie name contains a credential-like word."""
    lowered = name.lower()
    return any(pattern in lowered for pattern in SENSITIVE_PATTERNS)


def mask_cookies(cookies: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Return copies of the cookies with sensitive values masked."""
    masked = []
    for cookie in cookies:
        copy = dict(cookie)
        if is_sensitive_cookie(copy.get("name", "")):
            copy["value"] = MASKED_VALUE
        masked.append(copy)
    return masked


@tool(
    name="cookies",
    description="List the cookies of the browser context, optionally limited to some URLs and with credential-like values masked.",
    parameters={
        "type": "object",
        "properties": {
            "urls": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Only return cookies that apply to these URLs",
            },
            "mask_sensitive": {
                "type": "boolean",
                "description": "Mask values of session/token/auth cookies",
                "default": False,
            },
        },
    },
)
async def cookies(
    context: BrowserContext,
    urls: Optional[list[str]] = None,
    mask_sensitive: bool = False,
) -> ToolResult:
    """
    Read cookies from a browser context.

    Args:
        context: Playwright BrowserContext instance
        urls: Optional URLs to filter by
        mask_sensitive: Mask credential-like cookie values

    Returns:
        ToolResult with the list of cookie dicts
    """
    found = await context.cookies(urls) if urls else await context.cookies()
    result = mask_cookies(found) if mask_sensitive else list(found)

    return ToolResult.ok(result, count=len(result), masked=mask_sensitive)
