"""
Browser Tools

Collection of one-shot tools for a running browser:
- Navigation
- Script evaluation
- Screenshot
- Cookies
- Interactive element picker
"""

from .navigation import navigate, normalize_url
from .evaluate import evaluate
from .screenshot import screenshot, default_screenshot_path, format_timestamp_for_filename
from .cookies import cookies, is_sensitive_cookie, mask_cookies
from .pick import pick
from .base import ToolResult, ToolSpec, tool, get_tool, get_all_tools, get_tool_schemas

__all__ = [
    # Navigation
    "navigate",
    "normalize_url",
    # Evaluation
    "evaluate",
    # Screenshot
    "screenshot",
    "default_screenshot_path",
    "format_timestamp_for_filename",
    # Cookies
    "cookies",
    "is_sensitive_cookie",
    "mask_cookies",
    # Picker
    "pick",
    # Base
    "ToolResult",
    "ToolSpec",
    "tool",
    "get_tool",
    "get_all_tools",
    "get_tool_schemas",
]
