"""
Rich TUI Output Module

Terminal output for the browser tools, built on the Rich library.

Components:
- ToolsConsole: stdout/stderr console pair with themed output
- TUIConfig: Configuration for colors
- Result printers for tool values, picker selections and cookies
"""

from browser_tools.tui.console import (
    TUIConfig,
    ToolsConsole,
    create_console,
    get_console,
)
from browser_tools.tui.output import (
    format_value,
    print_cookies,
    print_element_info,
    print_error,
    print_json,
    print_result,
    print_success,
    print_warning,
)

__all__ = [
    # Console infrastructure
    "TUIConfig",
    "ToolsConsole",
    "create_console",
    "get_console",
    # Output
    "format_value",
    "print_cookies",
    "print_element_info",
    "print_error",
    "print_json",
    "print_result",
    "print_success",
    "print_warning",
]
