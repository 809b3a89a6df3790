"""
Result output for the browser tools.

Results are printed as plain ``key: value`` lines so they can be read by
people and grepped by scripts alike; ``print_json`` gives machine output.
"""

import json
from typing import Any, Optional, Union

from rich.text import Text

from ..picker.models import SelectionResult
from .console import ToolsConsole, get_console


def format_value(value: Any) -> str:
    """
    Format a scalar the way the page would print it.

    None becomes ``null``, booleans ``true``/``false``; nested containers
    are rendered as compact JSON.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _line(console: ToolsConsole, text: Union[str, Text]) -> None:
    if isinstance(text, str):
        text = Text(text)
    console.out.print(text, highlight=False)


def _print_object(obj: dict[str, Any], console: ToolsConsole) -> None:
    for key, value in obj.items():
        _line(console, Text.assemble((str(key), "key"), ": ", format_value(value)))


def _print_array(items: list[Any], console: ToolsConsole) -> None:
    for index, item in enumerate(items):
        if index > 0:
            _line(console, "")
        if isinstance(item, dict):
            _print_object(item, console)
        else:
            _line(console, Text(format_value(item)))


def print_result(result: Any, *, console: Optional[ToolsConsole] = None) -> None:
    """
    Print a result value.

    Dicts print one ``key: value`` line per entry, lists print their items
    separated by blank lines, anything else prints as a single line.

    Args:
        result: Value to print
        console: Console to use (defaults to global console)
    """
    console = console or get_console()

    if isinstance(result, list):
        _print_array(result, console)
    elif isinstance(result, dict):
        _print_object(result, console)
    else:
        _line(console, Text(format_value(result)))


def print_element_info(
    selection: Union[SelectionResult, dict, list, None],
    *,
    console: Optional[ToolsConsole] = None,
) -> None:
    """
    Print the outcome of a picker session.

    Args:
        selection: SelectionResult or its raw form
        console: Console to use (defaults to global console)
    """
    console = console or get_console()

    raw = selection.to_raw() if isinstance(selection, SelectionResult) else selection
    if not raw:
        _line(console, Text("✗ No element selected", style="error"))
        return

    print_result(raw, console=console)


def print_cookies(
    cookies: list[dict[str, Any]],
    *,
    mask_sensitive: bool = False,
    console: Optional[ToolsConsole] = None,
) -> None:
    """
    Print cookies in a readable format.

    Values are printed as given; mask them first with
    ``browser_tools.tools.mask_cookies``.

    Args:
        cookies: Cookie dicts as returned by Playwright
        mask_sensitive: Append a note that sensitive values are masked
        console: Console to use (defaults to global console)
    """
    console = console or get_console()

    if not cookies:
        _line(console, "No cookies found")
        return

    for cookie in cookies:
        _line(
            console,
            Text.assemble((cookie.get("name", ""), "key"), ": ", format_value(cookie.get("value"))),
        )
        for field in ("domain", "path", "httpOnly", "secure"):
            _line(console, f"  {field}: {format_value(cookie.get(field))}")
        _line(console, "")

    if mask_sensitive:
        _line(
            console,
            "ℹ️  Sensitive cookies (containing 'session', 'token', 'auth', etc.) are masked",
        )


def print_json(
    data: Any,
    *,
    pretty: bool = False,
    console: Optional[ToolsConsole] = None,
) -> None:
    """
    Print data as JSON (useful for piping to other tools).

    Args:
        data: JSON-serializable data
        pretty: Indent the output
        console: Console to use (defaults to global console)
    """
    console = console or get_console()
    text = json.dumps(data, indent=2 if pretty else None, ensure_ascii=False)
    console.out.print(text, markup=False, highlight=False)


def print_success(message: str, *, console: Optional[ToolsConsole] = None) -> None:
    """Print a success line to stdout."""
    console = console or get_console()
    _line(console, Text.assemble(("✓ ", "success"), message))


def print_error(
    message: str,
    *,
    hint: Optional[str] = None,
    console: Optional[ToolsConsole] = None,
) -> None:
    """
    Print an error line (and an optional hint) to stderr.

    Args:
        message: Error message
        hint: Suggestion for resolution, printed indented below
        console: Console to use (defaults to global console)
    """
    console = console or get_console()
    console.err.print(Text.assemble(("✗ ", "error"), message), highlight=False)
    if hint:
        console.err.print(Text(f"  {hint}", style="hint"), highlight=False)


def print_warning(message: str, *, console: Optional[ToolsConsole] = None) -> None:
    """Print a warning line to stderr."""
    console = console or get_console()
    console.err.print(Text.assemble(("⚠️  ", "warning"), message), highlight=False)
