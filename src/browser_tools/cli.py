"""
Browser Tools CLI Entry Point

Command-line interface for driving a running Chrome over CDP.

Usage:
    browser-tools start [--profile]
    browser-tools nav https://example.com [--new]
    browser-tools eval "document.title"
    browser-tools screenshot
    browser-tools cookies [--mask] [--json]
    browser-tools pick "Click the submit button"
    browser-tools tools [--json]

Each command is also installed as its own script (browser-start,
browser-nav, browser-eval, browser-screenshot, browser-cookies, browser-pick).
"""

import argparse
import asyncio
import logging
import sys
from typing import Awaitable, Callable, Optional

from playwright.async_api import Error as PlaywrightError

from browser_tools.browser import BrowserConnection, ConnectionConfig, LaunchConfig, start_chrome
from browser_tools.config import configure_logging
from browser_tools.errors import BrowserToolsError
from browser_tools.picker import run_picker
from browser_tools.tools import (
    ToolResult,
    cookies,
    evaluate,
    get_all_tools,
    get_tool_schemas,
    navigate,
    screenshot,
)
from browser_tools.tui import (
    ToolsConsole,
    get_console,
    print_cookies,
    print_element_info,
    print_error,
    print_json,
    print_result,
    print_success,
    print_warning,
)

logger = logging.getLogger(__name__)

CommandHandler = Callable[[argparse.Namespace, ToolsConsole], Awaitable[int]]


def _common_options() -> argparse.ArgumentParser:
    """Options shared by every sub-command."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--cdp-url",
        type=str,
        default=None,
        help="CDP endpoint of the running browser (default: $BROWSER_CDP_URL or http://localhost:9222)",
    )
    common.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging",
    )
    return common


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one sub-command per tool."""
    parser = argparse.ArgumentParser(
        prog="browser-tools",
        description="Drive a running Chrome over the DevTools protocol",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    browser-tools start --profile
    browser-tools nav https://example.com --new
    browser-tools eval "document.querySelectorAll('a').length"
    browser-tools pick "Click the submit button"
    browser-tools tools [--json]
        """,
    )

    common = _common_options()
    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    def add_command(name: str, help_text: str) -> argparse.ArgumentParser:
        return subparsers.add_parser(name, help=help_text, parents=[common])

    start = add_command("start", "Start Chrome with remote debugging on :9222")
    start.add_argument(
        "--profile",
        action="store_true",
        help="Copy your default Chrome profile (cookies, logins)",
    )
    start.add_argument("--port", type=int, default=None, help="Remote debugging port")
    start.set_defaults(handler=run_start, command_parser=start)

    nav = add_command("nav", "Navigate the active tab to a URL")
    nav.add_argument("url", nargs="?", help="URL to open")
    nav.add_argument("--new", action="store_true", help="Open in a new tab")
    nav.set_defaults(handler=run_nav, command_parser=nav)

    evaluate_cmd = add_command("eval", "Evaluate JavaScript in the active tab")
    evaluate_cmd.add_argument("code", nargs="*", help="JavaScript expression (await allowed)")
    evaluate_cmd.add_argument("--json", action="store_true", help="Print the value as JSON")
    evaluate_cmd.set_defaults(handler=run_eval, command_parser=evaluate_cmd)

    shot = add_command("screenshot", "Screenshot the active tab")
    shot.add_argument("--output", "-o", type=str, default=None, help="Output PNG path")
    shot.add_argument("--full-page", action="store_true", help="Capture the whole scrollable page")
    shot.set_defaults(handler=run_screenshot, command_parser=shot)

    cookie_cmd = add_command("cookies", "List cookies of the browser")
    cookie_cmd.add_argument("--mask", action="store_true", help="Mask session/token/auth values")
    cookie_cmd.add_argument("--json", action="store_true", help="Print cookies as JSON")
    cookie_cmd.add_argument(
        "--url",
        action="append",
        default=None,
        help="Only cookies for this URL (repeatable)",
    )
    cookie_cmd.set_defaults(handler=run_cookies, command_parser=cookie_cmd)

    pick_cmd = add_command("pick", "Interactively select elements in the active tab")
    pick_cmd.add_argument("message", nargs="*", help="Prompt shown in the picker banner")
    pick_cmd.add_argument("--json", action="store_true", help="Print the selection as JSON")
    pick_cmd.set_defaults(handler=run_pick, command_parser=pick_cmd)

    list_cmd = add_command("tools", "List the available tools")
    list_cmd.add_argument("--json", action="store_true", help="Print tool schemas as JSON")
    list_cmd.set_defaults(handler=run_tools, command_parser=list_cmd)

    return parser


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)


def _connection(args: argparse.Namespace) -> BrowserConnection:
    config = ConnectionConfig.from_env()
    if args.cdp_url:
        config.cdp_url = args.cdp_url
    return BrowserConnection(config)


def _usage(args: argparse.Namespace, console: ToolsConsole, example: str) -> int:
    """Print usage for a command that is missing its argument."""
    console.print(args.command_parser.format_usage().rstrip(), markup=False, highlight=False)
    console.print(f"\nExample:\n  {example}", markup=False, highlight=False)
    return 1


def _report_failure(result: ToolResult, console: ToolsConsole) -> int:
    print_error(result.error or "Unknown error", hint=result.hint, console=console)
    return 1


async def run_start(args: argparse.Namespace, console: ToolsConsole) -> int:
    """Start Chrome with remote debugging enabled."""
    config = LaunchConfig.from_env(use_profile=args.profile)
    if args.port:
        config.port = args.port

    with console.status("Starting Chrome..."):
        info = await start_chrome(config)

    logger.debug("Browser version: %s", info.get("Browser"))
    suffix = " with your profile" if config.use_profile else ""
    print_success(f"Chrome started on :{config.port}{suffix}", console=console)
    return 0


async def run_nav(args: argparse.Namespace, console: ToolsConsole) -> int:
    """Navigate the active tab, or a new one."""
    if not args.url:
        return _usage(args, console, "browser-nav https://example.com --new")

    async with _connection(args) as connection:
        page = await connection.new_page() if args.new else connection.active_page()
        result = await navigate(page, url=args.url)

    if not result.success:
        return _report_failure(result, console)

    url = result.data["url"]
    print_success(f"Opened: {url}" if args.new else f"Navigated to: {url}", console=console)
    return 0


async def run_eval(args: argparse.Namespace, console: ToolsConsole) -> int:
    """Evaluate JavaScript in the active tab and print the value."""
    code = " ".join(args.code)
    if not code:
        return _usage(args, console, 'browser-eval "document.title"')

    async with _connection(args) as connection:
        result = await evaluate(connection.active_page(), code=code)

    if not result.success:
        return _report_failure(result, console)

    if args.json:
        print_json(result.data, pretty=True, console=console)
    else:
        print_result(result.data, console=console)
    return 0


async def run_screenshot(args: argparse.Namespace, console: ToolsConsole) -> int:
    """Screenshot the active tab and print the file path."""
    async with _connection(args) as connection:
        result = await screenshot(
            connection.active_page(),
            path=args.output,
            full_page=args.full_page,
        )

    if not result.success:
        return _report_failure(result, console)

    console.print(result.data["path"], markup=False, highlight=False)
    return 0


async def run_cookies(args: argparse.Namespace, console: ToolsConsole) -> int:
    """Print cookies of the default browser context."""
    async with _connection(args) as connection:
        result = await cookies(
            connection.context,
            urls=args.url,
            mask_sensitive=args.mask,
        )

    if not result.success:
        return _report_failure(result, console)

    if args.json:
        print_json(result.data, pretty=True, console=console)
    else:
        print_cookies(result.data, mask_sensitive=args.mask, console=console)
    return 0


async def run_pick(args: argparse.Namespace, console: ToolsConsole) -> int:
    """Let the user pick elements in the active tab and print them."""
    message = " ".join(args.message)
    if not message:
        return _usage(args, console, 'browser-pick "Click the submit button"')

    async with _connection(args) as connection:
        page = connection.active_page()
        with console.status("Waiting for selection in the browser (Esc to cancel)..."):
            selection = await run_picker(page, message)

    if args.json:
        print_json(selection.to_raw(), pretty=True, console=console)
    else:
        print_element_info(selection, console=console)
    return 0


async def run_tools(args: argparse.Namespace, console: ToolsConsole) -> int:
    """List registered tools with their descriptions."""
    if args.json:
        print_json(get_tool_schemas(), pretty=True, console=console)
        return 0

    for spec in get_all_tools().values():
        print_result({spec.name: spec.description}, console=console)
    return 0


async def run_command(
    args: argparse.Namespace,
    console: Optional[ToolsConsole] = None,
) -> int:
    """
    Run the selected command and turn errors into an exit code.

    Returns:
        Process exit code (0 on success)
    """
    console = console or get_console()
    handler: CommandHandler = args.handler

    try:
        return await handler(args, console)
    except BrowserToolsError as e:
        print_error(e.message, hint=e.hint, console=console)
    except PlaywrightError as e:
        print_error(e.message.splitlines()[0] if e.message else str(e), console=console)
        logger.debug("Playwright error", exc_info=True)
    return 1


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "handler", None):
        parser.print_help()
        return 1

    configure_logging(
        level=logging.DEBUG if args.verbose else None,
        verbose=args.verbose,
    )

    try:
        return asyncio.run(run_command(args))
    except KeyboardInterrupt:
        print_warning("Interrupted")
        return 130


def _run_single(command: str) -> int:
    """Run one sub-command as a standalone script (browser-nav, ...)."""
    return main([command, *sys.argv[1:]])


def start_main() -> int:
    return _run_single("start")


def nav_main() -> int:
    return _run_single("nav")


def eval_main() -> int:
    return _run_single("eval")


def screenshot_main() -> int:
    return _run_single("screenshot")


def cookies_main() -> int:
    return _run_single("cookies")


def pick_main() -> int:
    return _run_single("pick")


if __name__ == "__main__":
    sys.exit(main())
