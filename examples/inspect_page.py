#!/usr/bin/env python
"""
Inspect Page Example

Collects a few facts about the active tab with the evaluate, cookies and
screenshot tools and prints them with the CLI's output helpers.

Usage:
    python examples/inspect_page.py

Requirements:
    - Chrome running with --remote-debugging-port=9222 (browser-start)
    - Browser tools installed: pip install -e .
"""

import asyncio

from browser_tools.browser import create_connection
from browser_tools.tools import cookies, evaluate, screenshot
from browser_tools.tui import print_cookies, print_error, print_result


async def main():
    """Print page summary, cookies and a screenshot path."""
    async with create_connection() as connection:
        page = connection.active_page()

        summary = await evaluate(
            page,
            code="({title: document.title, links: document.links.length, forms: document.forms.length})",
        )
        if not summary.success:
            print_error(summary.error)
            return
        print_result(summary.data)
        print()

        jar = await cookies(connection.context, mask_sensitive=True)
        if jar.success:
            print_cookies(jar.data, mask_sensitive=True)
        else:
            print_error(jar.error)

        shot = await screenshot(page)
        if not shot.success:
            print_error(shot.error)
            return
        print(f"\nScreenshot: {shot.data['path']}")


if __name__ == "__main__":
    asyncio.run(main())
