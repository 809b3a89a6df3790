#!/usr/bin/env python
"""
Pick Elements Example

Opens a page in the running Chrome and lets you select elements on it,
then prints a CSS-like hint and the ancestor chain for each one.

Usage:
    browser-start
    python examples/pick_elements.py https://news.ycombinator.com

Requirements:
    - Chrome running with --remote-debugging-port=9222 (browser-start)
    - Browser tools installed: pip install -e .
"""

import asyncio
import sys

from browser_tools.browser import create_connection
from browser_tools.picker import run_picker
from browser_tools.tools import navigate


async def main(url: str):
    """Navigate, then run one picker session."""
    async with create_connection() as connection:
        page = connection.active_page()

        result = await navigate(page, url=url)
        if not result.success:
            print(f"Navigation failed: {result.error}")
            return
        print(f"Opened: {result.data['url']} ({result.data['title']})\n")

        # Click one element, or Cmd/Ctrl+click several and press Enter
        selection = await run_picker(page, "Select the elements to scrape")

        if selection.cancelled:
            print("Cancelled")
            return

        for element in selection.elements:
            print(element.selector_hint)
            print(f"  parents: {element.parents or '(body)'}")
            print(f"  text:    {element.text}")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "https://example.com"))
