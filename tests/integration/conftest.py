"""
Fixtures for integration tests against a real headless Chromium.

Tests are skipped when Playwright's Chromium is not installed
(``playwright install chromium``).
"""

import pytest
import pytest_asyncio
from playwright.async_api import Error as PlaywrightError, async_playwright


@pytest_asyncio.fixture
async def browser():
    async with async_playwright() as p:
        try:
            instance = await p.chromium.launch(headless=True)
        except PlaywrightError as e:
            pytest.skip(f"Chromium not available: {e.message.splitlines()[0]}")
        yield instance
        await instance.close()


@pytest_asyncio.fixture
async def page(browser):
    context = await browser.new_context(viewport={"width": 1280, "height": 720})
    page = await context.new_page()
    yield page
    await context.close()
