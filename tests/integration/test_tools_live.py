"""
Integration tests for the tools against a real page.
"""

import asyncio

import pytest

from browser_tools.picker.script import ACTIVE_EXPRESSION
from browser_tools.tools import cookies, evaluate, navigate, pick, screenshot

pytestmark = pytest.mark.integration

LIST_HTML = "<title>List</title><ul><li>a</li><li>b</li><li>c</li></ul>"


class TestNavigateLive:
    """Test navigate in a real page."""

    @pytest.mark.asyncio
    async def test_data_url(self, page):
        result = await navigate(page, url="data:text/html,<title>Hello</title><p>hi</p>")

        assert result.success is True
        assert result.data["title"] == "Hello"
        assert result.data["url"].startswith("data:text/html")


class TestEvaluateLive:
    """Test evaluate in a real page."""

    @pytest.mark.asyncio
    async def test_expression(self, page):
        await page.set_content(LIST_HTML)

        result = await evaluate(page, code="document.querySelectorAll('li').length")

        assert result.data == 3

    @pytest.mark.asyncio
    async def test_await_allowed(self, page):
        result = await evaluate(page, code="await new Promise(r => setTimeout(() => r(42), 10))")
        assert result.data == 42

    @pytest.mark.asyncio
    async def test_object_value(self, page):
        await page.set_content(LIST_HTML)

        result = await evaluate(
            page,
            code="({title: document.title, items: [...document.querySelectorAll('li')].map(li => li.textContent)})",
        )

        assert result.data == {"title": "List", "items": ["a", "b", "c"]}

    @pytest.mark.asyncio
    async def test_script_error(self, page):
        result = await evaluate(page, code="notDefined.property")

        assert result.success is False
        assert "notDefined" in result.error


class TestScreenshotLive:
    """Test screenshot to disk."""

    @pytest.mark.asyncio
    async def test_png_written(self, page, tmp_path):
        await page.set_content(LIST_HTML)
        target = tmp_path / "shots" / "page.png"

        result = await screenshot(page, path=str(target))

        assert result.success is True
        data = target.read_bytes()
        assert data.startswith(b"\x89PNG")
        assert result.data["size_bytes"] == len(data)


class TestCookiesLive:
    """Test cookies of a real context."""

    @pytest.mark.asyncio
    async def test_masking(self, page):
        await page.context.add_cookies([
            {"name": "session_id", "value": "abc123", "url": "https://example.com"},
            {"name": "theme", "value": "dark", "url": "https://example.com"},
        ])

        result = await cookies(page.context, mask_sensitive=True)

        values = {c["name"]: c["value"] for c in result.data}
        assert values == {"session_id": "***MASKED***", "theme": "dark"}

    @pytest.mark.asyncio
    async def test_url_filter(self, page):
        await page.context.add_cookies([
            {"name": "theme", "value": "dark", "url": "https://example.com"},
        ])

        result = await cookies(page.context, urls=["https://other.test"])

        assert result.data == []
        assert result.metadata["count"] == 0


class TestPickLive:
    """Test the pick tool end to end."""

    @pytest.mark.asyncio
    async def test_cancel(self, page):
        await page.set_content(LIST_HTML)
        task = asyncio.create_task(pick(page, message="Pick an item"))
        await page.wait_for_function(ACTIVE_EXPRESSION)

        await page.keyboard.press("Escape")
        result = await asyncio.wait_for(task, timeout=5)

        assert result.success is True
        assert result.data is None
        assert result.metadata["kind"] == "cancelled"
