"""
Unit tests for the CDP connection.

Playwright is replaced by mocks; the real connection is covered in
tests/integration/test_connection_live.py.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from playwright.async_api import Error as PlaywrightError

from browser_tools.browser import BrowserConnection, ConnectionConfig, create_connection
from browser_tools.errors import BrowserConnectionError, NoActivePageError, NoBrowserContextError


def make_playwright(browser=None, connect_error=None):
    """Build a mocked async_playwright() factory."""
    pw = MagicMock()
    pw.stop = AsyncMock()
    if connect_error is not None:
        pw.chromium.connect_over_cdp = AsyncMock(side_effect=connect_error)
    else:
        pw.chromium.connect_over_cdp = AsyncMock(return_value=browser)

    factory = MagicMock()
    factory.return_value.start = AsyncMock(return_value=pw)
    return factory, pw


def make_browser(pages=None, contexts=True):
    context = MagicMock()
    context.pages = list(pages or [])
    context.new_page = AsyncMock(return_value=MagicMock(name="new_page"))

    browser = MagicMock()
    browser.version = "120.0.0.0"
    browser.contexts = [context] if contexts else []
    browser.close = AsyncMock()
    return browser, context


class TestConnectionConfig:
    """Test ConnectionConfig defaults and env loading."""

    def test_defaults(self):
        config = ConnectionConfig()
        assert config.cdp_url == "http://localhost:9222"
        assert config.connect_timeout == 30000

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("BROWSER_CDP_URL", "http://127.0.0.1:9333")
        monkeypatch.setenv("BROWSER_CONNECT_TIMEOUT", "5000")
        config = ConnectionConfig.from_env()
        assert config.cdp_url == "http://127.0.0.1:9333"
        assert config.connect_timeout == 5000


class TestBrowserConnection:
    """Test connect/close and page lookup."""

    @pytest.mark.asyncio
    async def test_connect_over_cdp(self):
        browser, _ = make_browser()
        factory, pw = make_playwright(browser)

        with patch("browser_tools.browser.connection.async_playwright", factory):
            connection = create_connection(ConnectionConfig(cdp_url="http://localhost:9333"))
            await connection.connect()

        assert connection.is_connected
        assert connection.browser is browser
        pw.chromium.connect_over_cdp.assert_awaited_once_with(
            "http://localhost:9333", timeout=30000
        )

    @pytest.mark.asyncio
    async def test_connect_failure(self):
        factory, pw = make_playwright(
            connect_error=PlaywrightError("connect ECONNREFUSED 127.0.0.1:9222")
        )

        with patch("browser_tools.browser.connection.async_playwright", factory):
            connection = BrowserConnection(ConnectionConfig())
            with pytest.raises(BrowserConnectionError) as exc_info:
                await connection.connect()

        error = exc_info.value
        assert error.cdp_url == "http://localhost:9222"
        assert "--remote-debugging-port=9222" in error.hint
        assert "ECONNREFUSED" in error.details["cause"]
        assert not connection.is_connected
        pw.stop.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_context_manager_closes(self):
        browser, _ = make_browser(pages=[MagicMock()])
        factory, pw = make_playwright(browser)

        with patch("browser_tools.browser.connection.async_playwright", factory):
            async with BrowserConnection(ConnectionConfig()) as connection:
                assert connection.is_connected

        browser.close.assert_awaited_once()
        pw.stop.assert_awaited_once()
        assert not connection.is_connected

    @pytest.mark.asyncio
    async def test_close_ignores_disconnect_errors(self):
        browser, _ = make_browser()
        browser.close = AsyncMock(side_effect=PlaywrightError("Target closed"))
        factory, pw = make_playwright(browser)

        with patch("browser_tools.browser.connection.async_playwright", factory):
            connection = BrowserConnection(ConnectionConfig())
            await connection.connect()
            await connection.close()

        pw.stop.assert_awaited_once()

    def test_browser_requires_connection(self):
        with pytest.raises(RuntimeError, match="not connected"):
            BrowserConnection(ConnectionConfig()).browser

    def test_active_page_is_last_page(self):
        first, last = MagicMock(name="first"), MagicMock(name="last")
        connection = BrowserConnection(ConnectionConfig())
        connection._browser, _ = make_browser(pages=[first, last])

        assert connection.active_page() is last

    def test_no_active_page(self):
        connection = BrowserConnection(ConnectionConfig())
        connection._browser, _ = make_browser(pages=[])

        with pytest.raises(NoActivePageError) as exc_info:
            connection.active_page()
        assert exc_info.value.hint == "Open at least one tab in Chrome"
        assert connection.active_page(required=False) is None

    def test_no_context(self):
        connection = BrowserConnection(ConnectionConfig())
        connection._browser, _ = make_browser(contexts=False)

        with pytest.raises(NoBrowserContextError):
            connection.context

    @pytest.mark.asyncio
    async def test_new_page_uses_default_context(self):
        connection = BrowserConnection(ConnectionConfig())
        connection._browser, context = make_browser()

        page = await connection.new_page()

        assert page is context.new_page.return_value
