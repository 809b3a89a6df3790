"""
Browser Connection

Attaches to an already-running Chrome over the DevTools protocol (CDP) and
hands out its default context and active tab.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from playwright.async_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    async_playwright,
)

from ..config import env_int
from ..errors import BrowserConnectionError, NoActivePageError, NoBrowserContextError

logger = logging.getLogger(__name__)

DEFAULT_CDP_URL = "http://localhost:9222"


@dataclass
class ConnectionConfig:
    """
    Configuration for the CDP connection.

    Reads from environment variables with sensible defaults.
    """

    # Remote debugging endpoint of the running browser
    cdp_url: str = DEFAULT_CDP_URL

    # Connection timeout in ms
    connect_timeout: int = 30000

    @classmethod
    def from_env(cls) -> "ConnectionConfig":
        """
        Create ConnectionConfig from environment variables.

        Environment variables:
            BROWSER_CDP_URL: CDP endpoint (default: http://localhost:9222)
            BROWSER_CONNECT_TIMEOUT: int in ms (default: 30000)
        """
        return cls(
            cdp_url=os.getenv("BROWSER_CDP_URL", DEFAULT_CDP_URL),
            connect_timeout=env_int("BROWSER_CONNECT_TIMEOUT", 30000),
        )


class BrowserConnection:
    """
    Connection to a running browser.

    The "active tab" is approximated as the last page of the first context,
    which matches the most recently opened tab in practice.

    Usage:
        >>> async with BrowserConnection() as connection:
        ...     page = connection.active_page()
        ...     await page.goto("https://example.com")
    """

    def __init__(self, config: Optional[ConnectionConfig] = None):
        """
        Initialize the connection.

        Args:
            config: Connection configuration (uses env if None)
        """
        self.config = config or ConnectionConfig.from_env()

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    @property
    def is_connected(self) -> bool:
        """Check if the browser connection is open."""
        return self._browser is not None

    @property
    def browser(self) -> Browser:
        """The connected Playwright Browser."""
        if self._browser is None:
            raise RuntimeError("Browser not connected")
        return self._browser

    async def connect(self) -> None:
        """
        Start Playwright and attach to the browser over CDP.

        Raises:
            BrowserConnectionError: If the endpoint cannot be reached
        """
        if self._browser is not None:
            return

        self._playwright = await async_playwright().start()
        url = self.config.cdp_url

        try:
            self._browser = await self._playwright.chromium.connect_over_cdp(
                url,
                timeout=self.config.connect_timeout,
            )
        except PlaywrightError as e:
            await self._stop_playwright()
            raise BrowserConnectionError(
                f"Failed to connect to Chrome at {url}",
                cdp_url=url,
                hint=(
                    "Make sure Chrome is running with --remote-debugging-port=9222 "
                    "(run: browser-start)"
                ),
                details={"cause": str(e)},
            ) from e

        logger.debug("Connected to %s (version %s)", url, self._browser.version)

    @property
    def context(self) -> BrowserContext:
        """
        Get the first (default) browser context.

        Raises:
            NoBrowserContextError: If the browser exposes no context
        """
        contexts = self.browser.contexts
        if not contexts:
            raise NoBrowserContextError(
                "No browser context found",
                hint="This usually means Chrome is not properly running",
            )
        return contexts[0]

    def active_page(self, required: bool = True) -> Optional[Page]:
        """
        Get the most recently opened page (tab).

        Args:
            required: Raise instead of returning None when no tab is open

        Returns:
            The last page of the default context, or None

        Raises:
            NoActivePageError: If required and no tab is open
        """
        pages = self.context.pages
        if pages:
            return pages[-1]

        if required:
            raise NoActivePageError(
                "No active tab found",
                hint="Open at least one tab in Chrome",
            )
        return None

    async def new_page(self) -> Page:
        """Open a new tab in the default context."""
        return await self.context.new_page()

    async def close(self) -> None:
        """
        Disconnect from the browser.

        Errors are ignored: the browser may already be gone.
        """
        if self._browser is not None:
            try:
                await self._browser.close()
            except Exception as e:
                logger.debug("Ignoring error while closing browser: %s", e)
            self._browser = None

        await self._stop_playwright()

    async def _stop_playwright(self) -> None:
        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except Exception as e:
                logger.debug("Ignoring error while stopping Playwright: %s", e)
            self._playwright = None

    async def __aenter__(self) -> "BrowserConnection":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()


def create_connection(config: Optional[ConnectionConfig] = None) -> BrowserConnection:
    """
    Factory function to create a browser connection.

    Use with async context manager:
        >>> async with create_connection() as connection:
        ...     page = connection.active_page()

    Args:
        config: Connection configuration (uses env if None)

    Returns:
        BrowserConnection instance (not yet connected)
    """
    return BrowserConnection(config)
