"""
Exception hierarchy for the browser tools.

Every error carries an optional ``hint`` telling the user what to do next;
the CLI prints it below the error line.

Usage:
    from browser_tools.errors import BrowserConnectionError

    try:
        browser = await chromium.connect_over_cdp(url)
    except PlaywrightError as e:
        raise BrowserConnectionError(f"Failed to connect to {url}") from e
"""

from typing import Any, Optional


class BrowserToolsError(Exception):
    """
    Base exception for all browser tools errors.

    Catch ``BrowserToolsError`` to handle any error raised by this package.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.details = details or {}


# ── Connection Errors ─────────────────────────────────────────────


class BrowserConnectionError(BrowserToolsError):
    """Raised when the CDP endpoint cannot be reached."""

    def __init__(
        self,
        message: str,
        *,
        cdp_url: Optional[str] = None,
        hint: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, hint=hint, details=details)
        self.cdp_url = cdp_url


class NoBrowserContextError(BrowserToolsError):
    """Raised when the connected browser exposes no context."""


class NoActivePageError(BrowserToolsError):
    """Raised when no tab is open in the browser context."""


# ── Picker Errors ─────────────────────────────────────────────────


class InvalidArgumentError(BrowserToolsError):
    """Raised when a tool is called with a missing or empty argument."""


class PickerBusyError(BrowserToolsError):
    """Raised when a picker session is already listening on the page."""


# ── Launcher Errors ───────────────────────────────────────────────


class UnsupportedPlatformError(BrowserToolsError):
    """
    Raised for operating systems without known Chrome locations.

    Attributes:
        system: Value of ``platform.system()`` that was rejected
    """

    def __init__(self, system: str, *, hint: Optional[str] = None):
        super().__init__(f"Unsupported platform: {system}", hint=hint)
        self.system = system


class ProfileSyncError(BrowserToolsError):
    """Raised when copying the Chrome profile fails."""


class BrowserLaunchError(BrowserToolsError):
    """Raised when Chrome cannot be started or never opens its CDP port."""
