"""
Browser Module

Connection to a running Chrome over CDP and helpers to start one.
"""

from .connection import (
    BrowserConnection,
    ConnectionConfig,
    DEFAULT_CDP_URL,
    create_connection,
)
from .launcher import LaunchConfig, build_chrome_command, probe_cdp, start_chrome, wait_for_cdp

__all__ = [
    "BrowserConnection",
    "ConnectionConfig",
    "DEFAULT_CDP_URL",
    "create_connection",
    "LaunchConfig",
    "build_chrome_command",
    "probe_cdp",
    "start_chrome",
    "wait_for_cdp",
]
