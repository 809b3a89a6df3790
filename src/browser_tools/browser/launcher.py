"""
Chrome Launcher

Starts Chrome with a remote debugging port so the other tools can attach.
Uses a dedicated profile directory; with ``use_profile`` the user's real
Chrome profile is copied there first (cookies, logins).
"""

import asyncio
import logging
import os
import platform
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import httpx

from ..config import env_flag, env_int
from ..errors import BrowserLaunchError
from .chrome import (
    WINDOWS,
    get_chrome_executable_path,
    get_platform_info,
    get_temp_dir,
    kill_chrome_processes,
    sync_chrome_profile,
    wait_for_process_termination,
)

logger = logging.getLogger(__name__)


@dataclass
class LaunchConfig:
    """
    Configuration for starting Chrome.

    Reads from environment variables with sensible defaults.
    """

    # Remote debugging port
    port: int = 9222

    # Copy the user's Chrome profile before starting
    use_profile: bool = False

    # Profile directory of the debugging instance
    profile_dir: Path = field(default_factory=get_temp_dir)

    # Chrome binary (platform default if None)
    chrome_path: Optional[str] = None

    # Readiness polling
    connect_attempts: int = 30
    connect_interval_ms: int = 500

    @property
    def cdp_url(self) -> str:
        return f"http://localhost:{self.port}"

    @classmethod
    def from_env(cls, use_profile: bool = False) -> "LaunchConfig":
        """
        Create LaunchConfig from environment variables.

        Environment variables:
            BROWSER_DEBUG_PORT: int (default: 9222)
            BROWSER_PROFILE_DIR: path (default: ~/.cache/scraping)
            BROWSER_USE_PROFILE: true/1/yes to always copy the profile
            CHROME_PATH: Chrome binary (default: platform location)
            BROWSER_START_ATTEMPTS: int (default: 30)
            BROWSER_START_INTERVAL: int in ms (default: 500)
        """
        return cls(
            port=env_int("BROWSER_DEBUG_PORT", 9222),
            use_profile=use_profile or env_flag("BROWSER_USE_PROFILE"),
            profile_dir=get_temp_dir(),
            chrome_path=os.getenv("CHROME_PATH") or None,
            connect_attempts=env_int("BROWSER_START_ATTEMPTS", 30),
            connect_interval_ms=env_int("BROWSER_START_INTERVAL", 500),
        )


def build_chrome_command(config: LaunchConfig) -> list[str]:
    """Build the Chrome command line for a debugging instance."""
    executable = config.chrome_path or get_chrome_executable_path()
    return [
        executable,
        f"--remote-debugging-port={config.port}",
        f"--user-data-dir={config.profile_dir}",
    ]


def spawn_chrome(command: list[str]) -> subprocess.Popen:
    """Start Chrome detached so it outlives this process."""
    options = {
        "stdin": subprocess.DEVNULL,
        "stdout": subprocess.DEVNULL,
        "stderr": subprocess.DEVNULL,
    }
    if platform.system() == WINDOWS:
        options["creationflags"] = (
            subprocess.DETACHED_PROCESS | subprocess.CREATE_NEW_PROCESS_GROUP
        )
    else:
        options["start_new_session"] = True

    try:
        return subprocess.Popen(command, **options)
    except OSError as e:
        raise BrowserLaunchError(
            f"Failed to start Chrome: {command[0]}",
            hint="Set CHROME_PATH to your Chrome binary",
            details={"cause": str(e)},
        ) from e


async def probe_cdp(cdp_url: str, timeout: float = 2.0) -> Optional[dict]:
    """
    Query the browser's /json/version endpoint.

    Returns:
        Version info dict, or None if the endpoint is not answering
    """
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(f"{cdp_url}/json/version")
            response.raise_for_status()
            return response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.debug("CDP endpoint %s not ready: %s", cdp_url, e)
        return None


async def wait_for_cdp(
    cdp_url: str,
    attempts: int = 30,
    interval_ms: int = 500,
) -> Optional[dict]:
    """
    Poll the CDP endpoint until it answers.

    Returns:
        Version info dict, or None if every attempt failed
    """
    for attempt in range(attempts):
        info = await probe_cdp(cdp_url)
        if info is not None:
            logger.debug("CDP endpoint ready after %d attempt(s)", attempt + 1)
            return info
        await asyncio.sleep(interval_ms / 1000)
    return None


async def start_chrome(config: Optional[LaunchConfig] = None) -> dict:
    """
    Start Chrome with remote debugging enabled and wait until it answers.

    Args:
        config: Launch configuration (uses env if None)

    Returns:
        Version info reported by the browser (``Browser``, ``webSocketDebuggerUrl``...)

    Raises:
        ProfileSyncError: If copying the profile fails
        BrowserLaunchError: If Chrome cannot be started or never answers
    """
    config = config or LaunchConfig.from_env()
    logger.debug("Platform: %s", get_platform_info())

    # Chrome locks its profile, so the running instance must go first
    if config.use_profile:
        logger.warning("Closing existing Chrome processes (required for --profile)...")
        await kill_chrome_processes(silent=False, warning_delay_ms=2000)

        if not await wait_for_process_termination(3000):
            logger.warning("Chrome processes may still be running")

    config.profile_dir.mkdir(parents=True, exist_ok=True)

    if config.use_profile:
        logger.info("Syncing Chrome profile into %s", config.profile_dir)
        sync_chrome_profile(destination=config.profile_dir)

    command = build_chrome_command(config)
    logger.debug("Starting Chrome: %s", " ".join(command))
    spawn_chrome(command)

    info = await wait_for_cdp(
        config.cdp_url,
        attempts=config.connect_attempts,
        interval_ms=config.connect_interval_ms,
    )
    if info is None:
        raise BrowserLaunchError(
            f"Failed to connect to Chrome on :{config.port}",
            hint="Check that no other process is using the debugging port",
        )
    return info
