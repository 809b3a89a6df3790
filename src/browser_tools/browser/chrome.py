"""
Platform-specific Chrome helpers.

Chrome locations, process control and profile syncing differ between
macOS, Windows and Linux; everything OS-dependent lives here.
"""

import asyncio
import logging
import os
import platform
import subprocess
import time
from pathlib import Path
from typing import Any, Optional

from ..errors import ProfileSyncError, UnsupportedPlatformError

logger = logging.getLogger(__name__)

DARWIN = "Darwin"
WINDOWS = "Windows"
LINUX = "Linux"

# robocopy exit codes 0-7 all mean success
ROBOCOPY_MAX_SUCCESS_CODE = 7


def _system(system: Optional[str] = None) -> str:
    return system or platform.system()


def get_chrome_executable_path(system: Optional[str] = None) -> str:
    """
    Get the Chrome executable path for the current platform.

    CHROME_PATH overrides the built-in location.
    """
    override = os.getenv("CHROME_PATH")
    if override:
        return override

    system = _system(system)
    if system == DARWIN:
        return "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome"
    if system == WINDOWS:
        return "C:\\Program Files\\Google\\Chrome\\Application\\chrome.exe"
    if system == LINUX:
        return "/usr/bin/google-chrome"
    raise UnsupportedPlatformError(system, hint="Set CHROME_PATH to your Chrome binary")


def get_chrome_user_data_dir(
    system: Optional[str] = None,
    home: Optional[Path] = None,
) -> Path:
    """Get the default Chrome user data directory for the current platform."""
    system = _system(system)
    home = home or Path.home()

    if system == DARWIN:
        return home / "Library" / "Application Support" / "Google" / "Chrome"
    if system == WINDOWS:
        return home / "AppData" / "Local" / "Google" / "Chrome" / "User Data"
    if system == LINUX:
        return home / ".config" / "google-chrome"
    raise UnsupportedPlatformError(system)


def get_chrome_kill_command(system: Optional[str] = None) -> list[str]:
    """Get the command that kills all Chrome processes."""
    system = _system(system)
    if system == DARWIN:
        return ["killall", "Google Chrome"]
    if system == WINDOWS:
        return ["taskkill", "/F", "/IM", "chrome.exe", "/T"]
    if system == LINUX:
        return ["killall", "chrome"]
    raise UnsupportedPlatformError(system)


def _chrome_running(system: str) -> bool:
    """Check whether any Chrome process is still alive."""
    if system == WINDOWS:
        proc = subprocess.run(
            ["tasklist", "/FI", "IMAGENAME eq chrome.exe"],
            capture_output=True,
            text=True,
            check=False,
        )
        return "chrome.exe" in proc.stdout.lower()

    for name in ("Google Chrome", "chrome"):
        proc = subprocess.run(
            ["pgrep", "-x", name],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
        if proc.returncode == 0:
            return True
    return False


async def kill_chrome_processes(
    silent: bool = False,
    warning_delay_ms: int = 0,
    system: Optional[str] = None,
) -> None:
    """
    Kill all Chrome processes.

    Args:
        silent: Do not log the warning and result
        warning_delay_ms: Time to wait after the warning so the user can abort
        system: Override platform detection
    """
    if not silent and warning_delay_ms > 0:
        logger.warning("This will close ALL Chrome windows. Press Ctrl+C to cancel...")
        await asyncio.sleep(warning_delay_ms / 1000)

    command = get_chrome_kill_command(system)
    try:
        subprocess.run(
            command,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError as e:
        # Kill tool missing: nothing we can terminate
        logger.debug("Could not run %s: %s", command[0], e)
        return

    if not silent:
        logger.info("Chrome processes terminated")


async def wait_for_process_termination(
    max_wait_ms: int = 3000,
    poll_interval_ms: int = 200,
    system: Optional[str] = None,
) -> bool:
    """
    Wait until no Chrome process is left.

    Returns:
        True once Chrome is gone, False on timeout
    """
    system = _system(system)
    deadline = time.monotonic() + max_wait_ms / 1000

    while time.monotonic() < deadline:
        try:
            if not _chrome_running(system):
                return True
        except OSError:
            # No process listing tool: assume it is gone
            return True
        await asyncio.sleep(poll_interval_ms / 1000)

    return False


def get_temp_dir(home: Optional[Path] = None) -> Path:
    """Get the profile directory used for the debugging Chrome instance."""
    override = os.getenv("BROWSER_PROFILE_DIR")
    if override:
        return Path(override).expanduser()
    return (home or Path.home()) / ".cache" / "scraping"


def get_rsync_command(
    source: Path,
    destination: Path,
    system: Optional[str] = None,
) -> list[str]:
    """
    Get the rsync command that mirrors source into destination.

    Raises:
        UnsupportedPlatformError: On Windows, where robocopy is used instead
    """
    system = _system(system)
    if system == WINDOWS:
        raise UnsupportedPlatformError(
            system,
            hint="Profile syncing with rsync is not supported on Windows. Use robocopy instead.",
        )
    return ["rsync", "-a", "--delete", f"{source}/", f"{destination}/"]


def sync_chrome_profile(
    source: Optional[Path] = None,
    destination: Optional[Path] = None,
    system: Optional[str] = None,
) -> None:
    """
    Mirror a Chrome profile directory.

    Args:
        source: Profile to copy (default: the system Chrome profile)
        destination: Target directory (default: get_temp_dir())
        system: Override platform detection

    Raises:
        ProfileSyncError: If the copy fails
    """
    system = _system(system)
    src = source or get_chrome_user_data_dir(system)
    dest = destination or get_temp_dir()

    if system == WINDOWS:
        command = [
            "robocopy", str(src), str(dest),
            "/MIR", "/NFL", "/NDL", "/NJH", "/NJS", "/nc", "/ns", "/np",
        ]
        max_ok = ROBOCOPY_MAX_SUCCESS_CODE
    else:
        command = get_rsync_command(src, dest, system)
        max_ok = 0

    logger.debug("Syncing Chrome profile: %s", " ".join(command))
    try:
        proc = subprocess.run(command, capture_output=True, text=True, check=False)
    except OSError as e:
        raise ProfileSyncError(
            f"Failed to sync profile: {command[0]} not available",
            details={"cause": str(e)},
        ) from e

    if proc.returncode > max_ok:
        raise ProfileSyncError(
            f"Failed to sync profile: {command[0]} exited with {proc.returncode}",
            details={"stderr": proc.stderr.strip()},
        )


def get_platform_info() -> dict[str, Any]:
    """Get platform details."""
    system = platform.system()
    return {
        "platform": system,
        "is_windows": system == WINDOWS,
        "is_macos": system == DARWIN,
        "is_linux": system == LINUX,
        "homedir": str(Path.home()),
    }
