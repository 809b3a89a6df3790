"""
Rich Console Setup

Provides the console pair used by the browser tools: results go to stdout,
status and errors to stderr so that stdout stays pipeable.
Configured via environment variables for customizable appearance.
"""

import os
import sys
from dataclasses import dataclass
from typing import IO, Optional

from rich.console import Console
from rich.style import Style
from rich.theme import Theme


@dataclass
class TUIConfig:
    """
    TUI configuration loaded from environment variables.

    Attributes:
        color_success: Color for success lines
        color_error: Color for error lines
        color_warning: Color for warnings
        color_key: Color for keys in key/value output
    """

    color_success: str = "green"
    color_error: str = "red"
    color_warning: str = "yellow"
    color_key: str = "cyan"

    @classmethod
    def from_env(cls) -> "TUIConfig":
        """Load configuration from environment variables."""
        return cls(
            color_success=os.getenv("COLOR_SUCCESS", "green"),
            color_error=os.getenv("COLOR_ERROR", "red"),
            color_warning=os.getenv("COLOR_WARNING", "yellow"),
            color_key=os.getenv("COLOR_KEY", "cyan"),
        )


def create_theme(config: TUIConfig) -> Theme:
    """Create a Rich theme from TUI configuration."""
    return Theme(
        {
            "success": Style(color=config.color_success, bold=True),
            "error": Style(color=config.color_error, bold=True),
            "warning": Style(color=config.color_warning, bold=True),
            "key": Style(color=config.color_key),
            "hint": Style(dim=True),
        }
    )


class ToolsConsole:
    """
    Rich console pair for browser tool output.

    ``out`` carries results, ``err`` carries status lines and errors.
    """

    def __init__(
        self,
        config: Optional[TUIConfig] = None,
        *,
        file: Optional[IO[str]] = None,
        err_file: Optional[IO[str]] = None,
    ):
        """
        Initialize the console.

        Args:
            config: TUI configuration. If None, loads from environment.
            file: Stream for results (default: stdout)
            err_file: Stream for status and errors (default: stderr)
        """
        self.config = config or TUIConfig.from_env()
        self._theme = create_theme(self.config)
        self.out = Console(theme=self._theme, file=file or sys.stdout, soft_wrap=True)
        self.err = Console(
            theme=self._theme,
            file=err_file or sys.stderr,
            soft_wrap=True,
        )

    def print(self, *args, **kwargs) -> None:
        """Passthrough to the stdout console."""
        self.out.print(*args, **kwargs)

    def status(self, message: str):
        """Create a status spinner on stderr."""
        return self.err.status(message)


# Global console instance
_console: Optional[ToolsConsole] = None


def get_console() -> ToolsConsole:
    """Get or create the global console instance."""
    global _console
    if _console is None:
        _console = ToolsConsole()
    return _console


def create_console(
    config: Optional[TUIConfig] = None,
    *,
    file: Optional[IO[str]] = None,
    err_file: Optional[IO[str]] = None,
) -> ToolsConsole:
    """
    Create a new console instance with optional configuration.

    Args:
        config: TUI configuration. If None, loads from environment.
        file: Stream for results
        err_file: Stream for status and errors
    """
    return ToolsConsole(config, file=file, err_file=err_file)
