"""Shared logging configuration with colored output for the owm-client CLI."""
from __future__ import annotations
import logging
import os
import sys
from typing import Optional, TextIO


def _supports_ansi(stream: TextIO) -> bool:
    """Detect if ``stream`` supports ANSI escape codes.

    Returns:
        True if ANSI codes are supported, False otherwise.
    """
    # Check for explicit NO_COLOR environment variable (https://no-color.org/)
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    if not hasattr(stream, "isatty") or not stream.isatty():
        return False
    # Windows: only Windows Terminal, ConEmu, ANSICON or a Unix-like shell
    if sys.platform == "win32":
        return bool(
            os.environ.get("WT_SESSION")
            or os.environ.get("ANSICON")
            or os.environ.get("ConEmuANSI") == "ON"
            or "TERM" in os.environ
        )
    return True


class LogColors:
    """ANSI color codes for colorized logging output."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    # Log level colors
    DEBUG = '\033[36m'      # Cyan
    INFO = '\033[32m'       # Green
    WARNING = '\033[33m'    # Yellow
    ERROR = '\033[31m'      # Red
    CRITICAL = '\033[35m'   # Magenta
    # Component colors
    MODULE = '\033[94m'     # Blue


class ColoredFormatter(logging.Formatter):
    """Formatter rendering ``[LEVEL] logger - message``, colored when enabled.

    Set NO_COLOR=1 to disable colors, or FORCE_COLOR=1 to force enable.
    """

    LEVEL_COLORS = {
        'DEBUG': LogColors.DEBUG,
        'INFO': LogColors.INFO,
        'WARNING': LogColors.WARNING,
        'ERROR': LogColors.ERROR,
        'CRITICAL': LogColors.CRITICAL,
    }

    def __init__(self, use_color: bool = True) -> None:
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        if not self.use_color:
            return f"[{record.levelname}] {record.name} - {message}"
        level_color = self.LEVEL_COLORS.get(record.levelname, LogColors.RESET)
        colored_levelname = f"{level_color}{LogColors.BOLD}[{record.levelname}]{LogColors.RESET}"
        colored_module = f"{LogColors.MODULE}{record.name}{LogColors.RESET}"
        return f"{colored_levelname} {colored_module} - {message}"


def configure_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> None:
    """Configure logging with colored output for the CLI.

    This function sets up:
    - Console output on stderr, keeping stdout free for command results
    - INFO level by default (configurable)
    - Suppression of urllib3 connection pool logs (WARNING+ only)

    Args:
        level: Logging level (default: logging.INFO).
        stream: Output stream (default: sys.stderr).

    Example:
        >>> from owm_client.utils.logging_config import configure_logging
        >>> configure_logging(logging.DEBUG)
    """
    stream = stream or sys.stderr
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()
    console_handler = logging.StreamHandler(stream)
    console_handler.setLevel(level)
    console_handler.setFormatter(ColoredFormatter(use_color=_supports_ansi(stream)))
    root_logger.addHandler(console_handler)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


__all__ = ["LogColors", "ColoredFormatter", "configure_logging"]
