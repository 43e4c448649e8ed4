"""Console logging with colored level tags for applications using the client."""
from __future__ import annotations
import logging
import os
import sys
from typing import Optional, TextIO


def supports_ansi(stream: Optional[TextIO] = None) -> bool:
    """Detect if ``stream`` (stdout by default) supports ANSI escape codes.

    ``NO_COLOR`` disables colors and ``FORCE_COLOR`` enables them regardless
    of the stream (https://no-color.org/).
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    stream = stream or sys.stdout
    if not hasattr(stream, "isatty") or not stream.isatty():
        return False
    if sys.platform == "win32":
        return bool(
            os.environ.get("WT_SESSION")  # Windows Terminal
            or os.environ.get("ANSICON")
            or "TERM" in os.environ  # Git Bash, Cygwin
        )
    return True


_LEVEL_COLORS = {
    "DEBUG": "\033[36m",     # Cyan
    "INFO": "\033[32m",      # Green
    "WARNING": "\033[33m",   # Yellow
    "ERROR": "\033[31m",     # Red
    "CRITICAL": "\033[35m",  # Magenta
}
_RESET = "\033[0m"
_BOLD = "\033[1m"
_MODULE = "\033[94m"  # Blue


class ColoredFormatter(logging.Formatter):
    """Format records as ``[LEVEL] logger - message`` with optional colors."""

    def __init__(self, use_color: bool = True) -> None:
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        if not self.use_color:
            return f"[{record.levelname}] {record.name} - {message}"
        level_color = _LEVEL_COLORS.get(record.levelname, _RESET)
        return (
            f"{level_color}{_BOLD}[{record.levelname}]{_RESET} "
            f"{_MODULE}{record.name}{_RESET} - {message}"
        )


def configure_logging(level: Optional[int] = None, stream: Optional[TextIO] = None) -> None:
    """Configure root logging with colored console output.

    Existing root handlers are replaced and ``urllib3`` connection chatter is
    limited to WARNING and above.

    Args:
        level: Logging level. Defaults to ``ENVDATA_LOG_LEVEL`` from settings.
        stream: Output stream (default: sys.stdout).

    Example:
        >>> from envdata.utils.logging_config import configure_logging
        >>> configure_logging(logging.DEBUG)
    """
    if level is None:
        from envdata.config import get_settings

        level = get_settings().log.level
    stream = stream or sys.stdout
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(stream)
    console_handler.setLevel(level)
    console_handler.setFormatter(ColoredFormatter(use_color=supports_ansi(stream)))
    root_logger.addHandler(console_handler)

    logging.getLogger("urllib3").setLevel(logging.WARNING)


__all__ = ["ColoredFormatter", "configure_logging", "supports_ansi"]
