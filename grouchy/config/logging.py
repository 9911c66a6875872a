"""
Logging configuration with a tagged console formatter and a CLI log file.

Usage:
    from grouchy.config.logging import get_logger
    logger = get_logger("voice.synthesizer")
    logger.info("Prediction created", extra={"job_id": "abc123"})
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from grouchy.config._sections import LoggingSettings

# ANSI color codes for console output
COLORS = {
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[35m",  # Magenta
    "RESET": "\033[0m",
}

# Top-level tag colors
TAG_COLORS = {
    "cli": "\033[94m",  # Blue
    "clients": "\033[95m",  # Magenta
    "conversation": "\033[96m",  # Cyan
    "voice": "\033[93m",  # Yellow
    "config": "\033[92m",  # Green
    "session": "\033[97m",  # White
}

# Libraries whose INFO chatter would drown the conversation
NOISY_LOGGERS = ["httpx", "httpcore", "asyncio"]

_initialized = False
_file_handler: logging.FileHandler | None = None


class ColoredConsoleFormatter(logging.Formatter):
    """Formatter that adds colors and a [tag] prefix built from the logger name."""

    def format(self, record: logging.LogRecord) -> str:
        level_color = COLORS.get(record.levelname, "")
        reset = COLORS["RESET"]

        tag = record.name
        tag_color = TAG_COLORS.get(tag.split(".")[0], "\033[37m")

        timestamp = datetime.now().strftime("%H:%M:%S")
        level_str = f"{level_color}{record.levelname:8}{reset}"
        tag_str = f"{tag_color}[{tag}]{reset}"

        extra_parts = []
        if getattr(record, "job_id", None):
            extra_parts.append(f"job={record.job_id}")
        if getattr(record, "turn", None):
            extra_parts.append(f"turn={record.turn}")

        extra_str = f" ({', '.join(extra_parts)})" if extra_parts else ""
        msg = f"{timestamp} {level_str} {tag_str} {record.getMessage()}{extra_str}"

        if record.exc_info:
            msg += "\n" + self.formatException(record.exc_info)

        return msg


def _get_console_level() -> int:
    level_name = os.getenv("LOG_LEVEL", "WARNING").upper()
    return getattr(logging, level_name, logging.WARNING)


def init_logging(console_level: int | None = None) -> None:
    """Install the colored console handler on the root logger (once)."""
    global _initialized

    if _initialized:
        return

    if console_level is None:
        console_level = _get_console_level()

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(ColoredConsoleFormatter())

    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(console_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _initialized = True


def configure_cli_logging(settings: LoggingSettings) -> Path:
    """Route records to the CLI log file, keeping only warnings on the console.

    The console carries the conversation (You: / replies), so everything at
    ``settings.level`` goes to the file and the terminal only sees WARNING and
    above. Calling it again replaces the previous file handler.

    Returns:
        Path to the log file
    """
    global _file_handler

    init_logging(console_level=logging.WARNING)

    log_file = Path(settings.file).expanduser()
    root_logger = logging.getLogger()
    if _file_handler is not None:
        root_logger.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None

    log_file.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(getattr(logging, settings.level.upper(), logging.INFO))
    file_handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    root_logger.addHandler(file_handler)
    _file_handler = file_handler

    return log_file


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    if not _initialized:
        init_logging()
    return logging.getLogger(name)
