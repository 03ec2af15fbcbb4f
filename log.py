#!/usr/bin/env python3
"""Logging setup for mailcal.

File logging always goes to a daily-rotated file. Console output is only
attached for the non-interactive CLI modes; the curses UI owns the
terminal and must never be written to by a log handler.
"""

from __future__ import annotations

import logging
import sys
import tempfile
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional

from colorlog import ColoredFormatter

LOGGER_NAME = "mailcal"
FALLBACK_LOG_FILENAME = "mailcal.log"

_FILE_FORMAT = "[%(asctime)s] %(levelname)s in %(name)s [%(filename)s:%(lineno)d]: %(message)s"
_CONSOLE_FORMAT = "%(log_color)s[%(asctime)s] %(levelname)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(LOGGER_NAME)

_file_handler: Optional[logging.Handler] = None
_console_handler: Optional[logging.Handler] = None
active_log_file: Optional[Path] = None


def _writable_log_file(preferred: Path) -> Optional[Path]:
    candidates = (preferred, Path(tempfile.gettempdir()) / FALLBACK_LOG_FILENAME)
    for candidate in candidates:
        try:
            candidate.parent.mkdir(parents=True, exist_ok=True)
            with candidate.open("a", encoding="utf-8"):
                pass
        except OSError:
            continue
        return candidate
    return None


def _console_formatter() -> ColoredFormatter:
    return ColoredFormatter(
        _CONSOLE_FORMAT,
        datefmt=_DATE_FORMAT,
        log_colors={
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "bold_red",
        },
    )


def setup_logging(
    log_path: Optional[Path] = None,
    *,
    debug: bool = False,
    console: bool = False,
) -> logging.Logger:
    """Configure the application logger. Safe to call more than once."""
    global _file_handler, _console_handler, active_log_file

    level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(level)
    logger.propagate = False

    if log_path is not None and _file_handler is None:
        target = _writable_log_file(Path(log_path).expanduser())
        if target is not None:
            handler = TimedRotatingFileHandler(
                target,
                when="midnight",
                interval=1,
                backupCount=7,
                encoding="utf-8",
            )
            handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT))
            logger.addHandler(handler)
            _file_handler = handler
            active_log_file = target

    if console and _console_handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_console_formatter())
        logger.addHandler(handler)
        _console_handler = handler

    for handler in (_file_handler, _console_handler):
        if handler is not None:
            handler.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not name:
        return logger
    return logger.getChild(name)


__all__ = ["logger", "setup_logging", "get_logger", "LOGGER_NAME"]
