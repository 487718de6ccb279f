"""Unified logging configuration for Taifho.

Library modules only ever call ``logging.getLogger(__name__)``; handlers
are attached by entry points (scripts, test harnesses) through
:func:`setup_logging`.

Usage:
    from taifho.logging_config import setup_logging

    logger = setup_logging("run_ai_tournament", level="DEBUG")
    logger.info("Starting tournament")
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

__all__ = [
    "COMPACT_FORMAT",
    "DEFAULT_FORMAT",
    "DETAILED_FORMAT",
    "STRUCTURED_FORMAT",
    "LogContext",
    "get_logger",
    "setup_logging",
]

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
COMPACT_FORMAT = "%(levelname)s %(name)s: %(message)s"
DETAILED_FORMAT = (
    "%(asctime)s [%(levelname)s] %(name)s "
    "(%(filename)s:%(lineno)d): %(message)s"
)
STRUCTURED_FORMAT = (
    '{"time": "%(asctime)s", "level": "%(levelname)s", '
    '"logger": "%(name)s", "message": "%(message)s"}'
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_FORMATS = {
    "default": DEFAULT_FORMAT,
    "compact": COMPACT_FORMAT,
    "detailed": DETAILED_FORMAT,
    "structured": STRUCTURED_FORMAT,
}

# Default level for loggers configured without an explicit level.
DEFAULT_LEVEL = os.getenv("TAIFHO_LOG_LEVEL", "INFO").upper()


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = DEFAULT_LEVEL
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        return resolved if isinstance(resolved, int) else logging.INFO
    return level


def setup_logging(
    name: str,
    level: int | str | None = None,
    log_file: str | Path | None = None,
    log_dir: str | Path | None = None,
    console: bool = True,
    format_style: str = "default",
    propagate: bool = False,
) -> logging.Logger:
    """Configure and return a named logger.

    Args:
        name: Logger name
        level: Level as int or name; defaults to ``TAIFHO_LOG_LEVEL``
        log_file: Explicit file to append to
        log_dir: Directory in which ``<name>.log`` is created
        console: Attach a stream handler
        format_style: One of default, compact, detailed, structured;
            unknown styles use the default format
        propagate: Whether records also reach ancestor loggers

    Returns:
        The configured logger. Repeated calls do not duplicate handlers.
    """
    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level(level))
    logger.propagate = propagate

    formatter = logging.Formatter(
        _FORMATS.get(format_style, DEFAULT_FORMAT), datefmt=DATE_FORMAT
    )

    if console and not any(
        type(h) is logging.StreamHandler for h in logger.handlers
    ):
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    if log_file is None and log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        log_file = log_path / f"{name}.log"

    if log_file is not None:
        log_file = Path(log_file)
        existing = {
            h.baseFilename
            for h in logger.handlers
            if isinstance(h, logging.FileHandler)
        }
        if os.path.abspath(log_file) not in existing:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` without touching its handlers."""
    return logging.getLogger(name)


class LogContext:
    """Temporarily change a logger's level.

    Usage:
        with LogContext(logger, logging.DEBUG):
            get_best_move(board, color, config)
    """

    def __init__(self, logger: logging.Logger, level: int | str) -> None:
        self.logger = logger
        self.level = _resolve_level(level)
        self._previous = logger.level

    def __enter__(self) -> logging.Logger:
        self._previous = self.logger.level
        self.logger.setLevel(self.level)
        return self.logger

    def __exit__(self, exc_type, exc, tb) -> None:
        self.logger.setLevel(self._previous)
