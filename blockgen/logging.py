"""Logging utilities for blockgen commands.

Stdout carries the emitted registry block, so every console record goes to
stderr. Verbose runs also show which pipeline stage logged the record.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_LOGGER_NAME = "blockgen"
_CONSOLE_FORMAT = "blockgen: %(levelname)s: %(message)s"
_VERBOSE_FORMAT = "blockgen[%(module_name)s]: %(levelname)s: %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _StageFilter(logging.Filter):
    """Expose the logger name relative to the package root as ``module_name``."""

    def filter(self, record: logging.LogRecord) -> bool:
        prefix = f"{_LOGGER_NAME}."
        name = record.name
        record.module_name = name[len(prefix):] if name.startswith(prefix) else name
        return True


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the blockgen hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route blockgen records to stderr, plus ``log_file`` when given."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Calling main() twice in one process must not stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.addFilter(_StageFilter())
    console.setFormatter(logging.Formatter(_VERBOSE_FORMAT if verbose else _CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
