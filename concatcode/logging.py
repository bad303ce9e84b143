"""Console reporting for concatcode runs.

Progress lines, warnings and debug detail all go to stderr so that stdout only
carries the final success line printed by the CLI.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

_LOGGER_NAME = "concatcode"
_PREFIX = "[concatcode]"


class ConsoleFormatter(logging.Formatter):
    """Renders progress lines bare and tags everything else with its level."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno == logging.INFO:
            return f"{_PREFIX} {message}"
        return f"{_PREFIX} {record.levelname.lower()}: {message}"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the ``concatcode`` hierarchy."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Route concatcode records to stderr (or ``stream``) and an optional log file.

    Calling this again replaces the handlers installed by the previous call.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console.setFormatter(ConsoleFormatter())
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["ConsoleFormatter", "configure_logging", "get_logger"]
