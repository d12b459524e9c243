"""Logging configuration for agent-smith."""

import logging
import sys
from pathlib import Path
from typing import TextIO


LOGGER_NAME = "agent_smith"


def setup_logging(
    verbosity: int = 0,
    log_file: Path | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Configure and return the logger for agent-smith.

    Args:
        verbosity: -1 for quiet (WARNING+), 0 for normal (INFO), 1 for verbose (DEBUG)
        log_file: Optional path to append logs to
        stream: Console stream, stdout when not given

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    logger.handlers.clear()

    console_handler = logging.StreamHandler(stream or sys.stdout)
    if verbosity < 0:
        console_handler.setLevel(logging.WARNING)
    elif verbosity > 0:
        console_handler.setLevel(logging.DEBUG)
    else:
        console_handler.setLevel(logging.INFO)

    # Level prefix only when verbose
    if verbosity > 0:
        console_fmt = logging.Formatter("%(levelname)s: %(message)s")
    else:
        console_fmt = logging.Formatter("%(message)s")
    console_handler.setFormatter(console_fmt)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setLevel(logging.DEBUG)
        file_fmt = logging.Formatter(
            "%(asctime)s %(levelname)s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        file_handler.setFormatter(file_fmt)
        logger.addHandler(file_handler)

    return logger


def get_logger() -> logging.Logger:
    """Get the agent_smith logger instance."""
    return logging.getLogger(LOGGER_NAME)
