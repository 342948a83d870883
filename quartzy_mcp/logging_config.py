"""
Logging configuration for the Quartzy MCP server.

Console output goes to stderr because stdout carries the stdio transport.
Set QUARTZY_LOG_FILE to also write rotating logs to disk.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

ROOT_LOGGER_NAME = "quartzy_mcp"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_BYTES = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5


def _resolve_level() -> int:
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    return getattr(logging, log_level, logging.INFO)


def setup_logging(log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """
    Configure the quartzy_mcp logger tree.

    With a log file, the file receives everything at LOG_LEVEL and the console
    only warnings and errors; without one, the console gets LOG_LEVEL.
    """
    level = _resolve_level()

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path,
            maxBytes=MAX_BYTES,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        console_handler.setLevel(logging.WARNING)
    else:
        console_handler.setLevel(level)

    logger.addHandler(console_handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the quartzy_mcp namespace."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
