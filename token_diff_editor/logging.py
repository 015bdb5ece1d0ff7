"""Logging setup for the token_diff_editor package.

Stdout carries the MCP protocol, so every handler installed here writes to
stderr.
"""

import logging
import sys

PACKAGE_LOGGER = "token_diff_editor"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_HANDLER_NAME = "token_diff_editor.stderr"


def setup_logging(level: int | str = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logger.propagate = False

    for existing in logger.handlers:
        if existing.get_name() == _HANDLER_NAME:
            return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
