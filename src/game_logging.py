"""logging configuration for the 2048 engine and its scripts"""

import logging
import os
import sys
from typing import Optional


LOG_LEVEL_ENV = "GAME2048_LOG_LEVEL"

FORMATS = {
    "simple": "%(name)s - %(levelname)s - %(message)s",
    "detailed": "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s",
}


def setup_logging(level: Optional[str] = None, format_style: str = "simple") -> None:
    """
    configure the root logger for scripts that drive the game

    args:
        level: logging level name (DEBUG, INFO, ...), falls back to the
            GAME2048_LOG_LEVEL environment variable, then INFO
        format_style: "simple" or "detailed"
    """
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, "INFO")
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    log_format = FORMATS.get(format_style, FORMATS["simple"])

    logging.basicConfig(
        level=numeric_level,
        format=log_format,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """logger for a module, name is usually __name__"""
    return logging.getLogger(name)
