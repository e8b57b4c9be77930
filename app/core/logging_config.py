"""
Logging setup for the recruiting API.

Configures the root logger with a console handler and, when a log file
is configured, a file handler. Safe to call more than once: handlers are
attached only the first time.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """
    Configure the root logger.

    Args:
        level: Logging level name, case insensitive ("debug", "INFO", ...)
        logfile: Optional path for an extra file handler
    """
    logger = logging.getLogger()
    if logger.handlers:
        # Already configured (uvicorn reload, test sessions)
        return

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
