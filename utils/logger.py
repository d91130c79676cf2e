# -*- coding: utf-8 -*-
"""
Logging configuration.

All engine modules log through children of the "wizard" logger, e.g.
"wizard.ui.wizards.framework.step_navigator".
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

ROOT_LOGGER_NAME = "wizard"

_logger: Optional[logging.Logger] = None


def setup_logger(console_level: Optional[str] = None,
                 log_to_file: Optional[bool] = None) -> logging.Logger:
    """
    Configure the wizard logger.

    Args:
        console_level: Overrides Config.LOG_LEVEL for the stdout handler
        log_to_file: Overrides Config.LOG_TO_FILE for the rotating file handler
    """
    global _logger

    # Import here to avoid circular imports
    from app.config import Config

    if console_level is None:
        console_level = Config.LOG_LEVEL
    if log_to_file is None:
        log_to_file = Config.LOG_TO_FILE

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.handlers.clear()

    if log_to_file:
        Config.LOGS_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            Config.LOG_PATH,
            maxBytes=Config.LOG_MAX_BYTES,
            backupCount=Config.LOG_BACKUP_COUNT,
            encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, console_level.upper(), logging.INFO))
    console_handler.setFormatter(logging.Formatter("%(levelname)-8s | %(name)s | %(message)s"))
    logger.addHandler(console_handler)

    _logger = logger
    return logger


def get_logger(name: str) -> logging.Logger:
    """Child of the wizard logger; configures logging on first use."""
    global _logger

    if _logger is None:
        _logger = setup_logger()

    return _logger.getChild(name)
