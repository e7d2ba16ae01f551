# -*- coding: utf-8 -*-
"""
Logging Configuration - Console and file handlers for the bsar_geometry logger.

Library modules only create named loggers; nothing is configured on
import. Applications call setup_logging() once to see engine messages.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

import logging
import sys
from typing import Optional

#: Name of the package logger, parent of every module logger
LOGGER_NAME = "bsar_geometry"

#: Time - Module - Level - Message
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure the 'bsar_geometry' namespace logger.

    Existing handlers are removed first so repeated calls do not
    duplicate output.

    Parameters
    ----------
    level : int
        Logging level (e.g. logging.DEBUG, logging.INFO). Default INFO.
    log_file : str, optional
        Path of a file that also receives the log records.

    Returns
    -------
    logging.Logger
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger


__all__ = [
    "LOGGER_NAME",
    "LOG_FORMAT",
    "setup_logging",
]
