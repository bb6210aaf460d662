# -*- coding: utf-8 -*-
"""
Logging setup for the duf_morph_export namespace.
Console (stdout) handler always; file handler when a log path is given.
"""
import logging
import sys
from typing import Optional

LOGGER_NAME = "duf_morph_export"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def get_logger(module_name: str) -> logging.Logger:
    """Child logger of the package namespace, e.g. duf_morph_export.resolve_morphs."""
    return logging.getLogger(f"{LOGGER_NAME}.{module_name}")


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the duf_morph_export logger.

    Args:
        level: logging level (logging.DEBUG, logging.INFO, ...)
        log_file: optional path; written with mode 'w' in UTF-8.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Re-running main() in one process (tests) must not stack handlers
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
