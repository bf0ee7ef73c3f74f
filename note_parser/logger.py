"""
Logging for note_parser.

Everything logs under the "note_parser" logger; each module gets a child
("note_parser.extractor", "note_parser.page", ...) via get_module_logger.
"""

import logging
import sys
from typing import Optional


def setup_logger(
    name: str = "note_parser",
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure the package logger.

    The first call attaches a stdout handler and, when log_file is given, a
    UTF-8 file handler (article titles and tags are Japanese). Later calls
    never add handlers: they only move the logger and its existing handlers
    to the new level, which is how NoteParser(log_level=...) applies the
    -v flag of run_extractor.py.

    Args:
        name: Logger name (default: the package logger)
        level: Level for the logger and its handlers
        log_file: Optional path of a log file, only honored on the first call

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    logger.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


# Package logger, configured at import time with the stdout handler only
logger = setup_logger()


def get_module_logger(module_name: str) -> logging.Logger:
    """
    Return "note_parser.<module_name>".

    The child has no handlers of its own; records propagate to the package
    logger, so the %(name)s field tells which stage (segments, extractor,
    page, validator, ...) wrote them.
    """
    return logging.getLogger(f"note_parser.{module_name}")
