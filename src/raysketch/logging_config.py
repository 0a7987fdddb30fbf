"""Logging setup for raysketch applications.

Library modules only create loggers with ``logging.getLogger(__name__)``;
applications call :func:`setup_logging` once to attach handlers.

Example:
    >>> from raysketch.logging_config import setup_logging
    >>> logger = setup_logging(level="DEBUG")
    >>> logger.info("tracing started")
"""

import logging
import sys

PACKAGE_LOGGER = "raysketch"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: str = "INFO", log_file: str | None = None) -> logging.Logger:
    """Configure the package logger.

    Existing handlers on the package logger are removed first, so calling
    this twice does not duplicate output.

    Args:
        level: Logging level name ("DEBUG", "INFO", "WARNING", ...).
        log_file: Optional path of a file that receives the same records.

    Returns:
        The configured ``raysketch`` logger.

    Raises:
        ValueError: If the level name is not a known logging level.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown logging level: {level}")

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric_level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
