"""Logging configuration for the studyslots CLI."""

import logging
import sys


def configure_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure application-wide logging.

    Args:
        verbose: Log at DEBUG instead of WARNING

    Returns:
        Root logger instance
    """
    log_level = logging.DEBUG if verbose else logging.WARNING

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    return root_logger
