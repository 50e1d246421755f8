"""
Logging for entity-to-model.

Modules log through get_logger(__name__); nothing is printed unless the
hosting tool calls setup_logging(). Fix declines are logged at DEBUG, so
they only show up with verbose=True.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "entity_to_model"

FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _level(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    return logging.DEBUG if verbose else logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Attach a rich console handler (and optionally a file handler) to the
    package logger.

    Calling it again replaces the handlers from the previous call. The
    package logger stops propagating so host applications with their own
    root configuration do not print every record twice.

    Args:
        verbose: DEBUG level, with source paths and locals in tracebacks
        quiet: ERROR level only; wins over verbose
        log_file: Also append plain-text records to this file

    Returns:
        The configured entity_to_model logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(_level(verbose, quiet))
    logger.handlers.clear()

    logger.addHandler(
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_path=verbose,
        )
    )

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Module logger under the entity_to_model namespace.

    Args:
        name: Usually __name__; names outside the package are prefixed
            with "entity_to_model."

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
