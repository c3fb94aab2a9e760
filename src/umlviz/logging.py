"""Logging setup for umlviz commands."""

import logging

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "umlviz"

_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def configure_logging(level: str = "info", *, verbose: bool = False, console: Console | None = None) -> logging.Logger:
    """Install a rich handler on the umlviz logger.

    Args:
        level: Level name from the configuration (error, warn, info, debug)
        verbose: Force DEBUG regardless of level
        console: Console to write to (default: stderr)
    """
    resolved = logging.DEBUG if verbose else _LEVELS.get(str(level).lower(), logging.INFO)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(resolved)
    logger.propagate = False

    # Reset handlers so repeated CLI invocations do not duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=verbose,
        markup=False,
    )
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)

    return logger


__all__ = ["configure_logging"]
