"""Logging setup for the ``cipherlab`` logger namespace."""

import logging

from rich.console import Console
from rich.logging import RichHandler

from cipherlab.core.config import get_settings

LOGGER_NAME = "cipherlab"


class _ConsoleHandler(RichHandler):
    """Rich console handler writing to stderr, tagged so it is added once."""

    def __init__(self, **kwargs) -> None:
        super().__init__(
            console=Console(stderr=True),
            show_path=False,
            show_time=True,
            rich_tracebacks=True,
            markup=False,
            **kwargs,
        )


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """
    Attach a Rich console handler to the package logger.

    Calling this more than once only updates the level. The root logger
    is left alone so applications keep control of their own handlers.

    Args:
        level: Logging level name or number; defaults to ``Settings.log_level``

    Returns:
        The configured package logger
    """
    if level is None:
        level = get_settings().log_level
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if not any(isinstance(h, _ConsoleHandler) for h in logger.handlers):
        logger.addHandler(_ConsoleHandler())

    return logger
