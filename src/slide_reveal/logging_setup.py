"""Console logging setup for the CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "slide_reveal"


def configure_logging(verbose: bool = False, console: Console | None = None) -> logging.Logger:
    """Route package logs to a rich stderr handler. Safe to call more than once."""
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    return logger
