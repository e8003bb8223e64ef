"""Logging setup: stdlib logging rendered through rich on stderr."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level_name: str = "WARNING") -> None:
    """Route readyscan logs to stderr.

    Safe to call repeatedly; an existing handler only has its level updated.
    """
    level = getattr(logging, level_name.upper(), logging.WARNING)
    logger = logging.getLogger("readyscan")
    logger.setLevel(level)

    for handler in logger.handlers:
        if isinstance(handler, RichHandler):
            handler.setLevel(level)
            return

    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
