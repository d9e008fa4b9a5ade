"""Logging setup for the visitor_bridge package.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed by the CLI (or the embedding host) through configure_logging.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "visitor_bridge"


def configure_logging(verbose: bool = False, console: Console | None = None) -> logging.Logger:
    """Attach a RichHandler to the package logger (idempotent)."""
    log = logging.getLogger(PACKAGE_LOGGER)
    log.setLevel(logging.DEBUG if verbose else logging.WARNING)

    for handler in list(log.handlers):
        if isinstance(handler, RichHandler):
            log.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    log.addHandler(handler)
    return log
