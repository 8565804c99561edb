"""Logging setup: Rich console handler on the root logger.

Modules log through ``logging.getLogger(__name__)``; only the CLI entry
point calls :func:`setup_logging`.  Logs go to stderr so they never mix
with the live frame drawn on stdout.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(log_level: str = "INFO") -> None:
    """Install a RichHandler at ``log_level`` on the root logger."""
    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
    )
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
