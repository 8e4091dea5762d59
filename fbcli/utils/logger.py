"""Shared logger initialization for the client and the CLI.

Usage:
    from fbcli.utils.logger import get_logger
    log = get_logger(__name__)
    log.info("message")
"""
from __future__ import annotations

import logging
from typing import Optional

from rich.logging import RichHandler

_DEFAULT_HANDLER = RichHandler(rich_tracebacks=True, markup=False, show_path=False)

_FORMAT = "%(message)s"  # rich handler already adds time & level


def configure_logging(level: int = logging.WARNING) -> None:
    """Idempotently attach the rich handler to the root logger."""
    root = logging.getLogger()
    if _DEFAULT_HANDLER in root.handlers:
        return
    root.setLevel(level)
    _DEFAULT_HANDLER.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(_DEFAULT_HANDLER)


def set_level(level: int) -> None:
    """Change the level of the root logger and the shared handler (used by --verbose)."""
    configure_logging(level)
    logging.getLogger().setLevel(level)
    _DEFAULT_HANDLER.setLevel(level)


def get_logger(name: str = __name__, level: Optional[int] = None) -> logging.Logger:
    """Return a module-level logger (configuring root on first call)."""
    configure_logging()
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger
