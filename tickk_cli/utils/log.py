"""Logging setup for the command line."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "tickk_cli"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def resolve_level(config: Dict[str, Any], verbose: bool = False, quiet: bool = False) -> int:
    """Flags win over the configured level."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    name = str(config.get("logging", {}).get("level", "WARNING")).upper()
    return _LEVELS.get(name, logging.WARNING)


def configure_logging(level: int, console: Optional[Console] = None) -> logging.Logger:
    """Attach a single rich handler, writing to stderr, to the package logger."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
