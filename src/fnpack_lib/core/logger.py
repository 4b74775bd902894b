# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from .config import CFG


def is_debug_mode() -> bool:
    """Return True if fnpack debug mode is enabled via the environment."""
    return os.environ.get(CFG.env_vars.debug_mode) is not None


def get_logger(name: str, show_time: bool = False) -> logging.Logger:
    """
    Return a logger with unified formatting, writing to stderr through rich's RichHandler.

    Calling the function repeatedly for the same name reconfigures the logger
    instead of attaching another handler.
    """
    logger = logging.getLogger(name)
    level = logging.DEBUG if is_debug_mode() else logging.INFO
    logger.setLevel(level)

    for old_handler in [h for h in logger.handlers if isinstance(h, RichHandler)]:
        logger.removeHandler(old_handler)

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
        show_level=True,
        show_time=show_time or is_debug_mode(),
        log_time_format=CFG.date_formats.standard,
        markup=False,
        tracebacks_width=None,
        tracebacks_code_width=None,
    )

    handler.setLevel(level)
    logger.addHandler(handler)
    logger.propagate = False

    return logger
