"""Logging configuration for the ``gex`` command.

Library modules only ever call ``logging.getLogger(__name__)``; handlers
are installed here, once, by the CLI entry point.
"""

from __future__ import annotations

import logging

LOG_FORMAT: str = "%(name)s: %(message)s"


def _level(verbosity: int) -> int:
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(verbosity: int = 0) -> None:
    """Route ``garden_examiner`` logging to stderr.

    ``-v`` enables INFO and ``-vv`` DEBUG.  Rich's handler is used when
    available, a plain stream handler otherwise.
    """
    try:
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(f"%(levelname)s {LOG_FORMAT}"))
    else:
        from garden_examiner.cli.console import get_rich_console

        handler = RichHandler(console=get_rich_console(), show_path=False)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("garden_examiner")
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(_level(verbosity))
    logger.propagate = False
