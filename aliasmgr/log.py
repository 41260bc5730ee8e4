"""Logging configuration for aliasmgr.

Log records go to stderr through rich so stdout stays free for command
output and `aliasmgr sync` statements.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(*, verbose: bool = False, debug: bool = False, quiet: bool = False) -> None:
    """Install the stderr handler and set the aliasmgr level.

    Args:
        verbose: Show INFO records.
        debug: Show DEBUG records. Wins over verbose.
        quiet: Only show errors. Wins over both.
    """
    if quiet:
        level = logging.ERROR
    elif debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    app_logger = logging.getLogger("aliasmgr")
    app_logger.handlers.clear()
    app_logger.addHandler(handler)
    app_logger.setLevel(level)
    app_logger.propagate = False
