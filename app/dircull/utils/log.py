"""Logging setup for a dircull run.

The CLI builds one logger per run and hands it to every component.
Nothing here touches the root logger, so embedding applications keep
their own logging configuration.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "dircull.run"

# Verbosity 0 is the default: warnings and errors only
_LEVELS: tuple[int, ...] = (
    logging.CRITICAL,
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
)
_DEFAULT_INDEX = 2


def verbosity_to_level(verbose: int = 0, quiet: int = 0) -> int:
    """Map -v/-q counts to a logging level.

    Each -v lowers the threshold by one level (INFO, then DEBUG), each -q
    raises it (ERROR, then CRITICAL).
    """
    index = min(max(_DEFAULT_INDEX + verbose - quiet, 0), len(_LEVELS) - 1)
    return _LEVELS[index]


def configure_logging(level: int, console: Console | None = None) -> logging.Logger:
    """Create the run logger writing through Rich.

    Calling this again replaces the handler of the previous run.

    Args:
        level: Logging level threshold.
        console: Console to log to (defaults to a new stderr console).

    Returns:
        Configured logger for the run.
    """
    log = logging.getLogger(LOGGER_NAME)
    for handler in list(log.handlers):
        log.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setLevel(level)
    log.addHandler(handler)
    log.setLevel(level)
    log.propagate = False
    return log
