"""Utility modules for dircull.

This module exports commonly used utility functions.
"""

from dircull.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from dircull.utils.log import configure_logging, verbosity_to_level

__all__ = [
    "configure_logging",
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "verbosity_to_level",
]
