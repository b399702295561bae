"""CLI package for dircull.

This package contains the Typer application.
"""

from dircull.cli.main import app

__all__ = ["app"]
