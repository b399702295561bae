"""dircull - Keep a directory tree within a size budget.

Deletes the oldest files of a directory tree until its total size
is at or below a configured maximum.
"""

__version__ = "0.1.0"
