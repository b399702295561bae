"""Parsing and formatting of byte sizes.

Sizes are accepted either as a bare number of bytes or with a unit
suffix. Decimal units (K, KB, M, MB, ...) are powers of 1000, binary
units (Ki, KiB, Mi, MiB, ...) are powers of 1024. Units are
case-insensitive and may be separated from the number by whitespace.
"""

import re
from decimal import Decimal

_SIZE_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?|\.\d+)\s*([a-z]*)\s*$", re.IGNORECASE)

_UNIT_PREFIXES: tuple[str, ...] = ("k", "m", "g", "t", "p", "e")


def _build_multipliers() -> dict[str, int]:
    multipliers: dict[str, int] = {"": 1, "b": 1}
    for power, prefix in enumerate(_UNIT_PREFIXES, start=1):
        multipliers[prefix] = 1000**power
        multipliers[f"{prefix}b"] = 1000**power
        multipliers[f"{prefix}i"] = 1024**power
        multipliers[f"{prefix}ib"] = 1024**power
    return multipliers


# Size multipliers for converting to bytes, keyed by lowercase unit
_SIZE_MULTIPLIERS: dict[str, int] = _build_multipliers()


def parse_size(size_str: str) -> int:
    """Parse a size string to a number of bytes.

    Args:
        size_str: Size string like "1024", "3K", "5MiB" or "1.5 GB".

    Returns:
        Size in bytes, rounded down to a whole byte.

    Raises:
        ValueError: If the string is not a valid size.
    """
    match = _SIZE_PATTERN.match(size_str)
    if not match:
        msg = f"Invalid size: {size_str!r}"
        raise ValueError(msg)

    number, unit = match.group(1), match.group(2).lower()
    multiplier = _SIZE_MULTIPLIERS.get(unit)
    if multiplier is None:
        msg = f"Unknown size unit {match.group(2)!r} in {size_str!r}"
        raise ValueError(msg)

    if "." in number:
        return int(Decimal(number) * multiplier)
    return int(number) * multiplier


def format_size(size_bytes: int | None) -> str:
    """Format byte count as human-readable string using binary units."""
    if size_bytes is None or size_bytes == 0:
        return "0 B"
    size = float(size_bytes)
    for unit in ("B", "KiB", "MiB", "GiB", "TiB"):
        if abs(size) < 1024:
            return f"{size:.1f} {unit}" if unit != "B" else f"{int(size)} B"
        size /= 1024
    return f"{size:.1f} PiB"
