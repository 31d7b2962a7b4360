"""Numeric coercion and rounding shared by the engine and adapters."""

import math


def to_float(value: object) -> float:
    """Coerce a loosely typed number, treating missing or malformed values as zero.

    Booleans, unparsable strings, ``None`` and non-finite numbers all give 0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def round_half_up(value: float, decimals: int = 0) -> float:
    """Round to ``decimals`` places with exact halves going up."""
    factor = 10**decimals
    return math.floor(value * factor + 0.5) / factor
