"""Coercion and rounding for fit measurements.

Stored bike rows hand back numbers as strings, empty strings or NULLs, so
readers go through ``safe_float``. Every integer the engine, adapter and
projector report goes through ``round_half_up``.
"""

import math
from typing import Any


def safe_float(val: Any, default: float = 0.0) -> float:
    """Coerce a stored value to float, falling back to ``default``.

    >>> safe_float("72.5")
    72.5
    >>> safe_float("", default=-1.0)
    -1.0
    """
    if val is None or val == "":
        return default
    try:
        return float(val)
    except (ValueError, TypeError):
        return default


def round_half_up(value: float) -> int:
    """Round to the nearest integer, sending .5 upwards.

    The built-in ``round`` uses banker's rounding (``round(64.5) == 64``),
    which would shift reported stem bases and deltas by a millimetre.

    Examples:
        >>> round_half_up(64.5)
        65
        >>> round_half_up(-2.5)
        -2
    """
    return int(math.floor(value + 0.5))


def is_absent(val: Any) -> bool:
    """True when a measurement is missing (None) or zero."""
    return val is None or val == 0
