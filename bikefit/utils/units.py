"""Unit conversion utilities for bike fit calculations.

All fit math runs in millimetres. Rider measurements arrive in centimetres.
"""


def cm_to_mm(cm: float) -> float:
    """Convert centimetres to millimetres."""
    return cm * 10


def mm(value: float) -> float:
    """Identity for values already in millimetres (reads better at call sites)."""
    return value


def mm_to_cm(value_mm: float) -> float:
    """Convert millimetres to centimetres."""
    return value_mm / 10
