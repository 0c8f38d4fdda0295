"""Enums for fit-related categories."""

from enum import Enum


class Flexibility(str, Enum):
    """Rider flexibility bucket."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def from_level(cls, level: int | None) -> "Flexibility":
        """Map the legacy 1-3 scale: 1 -> low, 3 -> high, anything else -> medium."""
        if level == 1:
            return cls.LOW
        if level == 3:
            return cls.HIGH
        return cls.MEDIUM


class RidingStyle(str, Enum):
    """Riding posture preference."""

    COMFORT = "comfort"
    ENDURANCE = "endurance"
    RACE = "race"

class BarCategory(str, Enum):
    """Handlebar reach bucket (clamp to hood)."""

    SHORT = "short"
    MED = "med"
    LONG = "long"


class PainPoint(str, Enum):
    """Where the rider reports discomfort."""

    HANDS = "hands"
    NECK = "neck"
    BACK = "back"
    SADDLE = "saddle"


class DeltaColor(str, Enum):
    """Severity band for a cockpit delta."""

    GREEN = "green"
    AMBER = "amber"
    RED = "red"


class FitFlag(str, Enum):
    """Diagnostic flags raised by the legacy adapter."""

    FRAME_MAYBE_TOO_LONG = "frame_maybe_too_long"
    FRAME_MAYBE_TOO_SHORT = "frame_maybe_too_short"
    CONSIDER_BAR_CHANGE = "consider_bar_change"
