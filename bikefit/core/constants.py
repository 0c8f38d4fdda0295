"""Fixed lookup tables for the fit engine, adapter and cockpit projector.

Every constant here is a physical or visual convention, not configuration.
"""

from bikefit.core.enums import BarCategory, DeltaColor, Flexibility, RidingStyle

# =============================================================================
# Fit engine
# =============================================================================

# Standard stem lengths available in the market (mm), ascending
STEM_SIZES_MM: tuple[int, ...] = (50, 60, 70, 80, 90, 100, 110, 120)

# Allowed substitutes around a snapped stem (inclusive, mm)
STEM_ALLOWED_WINDOW_MM = 10

# Anthropometric regression for base reach (applied to mm values)
TORSO_REACH_FACTOR = 0.43
ARM_REACH_FACTOR = 0.35

FLEXIBILITY_ADJUSTMENTS_MM: dict[Flexibility, int] = {
    Flexibility.LOW: -15,
    Flexibility.MEDIUM: 0,
    Flexibility.HIGH: 10,
}

RIDING_STYLE_ADJUSTMENTS_MM: dict[RidingStyle, int] = {
    RidingStyle.COMFORT: -20,
    RidingStyle.ENDURANCE: 0,
    RidingStyle.RACE: 15,
}

# Saddle-to-hood drop by riding style: (min, max) in mm
DROP_RANGES_MM: dict[RidingStyle, tuple[int, int]] = {
    RidingStyle.COMFORT: (10, 20),
    RidingStyle.ENDURANCE: (20, 40),
    RidingStyle.RACE: (50, 80),
}

# Target reach tolerance (+/- mm around the mid value)
REACH_TOLERANCE_MM = 5

# Spacer band around the current stack (+/- mm) and fallback when unknown
SPACER_ADJUST_WINDOW_MM = 20
DEFAULT_SPACER_MM = 20

# Confidence scoring
CONFIDENCE_PENALTY_PER_FIELD = 0.15
CONFIDENCE_FLOOR = 0.3
CONFIDENCE_CEILING = 1.0

# =============================================================================
# Hood offsets
# =============================================================================

# Bar clamp centre to hand position on the hood, used for fit math (mm).
# Shared by the engine default and the legacy adapter's effective reach.
DEFAULT_HOOD_REACH_OFFSET_MM = 10

# Bar clamp to hood trough as drawn by the cockpit projector (mm). Not the
# same quantity as DEFAULT_HOOD_REACH_OFFSET_MM: it also counts the lever body.
DISPLAY_HOOD_OFFSET_MM = 25

# Visual rise of the hood marker above the bar line (px, not a measurement)
HOOD_RISE_PX = 35

# =============================================================================
# Legacy adapter
# =============================================================================

BAR_REACH_MM: dict[BarCategory, int] = {
    BarCategory.SHORT: 72,
    BarCategory.MED: 78,
    BarCategory.LONG: 86,
}

# Nominal catalog ranges shown next to each bar category (mm)
BAR_REACH_RANGES_MM: dict[BarCategory, tuple[int, int]] = {
    BarCategory.SHORT: (70, 75),
    BarCategory.MED: (75, 80),
    BarCategory.LONG: (85, 95),
}

# Stem lengths at which the adapter treats the stem as pinned
STEM_PINNED_MIN_MM = 50
STEM_PINNED_MAX_MM = 110

# Legacy confidence percentage scale: 40 + confidence * 55
LEGACY_CONFIDENCE_BASE = 40
LEGACY_CONFIDENCE_SPAN = 55

# Range half-widths used when the engine gives no band (mm)
LEGACY_STEM_RANGE_HALF_WIDTH_MM = 5
LEGACY_SPACER_RANGE_HALF_WIDTH_MM = 5

# =============================================================================
# Cockpit projector
# =============================================================================

CANVAS_WIDTH_PX = 720
CANVAS_HEIGHT_PX = 420
CANVAS_PADDING_PX = 40

# Extra room around the largest extent when fitting to the canvas (mm)
REACH_EXTENT_PADDING_MM = 80
STACK_EXTENT_PADDING_MM = 60

# Delta severity thresholds (|delta| in mm)
DELTA_GREEN_MAX_MM = 10
DELTA_AMBER_MAX_MM = 25
DELTA_PERFECT_MAX_MM = 3

DELTA_COLORS: dict[DeltaColor, str] = {
    DeltaColor.GREEN: "#10B981",
    DeltaColor.AMBER: "#F59E0B",
    DeltaColor.RED: "#EF4444",
}

COCKPIT_COLORS: dict[str, str] = {
    "current": "#9CA3AF",
    "target": "#2563EB",
    "grid": "rgba(0,0,0,0.06)",
    "frame": "#6B7280",
}
