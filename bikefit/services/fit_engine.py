"""Centralized bike fit calculation engine (v1).

Maps rider anthropometrics, frame geometry and the current cockpit to a
target reach band, a target drop range, a snapped stem length, a spacer
recommendation and a confidence score.

The engine is total: missing measurements (``None`` or ``0``) never raise.
They are substituted with zero, lower the confidence by 0.15 each and add a
note naming the field.
"""

import logging

from bikefit.core.constants import (
    ARM_REACH_FACTOR,
    CONFIDENCE_CEILING,
    CONFIDENCE_FLOOR,
    CONFIDENCE_PENALTY_PER_FIELD,
    DEFAULT_HOOD_REACH_OFFSET_MM,
    DEFAULT_SPACER_MM,
    DROP_RANGES_MM,
    FLEXIBILITY_ADJUSTMENTS_MM,
    REACH_TOLERANCE_MM,
    RIDING_STYLE_ADJUSTMENTS_MM,
    SPACER_ADJUST_WINDOW_MM,
    STEM_ALLOWED_WINDOW_MM,
    STEM_SIZES_MM,
    TORSO_REACH_FACTOR,
)
from bikefit.models.fit import (
    CurrentSetup,
    DropRange,
    FitRecommendation,
    FrameGeometry,
    ReachBand,
    RiderProfile,
    SpacerRecommendation,
    StemRecommendation,
)
from bikefit.utils.converters import is_absent, round_half_up
from bikefit.utils.units import cm_to_mm

logger = logging.getLogger(__name__)

SPACER_FALLBACK_NOTE = (
    "Insufficient data for precise spacer calculation; using current setup"
)


def compute_fit_recommendation(
    rider: RiderProfile,
    frame: FrameGeometry,
    current: CurrentSetup,
) -> FitRecommendation:
    """Compute a cockpit recommendation for a rider on a frame.

    Example:
        >>> rec = compute_fit_recommendation(
        ...     RiderProfile(torso_length_cm=60, arm_length_cm=65),
        ...     FrameGeometry(stack_mm=590, reach_mm=386),
        ...     CurrentSetup(stem_length_mm=90, spacer_stack_mm=20, bar_reach_mm=80),
        ... )
        >>> rec.target_reach.mid_mm, rec.stem.snapped_mm
        (486, 50)
    """
    notes: list[str] = []

    base_reach = calculate_base_reach(rider)
    adjustments = (
        FLEXIBILITY_ADJUSTMENTS_MM[rider.flexibility]
        + RIDING_STYLE_ADJUSTMENTS_MM[rider.riding_style]
    )
    target_reach_mid = base_reach + adjustments

    drop_min, drop_max = DROP_RANGES_MM[rider.riding_style]

    hood_offset = current.hood_reach_offset_mm
    if hood_offset is None:
        hood_offset = DEFAULT_HOOD_REACH_OFFSET_MM
    stem_basis = target_reach_mid - (
        (frame.reach_mm or 0) + (current.bar_reach_mm or 0) + hood_offset
    )
    snapped_stem = snap_stem_length(stem_basis)

    spacers = calculate_spacer_recommendation(frame, current, notes)
    confidence = calculate_confidence(rider, frame, current, notes)

    logger.debug(
        "fit computed reach_mid=%.1f stem_basis=%.1f stem=%d confidence=%.2f",
        target_reach_mid,
        stem_basis,
        snapped_stem,
        confidence,
    )

    return FitRecommendation(
        target_reach=ReachBand(
            min_mm=round_half_up(target_reach_mid - REACH_TOLERANCE_MM),
            mid_mm=round_half_up(target_reach_mid),
            max_mm=round_half_up(target_reach_mid + REACH_TOLERANCE_MM),
        ),
        target_drop=DropRange(min_mm=drop_min, max_mm=drop_max),
        stem=StemRecommendation(
            snapped_mm=snapped_stem,
            allowed_mm=get_allowed_stems(snapped_stem),
            basis_mm=round_half_up(stem_basis),
        ),
        spacers=spacers,
        confidence=confidence,
        notes=notes,
    )


def calculate_base_reach(rider: RiderProfile) -> float:
    """Base reach (mm) before adjustments: torso_mm * 0.43 + arm_mm * 0.35."""
    torso_mm = cm_to_mm(rider.torso_length_cm or 0)
    arm_mm = cm_to_mm(rider.arm_length_cm or 0)
    return torso_mm * TORSO_REACH_FACTOR + arm_mm * ARM_REACH_FACTOR


def snap_stem_length(basis_mm: float) -> int:
    """Snap a stem requirement to the nearest standard size.

    Equidistant candidates resolve to the longer stem (65 -> 70, 115 -> 120).
    """
    nearest = STEM_SIZES_MM[0]
    min_diff = abs(basis_mm - nearest)

    for size in STEM_SIZES_MM:
        diff = abs(basis_mm - size)
        if diff < min_diff or (diff == min_diff and size > nearest):
            nearest = size
            min_diff = diff

    return nearest


def get_allowed_stems(snapped_mm: float) -> list[int]:
    """Standard sizes within +/-10mm (inclusive) of the snapped stem."""
    low = snapped_mm - STEM_ALLOWED_WINDOW_MM
    high = snapped_mm + STEM_ALLOWED_WINDOW_MM
    return [size for size in STEM_SIZES_MM if low <= size <= high]


def calculate_spacer_recommendation(
    frame: FrameGeometry,
    current: CurrentSetup,
    notes: list[str],
) -> SpacerRecommendation:
    """Recommend a spacer stack.

    Without saddle-referenced drop the engine keeps the current stack and
    reports a +/-20mm band the rider can move within. With no frame stack or
    no current spacer value there is no band at all.
    """
    current_spacers = current.spacer_stack_mm

    if is_absent(frame.stack_mm) or current_spacers is None:
        notes.append(SPACER_FALLBACK_NOTE)
        return SpacerRecommendation(
            recommended_mm=(
                current_spacers if current_spacers is not None else DEFAULT_SPACER_MM
            ),
            min_mm=None,
            max_mm=None,
        )

    spacer_min = max(0, current_spacers - SPACER_ADJUST_WINDOW_MM)
    spacer_max = current_spacers + SPACER_ADJUST_WINDOW_MM
    recommended = max(spacer_min, min(spacer_max, current_spacers))

    return SpacerRecommendation(
        recommended_mm=recommended,
        min_mm=spacer_min,
        max_mm=spacer_max,
    )


def calculate_confidence(
    rider: RiderProfile,
    frame: FrameGeometry,
    current: CurrentSetup,
    notes: list[str],
) -> float:
    """Score input completeness: 1.0 minus 0.15 per missing field, floor 0.3."""
    required_fields = [
        (rider.torso_length_cm, "torso length"),
        (rider.arm_length_cm, "arm length"),
        (frame.stack_mm, "frame stack"),
        (frame.reach_mm, "frame reach"),
        (current.bar_reach_mm, "bar reach"),
        (current.stem_length_mm, "stem length"),
    ]

    missing = 0
    for value, name in required_fields:
        if is_absent(value):
            missing += 1
            notes.append(f"Missing {name} reduces confidence")
            logger.debug("fit input missing field=%s", name)

    confidence = CONFIDENCE_CEILING - CONFIDENCE_PENALTY_PER_FIELD * missing
    # Two decimals keeps 1.0 - 2 * 0.15 == 0.7 exactly
    return round(min(CONFIDENCE_CEILING, max(CONFIDENCE_FLOOR, confidence)), 2)
