"""Adapter between the v1 fit engine and the legacy (UI-facing) result shape.

The legacy shape carries pain points, a 1-3 flexibility scale and bar reach
categories instead of millimetres. On top of delegating to the engine this
module derives the recommended bar category, the diagnostic flags, the
rationale sentences and the 40-95 confidence percentage.
"""

import logging

from bikefit.core.constants import (
    BAR_REACH_MM,
    DEFAULT_HOOD_REACH_OFFSET_MM,
    LEGACY_CONFIDENCE_BASE,
    LEGACY_CONFIDENCE_SPAN,
    LEGACY_SPACER_RANGE_HALF_WIDTH_MM,
    LEGACY_STEM_RANGE_HALF_WIDTH_MM,
    STEM_PINNED_MAX_MM,
    STEM_PINNED_MIN_MM,
)
from bikefit.core.enums import (
    BarCategory,
    FitFlag,
    Flexibility,
    PainPoint,
    RidingStyle,
)
from bikefit.models.fit import CurrentSetup, FrameGeometry, RiderProfile
from bikefit.models.legacy import ConfidenceLevel, LegacyFitInput, LegacyFitResult
from bikefit.services.fit_engine import compute_fit_recommendation, get_allowed_stems
from bikefit.utils.converters import round_half_up

logger = logging.getLogger(__name__)

PAIN_RATIONALE: list[tuple[PainPoint, str]] = [
    (PainPoint.HANDS, "Reduced forward reach to limit hand load."),
    (PainPoint.NECK, "Raised bar height to reduce neck extension."),
    (PainPoint.BACK, "Shortened reach to reduce lower back strain."),
]

STYLE_RATIONALE: dict[RidingStyle, str] = {
    RidingStyle.COMFORT: "Comfort posture shortens reach and reduces drop.",
    RidingStyle.RACE: "Race posture increases reach and drop for aerodynamics.",
}

FLEXIBILITY_RATIONALE: dict[Flexibility, str] = {
    Flexibility.LOW: "Limited flexibility requires more upright position.",
    Flexibility.HIGH: "High flexibility allows for more aggressive position.",
}

FLAG_MESSAGES: dict[str, str] = {
    FitFlag.FRAME_MAYBE_TOO_LONG.value: (
        "Frame may be too long: even the shortest stem leaves you over-reached"
    ),
    FitFlag.FRAME_MAYBE_TOO_SHORT.value: (
        "Frame may be too short: even a long stem leaves you under-reached"
    ),
    FitFlag.CONSIDER_BAR_CHANGE.value: (
        "Consider a different bar reach to bring the stem into a normal range"
    ),
}


def calculate_fit_v1(fit_input: LegacyFitInput) -> LegacyFitResult:
    """Run the v1 engine for a legacy input and map the result back."""
    flexibility = Flexibility.from_level(fit_input.flexibility_level)
    bar_reach_mm = get_bar_reach_mm(fit_input.bar_reach_category)

    rider = RiderProfile(
        torso_length_cm=fit_input.torso_cm,
        arm_length_cm=fit_input.arm_cm,
        flexibility=flexibility,
        riding_style=fit_input.riding_style,
        pain_points=frozenset(fit_input.pain_points),
    )
    # Stack only feeds the spacer band; legacy callers usually leave it out
    frame = FrameGeometry(
        stack_mm=fit_input.frame_stack_mm or 0,
        reach_mm=fit_input.frame_reach_mm,
    )
    current = CurrentSetup(
        stem_length_mm=fit_input.stem_mm,
        spacer_stack_mm=fit_input.spacer_mm,
        bar_reach_mm=bar_reach_mm,
        hood_reach_offset_mm=DEFAULT_HOOD_REACH_OFFSET_MM,
    )

    v1 = compute_fit_recommendation(rider, frame, current)
    snapped = v1.stem.snapped_mm
    target_mid = v1.target_reach.mid_mm

    current_effective_reach = (
        fit_input.frame_reach_mm
        + fit_input.stem_mm
        + bar_reach_mm
        + DEFAULT_HOOD_REACH_OFFSET_MM
    )

    recommended_bar = recommend_bar_category(snapped, fit_input.bar_reach_category)
    flags = derive_flags(snapped, current_effective_reach, target_mid)
    rationale = build_rationale(
        fit_input.pain_points, fit_input.riding_style, flexibility, v1.notes
    )

    confidence = to_confidence_percentage(v1.confidence)
    spacers = v1.spacers
    spacer_range = (
        spacers.min_mm
        if spacers.min_mm is not None
        else spacers.recommended_mm - LEGACY_SPACER_RANGE_HALF_WIDTH_MM,
        spacers.max_mm
        if spacers.max_mm is not None
        else spacers.recommended_mm + LEGACY_SPACER_RANGE_HALF_WIDTH_MM,
    )

    result = LegacyFitResult(
        target_reach_mm=target_mid,
        target_drop_mm=round_half_up(
            (v1.target_drop.min_mm + v1.target_drop.max_mm) / 2
        ),
        ideal_stem_mm=snapped,
        ideal_stem_range_mm=(
            snapped - LEGACY_STEM_RANGE_HALF_WIDTH_MM,
            snapped + LEGACY_STEM_RANGE_HALF_WIDTH_MM,
        ),
        ideal_spacer_mm=spacers.recommended_mm,
        ideal_spacer_range_mm=spacer_range,
        recommended_bar_reach_category=recommended_bar,
        current_effective_reach_mm=round_half_up(current_effective_reach),
        reach_delta_mm=round_half_up(current_effective_reach - target_mid),
        confidence=confidence,
        confidence_level=get_confidence_level(confidence),
        flags=flags,
        flag_messages=[get_flag_message(flag) for flag in flags],
        rationale=rationale,
    )

    logger.debug(
        "legacy fit stem=%d bar=%s flags=%s confidence=%d",
        result.ideal_stem_mm,
        result.recommended_bar_reach_category.value,
        ",".join(flags) or "-",
        result.confidence,
    )
    return result


def recommend_bar_category(snapped_stem_mm: int, current: BarCategory) -> BarCategory:
    """One-shot bar category suggestion from the snapped stem.

    No re-solve of the stem after the swap; see
    ``fit_calculator.resolve_bar_and_stem`` for the iterative variant.
    """
    if snapped_stem_mm < STEM_PINNED_MIN_MM and current != BarCategory.SHORT:
        return BarCategory.SHORT
    if snapped_stem_mm > STEM_PINNED_MAX_MM and current != BarCategory.LONG:
        return BarCategory.LONG
    return current


def derive_flags(
    snapped_stem_mm: int, current_effective_reach: float, target_mid_mm: float
) -> list[str]:
    """Flag frames that a pinned stem cannot correct."""
    flags: list[str] = []
    pinned_short = snapped_stem_mm <= STEM_PINNED_MIN_MM
    pinned_long = snapped_stem_mm >= STEM_PINNED_MAX_MM

    if pinned_short and current_effective_reach > target_mid_mm:
        flags.append(FitFlag.FRAME_MAYBE_TOO_LONG.value)
    if pinned_long and current_effective_reach < target_mid_mm:
        flags.append(FitFlag.FRAME_MAYBE_TOO_SHORT.value)
    if pinned_short or pinned_long:
        flags.append(FitFlag.CONSIDER_BAR_CHANGE.value)
    return flags


def build_rationale(
    pain_points: list[PainPoint],
    riding_style: RidingStyle,
    flexibility: Flexibility,
    engine_notes: list[str],
) -> list[str]:
    """Pain points, then style, then flexibility, then non-"Missing" engine notes."""
    rationale = [text for point, text in PAIN_RATIONALE if point in pain_points]

    if riding_style in STYLE_RATIONALE:
        rationale.append(STYLE_RATIONALE[riding_style])
    if flexibility in FLEXIBILITY_RATIONALE:
        rationale.append(FLEXIBILITY_RATIONALE[flexibility])

    rationale.extend(note for note in engine_notes if "Missing" not in note)
    return rationale


def to_confidence_percentage(confidence: float) -> int:
    """Map the engine's 0.3-1.0 confidence to the legacy 40-95 scale."""
    return round_half_up(LEGACY_CONFIDENCE_BASE + confidence * LEGACY_CONFIDENCE_SPAN)


def get_allowed_stem_range(snapped_stem_mm: int) -> list[int]:
    """Standard stem sizes within +/-10mm of a snapped value."""
    return get_allowed_stems(snapped_stem_mm)


def get_bar_reach_mm(category: BarCategory) -> int:
    """Resolve a bar reach category to millimetres."""
    return BAR_REACH_MM[category]


def get_confidence_level(percentage: int) -> ConfidenceLevel:
    """Bucket a 40-95 confidence percentage for display."""
    if percentage >= 80:
        return ConfidenceLevel(level="high", label="High confidence")
    if percentage >= 60:
        return ConfidenceLevel(level="medium", label="Medium confidence")
    return ConfidenceLevel(level="low", label="Low confidence - add missing measurements")


def get_flag_message(flag: str) -> str:
    """Human-readable sentence for a diagnostic flag (unknown flags echo back)."""
    return FLAG_MESSAGES.get(flag, flag)
