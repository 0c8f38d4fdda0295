"""Standalone cockpit calculator (pre-v1 formulas).

Kept alongside the v1 engine because its numbers differ: reach comes from
height and the torso/inseam ratio, stack and spacers react to pain points,
and the bar category comes from arm length. It also owns the iterative
bar/stem re-solve, which the legacy adapter deliberately does not do.
"""

import logging

from bikefit.core.constants import (
    BAR_REACH_MM,
    BAR_REACH_RANGES_MM,
    DEFAULT_HOOD_REACH_OFFSET_MM,
    STEM_SIZES_MM,
)
from bikefit.core.enums import BarCategory, PainPoint, RidingStyle
from bikefit.models.fit import FrameGeometry
from bikefit.models.legacy import (
    BarStemResolution,
    CockpitFit,
    CurrentCockpit,
    DiscomfortLevel,
    RiderMeasurements,
)
from bikefit.services.fit_engine import snap_stem_length
from bikefit.utils.converters import round_half_up

logger = logging.getLogger(__name__)

# Shortest to longest; the re-solve walks this list one step at a time
BAR_CATEGORY_ORDER: list[BarCategory] = [
    BarCategory.SHORT,
    BarCategory.MED,
    BarCategory.LONG,
]

AVERAGE_ARM_CM = 65
BASE_STEM_MM = 80
STEM_CLAMP_MM = (60, 130)
SPACER_CLAMP_MM = (0, 50)
SPACER_STEP_MM = 5


def calculate_fit(
    profile: RiderMeasurements,
    geometry: FrameGeometry,
    current: CurrentCockpit | None = None,
) -> CockpitFit:
    """Calculate an ideal cockpit from body measurements and frame geometry."""
    notes: list[str] = []
    pain_points = set(profile.pain_points)

    torso = profile.torso_cm or estimate_torso(profile.height_cm)
    arm = profile.arm_cm or estimate_arm(profile.height_cm)

    # More torso relative to legs wants more reach; typically 0.45-0.55
    torso_inseam_ratio = torso / profile.inseam_cm
    reach_multiplier = 0.45 + (torso_inseam_ratio - 0.6) * 0.3
    target_reach = profile.height_cm * 10 * reach_multiplier

    riding_style = profile.riding_style or RidingStyle.ENDURANCE
    if riding_style == RidingStyle.COMFORT:
        target_reach -= 20
        notes.append("Comfort position: shortened reach for upright posture")
    elif riding_style == RidingStyle.RACE:
        target_reach += 15
        notes.append("Race position: extended reach for aerodynamics")

    flexibility = profile.flexibility_level or 2
    if flexibility == 1:
        target_reach -= 10
        notes.append("Low flexibility: reducing reach to avoid overextension")
    elif flexibility == 3:
        target_reach += 10

    if PainPoint.HANDS in pain_points:
        target_reach -= 15
        notes.append("Hand discomfort: reducing reach to take weight off hands")
    if PainPoint.NECK in pain_points:
        notes.append("Neck discomfort: will raise bar height")

    # Stack here means bar height relative to the frame's own stack
    frame_stack = geometry.stack_mm or 0
    target_stack = frame_stack
    if flexibility == 1:
        target_stack += 20
    elif flexibility == 3:
        target_stack -= 10

    if riding_style == RidingStyle.COMFORT:
        target_stack += 25
    elif riding_style == RidingStyle.RACE:
        target_stack -= 15

    if PainPoint.NECK in pain_points or PainPoint.BACK in pain_points:
        target_stack += 20
        notes.append("Back/neck pain: raising bar height to reduce strain")

    reach_gap = target_reach - (geometry.reach_mm or 0)
    arm_multiplier = arm / AVERAGE_ARM_CM
    ideal_stem = round_half_up((BASE_STEM_MM + reach_gap) * arm_multiplier / 10) * 10
    ideal_stem = max(STEM_CLAMP_MM[0], min(STEM_CLAMP_MM[1], ideal_stem))

    stack_gap = target_stack - frame_stack
    ideal_spacer = max(0, round_half_up(stack_gap / SPACER_STEP_MM) * SPACER_STEP_MM)
    ideal_spacer = max(SPACER_CLAMP_MM[0], min(SPACER_CLAMP_MM[1], ideal_spacer))

    ideal_bar = BarCategory.MED
    if arm < 60:
        ideal_bar = BarCategory.SHORT
    elif arm > 70:
        ideal_bar = BarCategory.LONG

    if PainPoint.HANDS in pain_points and ideal_bar != BarCategory.SHORT:
        ideal_bar = BarCategory.MED if ideal_bar == BarCategory.LONG else BarCategory.SHORT
        notes.append("Hand pain: suggesting shorter bar reach to reduce wrist extension")

    discomfort = _discomfort_score(
        current, ideal_stem, ideal_spacer, ideal_bar, len(pain_points)
    )

    return CockpitFit(
        target_reach_mm=round_half_up(target_reach),
        target_stack_mm=round_half_up(target_stack),
        ideal_stem_mm=ideal_stem,
        ideal_spacer_mm=ideal_spacer,
        ideal_bar_reach_category=ideal_bar,
        discomfort_score=discomfort,
        discomfort=get_discomfort_level(discomfort),
        notes=notes,
    )


def _discomfort_score(
    current: CurrentCockpit | None,
    ideal_stem: int,
    ideal_spacer: int,
    ideal_bar: BarCategory,
    pain_point_count: int,
) -> int:
    """0 = current setup matches the ideal, 100 = very far off."""
    score = 0.0

    if current is not None:
        if current.stem_mm:
            score += min(40, abs(current.stem_mm - ideal_stem) / 2)
        if current.spacer_mm is not None:
            score += min(30, abs(current.spacer_mm - ideal_spacer))
        if current.bar_reach_category and current.bar_reach_category != ideal_bar:
            score += 20

    score += pain_point_count * 5
    return round_half_up(min(100, score))


def estimate_torso(height_cm: float) -> int:
    """Torso is roughly 32% of height."""
    return round_half_up(height_cm * 0.32)


def estimate_arm(height_cm: float) -> int:
    """Arm length is roughly 38% of height."""
    return round_half_up(height_cm * 0.38)


def resolve_bar_and_stem(
    target_reach_mid_mm: float,
    frame_reach_mm: float,
    bar_category: BarCategory,
    hood_offset_mm: float = DEFAULT_HOOD_REACH_OFFSET_MM,
) -> BarStemResolution:
    """Swap bar category and re-solve the stem until the basis fits the stem set.

    A basis below the shortest stem steps to a shorter bar, above the longest
    stem to a longer bar. Each swap recomputes the basis with the new bar
    reach. Stops when the basis is in range or no further category exists.
    """
    index = BAR_CATEGORY_ORDER.index(bar_category)
    swaps = 0

    for _ in range(len(BAR_CATEGORY_ORDER)):
        basis = target_reach_mid_mm - (
            frame_reach_mm + BAR_REACH_MM[BAR_CATEGORY_ORDER[index]] + hood_offset_mm
        )
        if basis < STEM_SIZES_MM[0] and index > 0:
            index -= 1
        elif basis > STEM_SIZES_MM[-1] and index < len(BAR_CATEGORY_ORDER) - 1:
            index += 1
        else:
            break
        swaps += 1
        logger.debug(
            "bar re-solve basis=%.1f -> %s", basis, BAR_CATEGORY_ORDER[index].value
        )

    final_category = BAR_CATEGORY_ORDER[index]
    final_basis = target_reach_mid_mm - (
        frame_reach_mm + BAR_REACH_MM[final_category] + hood_offset_mm
    )
    return BarStemResolution(
        bar_category=final_category,
        bar_reach_mm=BAR_REACH_MM[final_category],
        stem_basis_mm=round_half_up(final_basis),
        snapped_stem_mm=snap_stem_length(final_basis),
        swaps=swaps,
    )


def get_bar_reach_range(category: BarCategory) -> tuple[int, int]:
    """Nominal catalog reach range (mm) for a bar category."""
    return BAR_REACH_RANGES_MM[category]


def get_discomfort_level(score: int) -> DiscomfortLevel:
    """Label a discomfort score for display."""
    if score < 15:
        return DiscomfortLevel(level="optimal", label="Optimal fit", color="green")
    if score < 35:
        return DiscomfortLevel(
            level="minor", label="Minor adjustments recommended", color="yellow"
        )
    if score < 60:
        return DiscomfortLevel(
            level="moderate", label="Moderate issues detected", color="orange"
        )
    return DiscomfortLevel(
        level="significant", label="Significant fit issues", color="red"
    )
