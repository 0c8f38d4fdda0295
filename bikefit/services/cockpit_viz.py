"""Cockpit visualization: projects current vs. target cockpit into 2D.

Screen space has y growing downward, so stack heights are subtracted from
the bottom-bracket y. One scale converts both axes so angles survive.
"""

import logging

from bikefit.core.constants import (
    BAR_REACH_MM,
    CANVAS_HEIGHT_PX,
    CANVAS_PADDING_PX,
    CANVAS_WIDTH_PX,
    DELTA_AMBER_MAX_MM,
    DELTA_GREEN_MAX_MM,
    DELTA_PERFECT_MAX_MM,
    DISPLAY_HOOD_OFFSET_MM,
    HOOD_RISE_PX,
    REACH_EXTENT_PADDING_MM,
    STACK_EXTENT_PADDING_MM,
)
from bikefit.core.enums import BarCategory, DeltaColor
from bikefit.models.cockpit import (
    CanvasSize,
    CockpitBands,
    CockpitDeltas,
    CockpitOverrides,
    CockpitPose,
    CockpitScale,
    FramePose,
    Line,
    Point,
    SvgModel,
    VizCurrent,
    VizFrame,
    VizInput,
    VizTarget,
)
from bikefit.utils.converters import round_half_up

logger = logging.getLogger(__name__)


# =============================================================================
# Delta semantics
# =============================================================================


def get_delta_color(delta: float) -> DeltaColor:
    """|delta| <= 10 green, <= 25 amber, otherwise red."""
    magnitude = abs(delta)
    if magnitude <= DELTA_GREEN_MAX_MM:
        return DeltaColor.GREEN
    if magnitude <= DELTA_AMBER_MAX_MM:
        return DeltaColor.AMBER
    return DeltaColor.RED


def format_delta(delta: int) -> str:
    """Signed millimetre label, e.g. "+12mm", "0mm", "-8mm"."""
    return f"+{delta}mm" if delta > 0 else f"{delta}mm"


def describe_delta(delta: float) -> str:
    magnitude = abs(delta)
    if magnitude <= DELTA_PERFECT_MAX_MM:
        return "Perfect match"
    if magnitude <= DELTA_GREEN_MAX_MM:
        return "Within ideal range"
    if magnitude <= DELTA_AMBER_MAX_MM:
        return "Minor adjustment needed"
    return "Significant adjustment needed"


# =============================================================================
# Projection
# =============================================================================


def _cockpit_pose(
    head_top: Point,
    stem_mm: float,
    spacer_mm: float,
    bar_reach_mm: float,
    scale: float,
) -> CockpitPose:
    stem_px = stem_mm * scale
    bar_px = bar_reach_mm * scale
    spacer_px = spacer_mm * scale

    stem_end = Point(x=head_top.x + stem_px, y=head_top.y - spacer_px)
    bar_end = Point(x=stem_end.x + bar_px, y=stem_end.y)
    hood = Point(
        x=bar_end.x + DISPLAY_HOOD_OFFSET_MM * scale,
        y=bar_end.y - HOOD_RISE_PX,
    )

    return CockpitPose(
        stem_px=stem_px,
        bar_px=bar_px,
        stem_end=stem_end,
        bar_end=bar_end,
        hood=hood,
        stem_line=Line(x1=head_top.x, y1=stem_end.y, x2=stem_end.x, y2=stem_end.y),
        bar_line=Line(x1=stem_end.x, y1=stem_end.y, x2=bar_end.x, y2=bar_end.y),
    )


def project_to_svg_model(viz: VizInput, overrides: CockpitOverrides) -> SvgModel:
    """Project frame, current cockpit and live-adjusted target cockpit to pixels.

    ``overrides`` holds the stem/spacer/bar reach currently shown by the
    controls. The target cockpit is drawn from them; the target reach used
    for the reach delta comes from the recommendation.
    """
    frame, current, target = viz.frame, viz.current, viz.target

    current_reach = (
        frame.reach_mm + current.stem_mm + current.bar_reach_mm + current.hood_offset_mm
    )
    target_reach = target.target_reach_mm
    live_reach = (
        frame.reach_mm + overrides.stem + overrides.bar_reach + DISPLAY_HOOD_OFFSET_MM
    )

    # Stack at the bar clamp
    current_stack = frame.stack_mm + current.spacer_mm
    target_stack = frame.stack_mm + target.ideal_spacer_mm
    live_stack = frame.stack_mm + overrides.spacers

    width, height, padding = CANVAS_WIDTH_PX, CANVAS_HEIGHT_PX, CANVAS_PADDING_PX

    max_reach = max(current_reach, target_reach, live_reach) + REACH_EXTENT_PADDING_MM
    max_stack = max(current_stack, target_stack, live_stack) + STACK_EXTENT_PADDING_MM

    x_scale = (width - padding * 2) / max_reach
    y_scale = (height - padding * 2) / max_stack
    scale = min(x_scale, y_scale)

    bb = Point(x=padding, y=height - padding)
    head_top = Point(
        x=bb.x + frame.reach_mm * scale,
        y=bb.y - frame.stack_mm * scale,
    )

    current_pose = _cockpit_pose(
        head_top, current.stem_mm, current.spacer_mm, current.bar_reach_mm, scale
    )
    target_pose = _cockpit_pose(
        head_top, overrides.stem, overrides.spacers, overrides.bar_reach, scale
    )

    reach_delta = round_half_up(live_reach - target_reach)
    # Positive = target hood sits lower on screen than the current one
    drop_delta = round_half_up((target_pose.hood.y - current_pose.hood.y) / scale)

    logger.debug(
        "cockpit projected scale=%.4f reach_delta=%d drop_delta=%d",
        scale,
        reach_delta,
        drop_delta,
    )

    return SvgModel(
        size=CanvasSize(width=width, height=height, padding=padding),
        frame=FramePose(
            bb=bb,
            head_top=head_top,
            reach_line=Line(x1=bb.x, y1=bb.y, x2=head_top.x, y2=bb.y),
            stack_line=Line(x1=head_top.x, y1=bb.y, x2=head_top.x, y2=head_top.y),
        ),
        current=current_pose,
        target=target_pose,
        deltas=CockpitDeltas(
            reach=reach_delta,
            drop=drop_delta,
            reach_color=get_delta_color(reach_delta),
            drop_color=get_delta_color(drop_delta),
            reach_text=format_delta(reach_delta),
            drop_text=format_delta(drop_delta),
            reach_status=describe_delta(reach_delta),
            drop_status=describe_delta(drop_delta),
        ),
        bands=CockpitBands(
            stem_range=target.ideal_stem_range_mm,
            spacer_range=target.ideal_spacer_range_mm,
        ),
        target_bar_category=bar_category_for_reach(overrides.bar_reach),
        scale=CockpitScale(x_scale=scale, y_scale=scale),
    )


def default_overrides(viz: VizInput) -> CockpitOverrides:
    """Control values before the rider touches anything: the recommendation."""
    return CockpitOverrides(
        stem=viz.target.ideal_stem_mm,
        spacers=viz.target.ideal_spacer_mm,
        bar_reach=viz.target.ideal_bar_reach_mm,
    )


def bar_category_for_reach(reach_mm: float) -> BarCategory:
    """Reverse lookup of a resolved bar reach; unknown values fall back to med."""
    for category, value in BAR_REACH_MM.items():
        if value == reach_mm:
            return category
    return BarCategory.MED


# =============================================================================
# VizInput assembly
# =============================================================================


def build_viz_input(
    *,
    frame_stack_mm: float,
    frame_reach_mm: float,
    current_stem_mm: float,
    current_spacer_mm: float,
    current_bar_category: BarCategory,
    target_reach_mm: float,
    target_drop_mm: float,
    ideal_stem_mm: float,
    ideal_spacer_mm: float,
    ideal_bar_category: BarCategory,
    ideal_stem_range: tuple[float, float],
    ideal_spacer_range: tuple[float, float],
    reach_delta: float,
    confidence: float,
    flags: list[str] | None = None,
    head_tube_length_mm: float | None = None,
    saddle_height_mm: float | None = None,
) -> VizInput:
    """Package bike, profile and fit fields into a VizInput."""
    return VizInput(
        frame=VizFrame(
            stack_mm=frame_stack_mm,
            reach_mm=frame_reach_mm,
            head_tube_length_mm=head_tube_length_mm,
        ),
        current=VizCurrent(
            stem_mm=current_stem_mm,
            spacer_mm=current_spacer_mm,
            bar_reach_mm=BAR_REACH_MM[current_bar_category],
            hood_offset_mm=DISPLAY_HOOD_OFFSET_MM,
        ),
        target=VizTarget(
            target_reach_mm=target_reach_mm,
            target_drop_mm=target_drop_mm,
            ideal_stem_mm=ideal_stem_mm,
            ideal_spacer_mm=ideal_spacer_mm,
            ideal_bar_reach_mm=BAR_REACH_MM[ideal_bar_category],
            ideal_stem_range_mm=ideal_stem_range,
            ideal_spacer_range_mm=ideal_spacer_range,
            reach_delta_mm=reach_delta,
            confidence=confidence,
            flags=list(flags or []),
        ),
        saddle_height_mm=saddle_height_mm,
    )
