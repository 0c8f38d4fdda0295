"""Inputs and the coordinate model for the cockpit visualization."""

from typing import Optional

from pydantic import BaseModel, Field

from bikefit.core.constants import DISPLAY_HOOD_OFFSET_MM
from bikefit.core.enums import BarCategory, DeltaColor

# ---------------------------------------------------------------------------
# VizInput
# ---------------------------------------------------------------------------


class VizFrame(BaseModel):
    stack_mm: float = Field(ge=0)
    reach_mm: float = Field(ge=0)
    head_tube_length_mm: Optional[float] = Field(default=None, ge=0)


class VizCurrent(BaseModel):
    stem_mm: float = Field(ge=0)
    spacer_mm: float = Field(ge=0)
    bar_reach_mm: float = Field(ge=0)  # resolved from category
    hood_offset_mm: float = Field(default=DISPLAY_HOOD_OFFSET_MM, ge=0)


class VizTarget(BaseModel):
    target_reach_mm: float = Field(ge=0)
    target_drop_mm: float = Field(ge=0)  # relative to saddle (displayed as -X mm)
    ideal_stem_mm: float = Field(ge=0)
    ideal_spacer_mm: float = Field(ge=0)
    ideal_bar_reach_mm: float = Field(ge=0)
    ideal_stem_range_mm: tuple[float, float]
    ideal_spacer_range_mm: tuple[float, float]
    reach_delta_mm: float  # current - target
    confidence: float = Field(ge=0)
    flags: list[str] = []


class VizInput(BaseModel):
    frame: VizFrame
    current: VizCurrent
    target: VizTarget
    saddle_height_mm: Optional[float] = Field(default=None, ge=0)


class VizInputParams(BaseModel):
    """Flat bike/profile/fit fields packaged into a VizInput by build_viz_input."""

    frame_stack_mm: float = Field(ge=0)
    frame_reach_mm: float = Field(ge=0)
    head_tube_length_mm: Optional[float] = Field(default=None, ge=0)
    current_stem_mm: float = Field(ge=0)
    current_spacer_mm: float = Field(ge=0)
    current_bar_category: BarCategory
    target_reach_mm: float = Field(ge=0)
    target_drop_mm: float = Field(ge=0)
    ideal_stem_mm: float = Field(ge=0)
    ideal_spacer_mm: float = Field(ge=0)
    ideal_bar_category: BarCategory
    ideal_stem_range: tuple[float, float]
    ideal_spacer_range: tuple[float, float]
    reach_delta: float
    confidence: float = Field(ge=0)
    flags: list[str] = []
    saddle_height_mm: Optional[float] = Field(default=None, ge=0)


class CockpitOverrides(BaseModel):
    """Live values from the interactive controls."""

    stem: float = Field(ge=0)
    spacers: float = Field(ge=0)
    bar_reach: float = Field(ge=0)


# ---------------------------------------------------------------------------
# SvgModel
# ---------------------------------------------------------------------------


class Point(BaseModel):
    x: float
    y: float


class Line(BaseModel):
    x1: float
    y1: float
    x2: float
    y2: float


class CanvasSize(BaseModel):
    width: int
    height: int
    padding: int


class FramePose(BaseModel):
    bb: Point
    head_top: Point
    reach_line: Line
    stack_line: Line


class CockpitPose(BaseModel):
    stem_px: float
    bar_px: float
    stem_end: Point
    bar_end: Point
    hood: Point
    stem_line: Line
    bar_line: Line


class CockpitDeltas(BaseModel):
    reach: int  # live - target effective reach
    drop: int  # positive = target hood sits lower than current
    reach_color: DeltaColor
    drop_color: DeltaColor
    reach_text: str
    drop_text: str
    reach_status: str
    drop_status: str


class CockpitBands(BaseModel):
    stem_range: tuple[float, float]
    spacer_range: tuple[float, float]


class CockpitScale(BaseModel):
    x_scale: float
    y_scale: float


class SvgModel(BaseModel):
    size: CanvasSize
    frame: FramePose
    current: CockpitPose
    target: CockpitPose
    deltas: CockpitDeltas
    bands: CockpitBands
    target_bar_category: BarCategory  # category matching the live bar reach
    scale: CockpitScale
