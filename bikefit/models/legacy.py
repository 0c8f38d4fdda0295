"""Request/response shapes for the legacy (v1) fit call and the standalone calculator."""

from typing import Optional

from pydantic import BaseModel, Field

from bikefit.core.enums import BarCategory, PainPoint, RidingStyle


class LegacyFitInput(BaseModel):
    """Older call shape: 1-3 flexibility, pain points, bar category instead of mm."""

    torso_cm: Optional[float] = Field(default=None, ge=0)
    arm_cm: Optional[float] = Field(default=None, ge=0)
    flexibility_level: Optional[int] = None  # 1=low, 2=medium, 3=high
    riding_style: RidingStyle = RidingStyle.ENDURANCE
    pain_points: list[PainPoint] = []
    frame_reach_mm: float = Field(ge=0)
    # Legacy callers never sent stack; when known it lets spacers get a band
    frame_stack_mm: Optional[float] = Field(default=None, ge=0)
    stem_mm: float = Field(ge=0)
    spacer_mm: Optional[float] = Field(default=None, ge=0)
    bar_reach_category: BarCategory = BarCategory.MED


class ConfidenceLevel(BaseModel):
    level: str  # "high", "medium", "low"
    label: str


class LegacyFitResult(BaseModel):
    target_reach_mm: int
    target_drop_mm: int
    ideal_stem_mm: int
    ideal_stem_range_mm: tuple[int, int]
    ideal_spacer_mm: float
    ideal_spacer_range_mm: tuple[float, float]
    recommended_bar_reach_category: BarCategory
    current_effective_reach_mm: int
    reach_delta_mm: int  # current effective reach - target mid
    confidence: int  # 40 - 95
    confidence_level: ConfidenceLevel
    flags: list[str]
    flag_messages: list[str]  # one sentence per flag, same order
    rationale: list[str]


# ---------------------------------------------------------------------------
# Standalone calculator
# ---------------------------------------------------------------------------


class RiderMeasurements(BaseModel):
    """Profile shape used by the standalone calculator (height/inseam driven)."""

    height_cm: float = Field(gt=0)
    inseam_cm: float = Field(gt=0)
    torso_cm: Optional[float] = Field(default=None, ge=0)
    arm_cm: Optional[float] = Field(default=None, ge=0)
    flexibility_level: Optional[int] = None
    riding_style: Optional[RidingStyle] = None
    pain_points: list[PainPoint] = []


class CurrentCockpit(BaseModel):
    stem_mm: Optional[float] = Field(default=None, ge=0)
    spacer_mm: Optional[float] = Field(default=None, ge=0)
    bar_reach_category: Optional[BarCategory] = None


class DiscomfortLevel(BaseModel):
    level: str  # "optimal", "minor", "moderate", "significant"
    label: str
    color: str


class CockpitFit(BaseModel):
    target_reach_mm: int
    target_stack_mm: int
    ideal_stem_mm: int
    ideal_spacer_mm: int
    ideal_bar_reach_category: BarCategory
    discomfort_score: int  # 0 = perfect, 100 = very far off
    discomfort: DiscomfortLevel
    notes: list[str]


class BarStemResolution(BaseModel):
    """Outcome of the iterative bar-category / stem re-solve."""

    bar_category: BarCategory
    bar_reach_mm: int
    stem_basis_mm: int
    snapped_stem_mm: int
    swaps: int
