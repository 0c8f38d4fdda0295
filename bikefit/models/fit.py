"""Rider, frame and setup inputs plus the fit engine's recommendation.

All lengths are millimetres except rider body measurements, which are
centimetres as entered on the profile form. A measurement of ``None`` or
``0`` means "not provided".
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from bikefit.core.enums import Flexibility, PainPoint, RidingStyle


class RiderProfile(BaseModel):
    """Rider anthropometrics and preferences."""

    model_config = ConfigDict(frozen=True)

    height_cm: Optional[float] = Field(default=None, ge=0)
    inseam_cm: Optional[float] = Field(default=None, ge=0)
    torso_length_cm: Optional[float] = Field(default=None, ge=0)
    arm_length_cm: Optional[float] = Field(default=None, ge=0)
    flexibility: Flexibility = Flexibility.MEDIUM
    riding_style: RidingStyle = RidingStyle.ENDURANCE
    pain_points: frozenset[PainPoint] = frozenset()

    @field_validator("flexibility", mode="before")
    @classmethod
    def accept_legacy_level(cls, value):
        """Accept the 1-3 scale used by older profiles, as an int or a digit string."""
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value.strip())
        if isinstance(value, int) and not isinstance(value, bool):
            return Flexibility.from_level(value)
        return value


class FrameGeometry(BaseModel):
    """Frame geometry, from the catalog or entered manually."""

    model_config = ConfigDict(frozen=True)

    stack_mm: Optional[float] = Field(default=None, ge=0)
    reach_mm: Optional[float] = Field(default=None, ge=0)
    head_tube_angle_deg: Optional[float] = None
    seat_tube_angle_deg: Optional[float] = None
    head_tube_length_mm: Optional[float] = Field(default=None, ge=0)
    wheelbase_mm: Optional[float] = Field(default=None, ge=0)

    @property
    def is_complete(self) -> bool:
        return bool(self.stack_mm) and bool(self.reach_mm)


class CurrentSetup(BaseModel):
    """Cockpit as currently fitted to the bike."""

    model_config = ConfigDict(frozen=True)

    stem_length_mm: Optional[float] = Field(default=None, ge=0)
    spacer_stack_mm: Optional[float] = Field(default=None, ge=0)
    bar_reach_mm: Optional[float] = Field(default=None, ge=0)
    hood_reach_offset_mm: Optional[float] = Field(default=None, ge=0)
    saddle_height_mm: Optional[float] = Field(default=None, ge=0)
    saddle_setback_mm: Optional[float] = None


class ReachBand(BaseModel):
    min_mm: int
    mid_mm: int
    max_mm: int

    @model_validator(mode="after")
    def check_ordering(self) -> "ReachBand":
        if not self.min_mm < self.mid_mm < self.max_mm:
            raise ValueError("reach band must satisfy min < mid < max")
        return self


class DropRange(BaseModel):
    min_mm: int
    max_mm: int

    @model_validator(mode="after")
    def check_ordering(self) -> "DropRange":
        if self.min_mm > self.max_mm:
            raise ValueError("drop range must satisfy min <= max")
        return self


class StemRecommendation(BaseModel):
    snapped_mm: int  # always one of STEM_SIZES_MM
    allowed_mm: list[int]
    basis_mm: int  # unsnapped requirement, rounded for display


class SpacerRecommendation(BaseModel):
    recommended_mm: float
    min_mm: Optional[float] = None
    max_mm: Optional[float] = None


class FitRecommendation(BaseModel):
    target_reach: ReachBand
    target_drop: DropRange
    stem: StemRecommendation
    spacers: SpacerRecommendation
    confidence: float  # 0.3 - 1.0
    notes: list[str]
