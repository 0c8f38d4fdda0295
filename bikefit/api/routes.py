"""FastAPI route definitions for the BikeFit cockpit API."""

from typing import Any, Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel

from bikefit.api.deps import current_rate_limit, limiter
from bikefit.core.constants import BAR_REACH_MM, STEM_SIZES_MM
from bikefit.core.enums import BarCategory
from bikefit.core.logging import log_fit
from bikefit.models.cockpit import CockpitOverrides, SvgModel, VizInput, VizInputParams
from bikefit.models.fit import CurrentSetup, FitRecommendation, FrameGeometry, RiderProfile
from bikefit.models.legacy import (
    BarStemResolution,
    CockpitFit,
    CurrentCockpit,
    LegacyFitInput,
    LegacyFitResult,
    RiderMeasurements,
)
from bikefit.services.cockpit_viz import (
    build_viz_input,
    default_overrides,
    project_to_svg_model,
)
from bikefit.services.fit_adapter import calculate_fit_v1
from bikefit.services.fit_calculator import (
    calculate_fit,
    get_bar_reach_range,
    resolve_bar_and_stem,
)
from bikefit.services.fit_engine import compute_fit_recommendation
from bikefit.services.frame_geometry import (
    GeometrySource,
    frame_from_record,
    geometry_source,
    resolve_frame_geometry,
)

router = APIRouter()


# ---------------------------------------------------------------------------
# Request Models
# ---------------------------------------------------------------------------


class FitRequest(BaseModel):
    rider: RiderProfile
    # Catalog geometry; manual_frame, when complete, takes precedence
    frame: FrameGeometry = FrameGeometry()
    manual_frame: Optional[FrameGeometry] = None
    current: CurrentSetup


class StandaloneFitRequest(BaseModel):
    profile: RiderMeasurements
    geometry: FrameGeometry
    current: CurrentCockpit | None = None


class BarResolveRequest(BaseModel):
    target_reach_mid_mm: float
    frame_reach_mm: float
    bar_reach_category: BarCategory = BarCategory.MED


class ProjectRequest(BaseModel):
    viz: VizInput
    # Omitted overrides mean "controls still at the recommended values"
    overrides: CockpitOverrides | None = None


class FrameResolveRequest(BaseModel):
    catalog: Optional[FrameGeometry] = None
    manual: Optional[FrameGeometry] = None
    # Stored bike row: catalog columns plus manual_-prefixed overrides
    bike_record: Optional[dict[str, Any]] = None


class FrameResolution(BaseModel):
    source: Optional[GeometrySource] = None
    frame: Optional[FrameGeometry] = None


# ---------------------------------------------------------------------------
# Fit
# ---------------------------------------------------------------------------


@router.post("/fit", response_model=FitRecommendation)
@limiter.limit(current_rate_limit)
def fit(request: Request, body: FitRequest):
    """Compute the v1 fit recommendation.

    An incomplete frame still reaches the engine, which scores the missing
    stack or reach as lower confidence.
    """
    frame = resolve_frame_geometry(body.frame, body.manual_frame) or body.frame
    result = compute_fit_recommendation(body.rider, frame, body.current)
    log_fit(
        "engine",
        reach_mid=result.target_reach.mid_mm,
        stem=result.stem.snapped_mm,
        confidence=result.confidence,
    )
    return result


@router.post("/fit/v1", response_model=LegacyFitResult)
@limiter.limit(current_rate_limit)
def fit_v1(request: Request, body: LegacyFitInput):
    """Legacy fit shape with bar category, flags and rationale."""
    result = calculate_fit_v1(body)
    log_fit(
        "v1",
        reach=result.target_reach_mm,
        stem=result.ideal_stem_mm,
        bar=result.recommended_bar_reach_category.value,
        flags=",".join(result.flags) or None,
    )
    return result


@router.post("/fit/standalone", response_model=CockpitFit)
@limiter.limit(current_rate_limit)
def fit_standalone(request: Request, body: StandaloneFitRequest):
    """Pre-v1 calculator driven by height, inseam and pain points."""
    result = calculate_fit(body.profile, body.geometry, body.current)
    log_fit("standalone", stem=result.ideal_stem_mm, discomfort=result.discomfort_score)
    return result


@router.post("/fit/resolve-bar", response_model=BarStemResolution)
@limiter.limit(current_rate_limit)
def fit_resolve_bar(request: Request, body: BarResolveRequest):
    """Iteratively swap bar category and re-solve the stem."""
    return resolve_bar_and_stem(
        body.target_reach_mid_mm, body.frame_reach_mm, body.bar_reach_category
    )


# ---------------------------------------------------------------------------
# Frame geometry
# ---------------------------------------------------------------------------


@router.post("/frame/resolve", response_model=FrameResolution)
@limiter.limit(current_rate_limit)
def frame_resolve(request: Request, body: FrameResolveRequest):
    """Pick the active frame geometry: manual entry first, then the catalog."""
    catalog, manual = body.catalog, body.manual
    if body.bike_record is not None:
        catalog = catalog or frame_from_record(body.bike_record)
        manual = manual or frame_from_record(body.bike_record, prefix="manual_")
    return FrameResolution(
        source=geometry_source(catalog, manual),
        frame=resolve_frame_geometry(catalog, manual),
    )


# ---------------------------------------------------------------------------
# Cockpit visualization
# ---------------------------------------------------------------------------


@router.post("/cockpit/viz-input", response_model=VizInput)
@limiter.limit(current_rate_limit)
def cockpit_viz_input(request: Request, body: VizInputParams):
    """Package bike/profile/fit fields into a VizInput."""
    return build_viz_input(**body.model_dump())


@router.post("/cockpit/project", response_model=SvgModel)
@limiter.limit(current_rate_limit)
def cockpit_project(request: Request, body: ProjectRequest):
    """Project a VizInput with the live control values to canvas coordinates."""
    overrides = body.overrides or default_overrides(body.viz)
    return project_to_svg_model(body.viz, overrides)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


@router.get("/catalog/stem-sizes")
@limiter.limit(current_rate_limit)
def get_stem_sizes(request: Request):
    """Standard stem lengths the engine snaps to."""
    return {"stem_sizes_mm": list(STEM_SIZES_MM)}


@router.get("/catalog/bar-reach")
@limiter.limit(current_rate_limit)
def get_bar_reach(request: Request):
    """Bar reach categories with resolved and nominal reach."""
    return {
        "categories": [
            {
                "category": category.value,
                "reach_mm": BAR_REACH_MM[category],
                "range_mm": list(get_bar_reach_range(category)),
            }
            for category in BarCategory
        ]
    }
