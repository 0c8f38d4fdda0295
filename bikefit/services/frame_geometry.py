"""Resolve the active frame geometry for a bike.

A bike may reference a catalog frame and may also carry manually entered
geometry. Manual entry wins when it has both stack and reach; only one
source is ever active.
"""

from typing import Any, Literal

from bikefit.models.fit import FrameGeometry
from bikefit.utils.converters import safe_float

GeometrySource = Literal["manual", "catalog"]

_FRAME_FIELDS = (
    "stack_mm",
    "reach_mm",
    "head_tube_angle_deg",
    "seat_tube_angle_deg",
    "head_tube_length_mm",
    "wheelbase_mm",
)


def frame_from_record(record: dict[str, Any] | None, prefix: str = "") -> FrameGeometry | None:
    """Build FrameGeometry from a stored row, e.g. ``manual_stack_mm`` with prefix="manual_".

    Returns None when the row lacks a usable stack or reach.
    """
    if not record:
        return None

    values: dict[str, float | None] = {}
    for field in _FRAME_FIELDS:
        raw = record.get(f"{prefix}{field}")
        values[field] = safe_float(raw) if raw not in (None, "") else None

    frame = FrameGeometry(**values)
    return frame if frame.is_complete else None


def geometry_source(
    catalog: FrameGeometry | None = None,
    manual: FrameGeometry | None = None,
) -> GeometrySource | None:
    """Which geometry source is active for a bike."""
    if manual is not None and manual.is_complete:
        return "manual"
    if catalog is not None and catalog.is_complete:
        return "catalog"
    return None


def resolve_frame_geometry(
    catalog: FrameGeometry | None = None,
    manual: FrameGeometry | None = None,
) -> FrameGeometry | None:
    """Return the active geometry: manual first, then catalog, else None."""
    source = geometry_source(catalog, manual)
    if source == "manual":
        return manual
    if source == "catalog":
        return catalog
    return None
