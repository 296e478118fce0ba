"""Placement area selection — turn a dragged rectangle into millimetres."""

from __future__ import annotations

from floorfit.geometry.models import Point, ScaleInfo
from floorfit.geometry.transform import display_to_calibration, pixels_to_real_units

from .models import PlacementArea


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


def area_from_drag(
    start: Point,
    end: Point,
    scale: ScaleInfo,
    displayed_size: tuple[float, float] | None = None,
    *,
    area_id: str = "",
) -> PlacementArea:
    """Build a PlacementArea from two drag corners.

    Corners are in displayed pixels when *displayed_size* is given,
    otherwise already in calibration pixels.  They are clamped to the
    image, converted to millimetres and normalised so the area has a
    top-left origin and non-negative size whichever way the user dragged.
    """
    corners = []
    for p in (start, end):
        if displayed_size is not None:
            p = display_to_calibration(p, displayed_size, scale)
        cx = _clamp(p.x, 0.0, scale.image_width)
        cy = _clamp(p.y, 0.0, scale.image_height)
        corners.append((pixels_to_real_units(cx, scale),
                        pixels_to_real_units(cy, scale)))

    (x1, y1), (x2, y2) = corners
    return PlacementArea(
        x=min(x1, x2),
        y=min(y1, y2),
        width=abs(x2 - x1),
        height=abs(y2 - y1),
        id=area_id,
    )
