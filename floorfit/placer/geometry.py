"""Footprint helpers — fixtures and areas expressed in calibration pixels."""

from __future__ import annotations

import math

from floorfit.geometry.models import Rect, ScaleInfo
from floorfit.geometry.transform import real_units_to_pixels

from .models import Fixture, PlacedFixture, PlacementArea


def area_to_px(area: PlacementArea | Rect, scale: ScaleInfo) -> Rect:
    """Convert a millimetre rectangle to calibration pixels."""
    return Rect(
        x=real_units_to_pixels(area.x, scale),
        y=real_units_to_pixels(area.y, scale),
        width=real_units_to_pixels(area.width, scale),
        height=real_units_to_pixels(area.height, scale),
    )


def usable_area(area: PlacementArea, clearance: float) -> Rect | None:
    """The area inset by *clearance* mm, or None if nothing usable is left."""
    inner = area.to_rect().inset(clearance)
    if not all(math.isfinite(v) for v in (inner.x, inner.y, inner.width, inner.height)):
        return None
    if inner.width <= 0 or inner.height <= 0:
        return None
    return inner


def placed_rect(pf: PlacedFixture, scale: ScaleInfo) -> Rect:
    """Occupied rectangle of an already placed fixture (rotation-aware)."""
    w_mm, h_mm = pf.footprint_mm
    return Rect(
        x=pf.position.x,
        y=pf.position.y,
        width=real_units_to_pixels(w_mm, scale),
        height=real_units_to_pixels(h_mm, scale),
    )


def orientations(fixture: Fixture, scale: ScaleInfo) -> list[tuple[float, float, int]]:
    """Candidate (width_px, height_px, rotation) options, unrotated first."""
    w = real_units_to_pixels(fixture.width, scale)
    h = real_units_to_pixels(fixture.height, scale)
    return [(w, h, 0), (h, w, 90)]
