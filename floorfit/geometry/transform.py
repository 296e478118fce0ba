"""Coordinate transform — pixel/millimetre conversions and fit checks.

All functions are pure.  "Calibration pixels" are the pixel frame the
scale was established in (``ScaleInfo.image_width`` × ``image_height``);
"displayed pixels" are whatever size the image is currently drawn at.
"""

from __future__ import annotations

import math

from floorfit.config import PLACEMENT_RULES

from .models import Point, Dimension, ScaleInfo


def pixels_to_real_units(pixels: float, scale: ScaleInfo) -> float:
    """Convert a calibration-pixel length to millimetres."""
    return pixels / scale.pixels_per_millimeter


def real_units_to_pixels(mm: float, scale: ScaleInfo) -> float:
    """Convert a millimetre length to calibration pixels."""
    return mm * scale.pixels_per_millimeter


def line_length(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b.x - a.x, b.y - a.y)


def _usable_scale(scale: ScaleInfo | None) -> bool:
    if scale is None:
        return False
    ppm = scale.pixels_per_millimeter
    return (
        isinstance(ppm, (int, float))
        and math.isfinite(ppm)
        and ppm > 0
    )


def check_fit(
    position: Point,
    size: Dimension,
    scale: ScaleInfo | None,
    *,
    tolerance: float = PLACEMENT_RULES.fit_tolerance_px,
) -> bool:
    """Return True if a *size* (mm) rectangle at *position* (calibration px)
    lies fully inside the calibrated image.

    Never raises: a missing or non-positive scale, or a negative /
    non-finite size, simply does not fit.
    """
    if not _usable_scale(scale):
        return False
    values = (position.x, position.y, size.width, size.height)
    if not all(math.isfinite(v) for v in values):
        return False
    if size.width < 0 or size.height < 0:
        return False

    width_px = real_units_to_pixels(size.width, scale)
    height_px = real_units_to_pixels(size.height, scale)
    return (
        position.x >= 0
        and position.y >= 0
        and position.x + width_px <= scale.image_width + tolerance
        and position.y + height_px <= scale.image_height + tolerance
    )


# ── Displayed ↔ calibration frame ──────────────────────────────────


def _display_factors(
    displayed_size: tuple[float, float], scale: ScaleInfo,
) -> tuple[float, float]:
    dw, dh = displayed_size
    return dw / scale.image_width, dh / scale.image_height


def display_to_calibration(
    point: Point, displayed_size: tuple[float, float], scale: ScaleInfo,
) -> Point:
    """Map a point in the displayed image to calibration pixels.

    The X and Y factors are independent so a non-uniformly stretched
    display still maps correctly.
    """
    fx, fy = _display_factors(displayed_size, scale)
    return Point(point.x / fx, point.y / fy)


def calibration_to_display(
    point: Point, displayed_size: tuple[float, float], scale: ScaleInfo,
) -> Point:
    """Map a calibration-pixel point onto the displayed image."""
    fx, fy = _display_factors(displayed_size, scale)
    return Point(point.x * fx, point.y * fy)


def snap_to_axis(anchor: Point, point: Point) -> Point:
    """Constrain *point* so the segment from *anchor* is axis-aligned.

    Mostly-horizontal segments keep the anchor's Y; everything else
    (ties included) keeps the anchor's X.
    """
    dx = abs(point.x - anchor.x)
    dy = abs(point.y - anchor.y)
    if dx > dy:
        return Point(point.x, anchor.y)
    return Point(anchor.x, point.y)
