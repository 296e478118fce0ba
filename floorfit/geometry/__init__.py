"""Geometry — shared dataclasses, unit conversions and rectangle tests.

Submodules:
  models     Point, Dimension, Rect, ScaleInfo.
  transform  Pixel/millimetre conversion, fit check, display frame mapping.
  rects      Overlap / containment tests and Shapely-based coverage.
"""

from .models import Point, Dimension, Rect, ScaleInfo, VALID_UNITS
from .transform import (
    pixels_to_real_units,
    real_units_to_pixels,
    line_length,
    check_fit,
    display_to_calibration,
    calibration_to_display,
    snap_to_axis,
)
from .rects import rects_overlap, overlaps_any, rect_within, covered_fraction

__all__ = [
    # Models
    "Point", "Dimension", "Rect", "ScaleInfo", "VALID_UNITS",
    # Transform
    "pixels_to_real_units", "real_units_to_pixels", "line_length",
    "check_fit", "display_to_calibration", "calibration_to_display",
    "snap_to_axis",
    # Rectangles
    "rects_overlap", "overlaps_any", "rect_within", "covered_fraction",
]
