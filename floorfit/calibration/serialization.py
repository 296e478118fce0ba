"""Calibration serialization — JSON conversion."""

from __future__ import annotations

import math

from floorfit.geometry.models import Point, ScaleInfo, VALID_UNITS

from .models import ReferenceLine, Calibration
from .scale import mismatch_severity


def finite_float(data: dict, key: str) -> float:
    """``float(data[key])``; raises ValueError for NaN or infinity."""
    value = float(data[key])
    if not math.isfinite(value):
        raise ValueError(f"{key} must be a finite number, got {value}")
    return value


def point_to_dict(p: Point) -> dict:
    return {"x": p.x, "y": p.y}


def parse_point(data: dict) -> Point:
    return Point(x=finite_float(data, "x"), y=finite_float(data, "y"))


def scale_to_dict(scale: ScaleInfo) -> dict:
    """Serialize a ScaleInfo to a JSON-safe dict."""
    return {
        "image_width": scale.image_width,
        "image_height": scale.image_height,
        "pixels_per_millimeter": scale.pixels_per_millimeter,
        "unit": scale.unit,
    }


def parse_scale(data: dict) -> ScaleInfo:
    """Parse a scale dict.  Raises ValueError for a non-positive or non-finite scale."""
    ppm = finite_float(data, "pixels_per_millimeter")
    if not ppm > 0:
        raise ValueError(f"pixels_per_millimeter must be > 0, got {ppm}")
    unit = data.get("unit", "millimeters")
    if unit not in VALID_UNITS:
        raise ValueError(f"Unknown unit '{unit}', expected one of {VALID_UNITS}")
    width = finite_float(data, "image_width")
    height = finite_float(data, "image_height")
    if not (width > 0 and height > 0):
        raise ValueError(f"image size must be positive, got {width}×{height}")
    return ScaleInfo(
        image_width=width,
        image_height=height,
        pixels_per_millimeter=ppm,
        unit=unit,
    )


def reference_line_to_dict(line: ReferenceLine) -> dict:
    """Serialize a ReferenceLine (pixel_length included for readers)."""
    return {
        **({"id": line.id} if line.id else {}),
        "start": point_to_dict(line.start),
        "end": point_to_dict(line.end),
        "real_length": line.real_length,
        "pixel_length": line.pixel_length,
        **({"image_width": line.image_width} if line.image_width else {}),
        **({"image_height": line.image_height} if line.image_height else {}),
    }


def parse_reference_line(data: dict) -> ReferenceLine:
    """Parse a reference line dict.

    Any ``pixel_length`` in the input is ignored; it is recomputed from the
    endpoints.
    """
    width = data.get("image_width")
    height = data.get("image_height")
    return ReferenceLine(
        start=parse_point(data["start"]),
        end=parse_point(data["end"]),
        real_length=finite_float(data, "real_length"),
        image_width=float(width) if width else None,
        image_height=float(height) if height else None,
        id=str(data.get("id", "")),
    )


def parse_reference_lines(data: list) -> list[ReferenceLine]:
    return [parse_reference_line(d) for d in data]


def calibration_to_dict(cal: Calibration) -> dict:
    """Serialize a Calibration for the web API / CLI."""
    return {
        "calibrated": cal.calibrated,
        "line_count": cal.line_count,
        "scale": scale_to_dict(cal.scale) if cal.scale else None,
        "axis": {
            "avg_scale": cal.axis.avg_scale,
            "scale_x": cal.axis.scale_x,
            "scale_y": cal.axis.scale_y,
            "mismatch_percent": cal.axis.mismatch_percent,
            "severity": mismatch_severity(cal.axis.mismatch_percent),
        },
        "validation": {
            "is_valid": cal.validation.is_valid,
            "inconsistent_line_index": cal.validation.inconsistent_line_index,
            "mismatch_percent": cal.validation.mismatch_percent,
            "message": cal.validation.message,
        },
        "hint": cal.hint,
    }
