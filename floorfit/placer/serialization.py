"""Placement serialization — JSON conversion."""

from __future__ import annotations

import math

from floorfit.calibration.serialization import finite_float, point_to_dict, parse_point
from floorfit.geometry.models import Rect

from .models import (
    Fixture, PlacedFixture, PlacementArea, PlacementReport, VALID_ROTATIONS,
)


def _optional(**fields) -> dict:
    return {k: v for k, v in fields.items() if v is not None}


def fixture_to_dict(f: Fixture) -> dict:
    """Serialize a Fixture template to a JSON-safe dict."""
    return {
        "id": f.id,
        "name": f.name,
        "width": f.width,
        "height": f.height,
        **_optional(color=f.color, icon=f.icon, group=f.group),
        **({"is_custom": True} if f.is_custom else {}),
    }


def parse_fixture(data: dict) -> Fixture:
    """Parse a fixture dict.  Missing ``name`` defaults to the id.

    Raises ValueError for non-finite dimensions.
    """
    return Fixture(
        id=str(data["id"]),
        name=str(data.get("name", data["id"])),
        width=finite_float(data, "width"),
        height=finite_float(data, "height"),
        color=data.get("color"),
        icon=data.get("icon"),
        group=data.get("group"),
        is_custom=bool(data.get("is_custom", False)),
    )


def placed_fixture_to_dict(pf: PlacedFixture) -> dict:
    """Serialize a PlacedFixture to a JSON-safe dict."""
    return {
        "id": pf.id,
        "template_id": pf.template_id,
        "name": pf.name,
        "width": pf.width,
        "height": pf.height,
        "position": point_to_dict(pf.position),
        "rotation": pf.rotation,
        **_optional(color=pf.color, icon=pf.icon, group=pf.group),
    }


def parse_placed_fixture(data: dict) -> PlacedFixture:
    """Parse a placed fixture dict.

    Raises ValueError for a rotation other than 0 or 90 and for non-finite
    dimensions or position.
    """
    rotation = int(data.get("rotation", 0) or 0)
    if rotation not in VALID_ROTATIONS:
        raise ValueError(f"rotation must be one of {VALID_ROTATIONS}, got {rotation}")
    return PlacedFixture(
        id=str(data["id"]),
        template_id=str(data.get("template_id", data["id"])),
        name=str(data.get("name", data["id"])),
        width=finite_float(data, "width"),
        height=finite_float(data, "height"),
        position=parse_point(data["position"]),
        rotation=rotation,
        color=data.get("color"),
        icon=data.get("icon"),
        group=data.get("group"),
    )


def area_to_dict(area: PlacementArea) -> dict:
    return {
        **({"id": area.id} if area.id else {}),
        "x": area.x,
        "y": area.y,
        "width": area.width,
        "height": area.height,
    }


def parse_area(data: dict) -> PlacementArea:
    return PlacementArea(
        x=finite_float(data, "x"),
        y=finite_float(data, "y"),
        width=finite_float(data, "width"),
        height=finite_float(data, "height"),
        id=str(data.get("id", "")),
    )


def _rect_to_dict(r: Rect) -> dict:
    return {"x": r.x, "y": r.y, "width": r.width, "height": r.height}


def report_to_dict(report: PlacementReport) -> dict:
    """Serialize a PlacementReport for the web API / CLI."""
    return {
        "placed": [placed_fixture_to_dict(pf) for pf in report.placed],
        "skipped": list(report.skipped),
        "complete": report.complete,
        "usable_area_px": (_rect_to_dict(report.usable_area_px)
                           if report.usable_area_px else None),
        "coverage": round(report.coverage, 4),
    }


def parse_clearance(value) -> float | None:
    """Parse an optional clearance in mm.  Raises ValueError unless >= 0."""
    if value is None:
        return None
    clearance = float(value)
    if not (math.isfinite(clearance) and clearance >= 0):
        raise ValueError(f"clearance must be a finite number >= 0, got {clearance}")
    return clearance
