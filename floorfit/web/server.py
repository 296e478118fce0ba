"""
FastAPI web server — calibration, fit checks and auto-placement over HTTP.

The server holds no state: every request carries the reference lines,
scale and fixtures it needs, and gets the full result back.
"""

from __future__ import annotations

import logging
import math
import os
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from floorfit.calibration import calibrate, calibration_to_dict, parse_reference_lines, parse_scale
from floorfit.calibration.serialization import parse_point
from floorfit.geometry import Dimension, check_fit
from floorfit.library import load_library, library_to_dict
from floorfit.placer import (
    plan_placement, place_single_fixture, area_from_drag,
    parse_fixture, parse_placed_fixture, parse_area, parse_clearance,
    placed_fixture_to_dict, area_to_dict, report_to_dict,
)


log = logging.getLogger(__name__)

# ── .env loader ────────────────────────────────────────────────────

def _load_env():
    root = Path(__file__).resolve().parents[2]
    for name in (".env", ".env.local"):
        p = root / name
        if p.exists():
            for line in p.read_text(encoding="utf-8").splitlines():
                line = line.strip()
                if line and "=" in line and not line.startswith("#"):
                    k, v = line.split("=", 1)
                    k = k.strip()
                    v = v.strip().strip('"').strip("'")
                    if k and k not in os.environ:
                        os.environ[k] = v

_load_env()

# ── App ────────────────────────────────────────────────────────────

app = FastAPI(title="floorfit")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Models ─────────────────────────────────────────────────────────

class PointModel(BaseModel):
    x: float
    y: float


class SizeModel(BaseModel):
    width: float
    height: float


class ScaleModel(BaseModel):
    image_width: float
    image_height: float
    pixels_per_millimeter: float
    unit: str = "millimeters"


class LineModel(BaseModel):
    start: PointModel
    end: PointModel
    real_length: float
    image_width: float | None = None
    image_height: float | None = None
    id: str = ""


class FixtureModel(BaseModel):
    id: str
    name: str | None = None
    width: float
    height: float
    color: str | None = None
    icon: str | None = None
    group: str | None = None
    is_custom: bool = False


class PlacedFixtureModel(BaseModel):
    id: str
    template_id: str | None = None
    name: str | None = None
    width: float
    height: float
    position: PointModel
    rotation: int = 0
    color: str | None = None
    icon: str | None = None
    group: str | None = None


class AreaModel(BaseModel):
    x: float
    y: float
    width: float
    height: float
    id: str = ""


class CalibrateRequest(BaseModel):
    lines: list[LineModel]
    fallback_size: tuple[float, float] | None = None


class FitRequest(BaseModel):
    position: PointModel
    size: SizeModel
    scale: ScaleModel


class PlaceRequest(BaseModel):
    area: AreaModel
    fixtures: list[FixtureModel]
    existing: list[PlacedFixtureModel] = []
    scale: ScaleModel
    clearance: float | None = None


class PlaceSingleRequest(BaseModel):
    fixture: FixtureModel
    scale: ScaleModel
    image_size: tuple[float, float] | None = None


class AreaRequest(BaseModel):
    start: PointModel
    end: PointModel
    scale: ScaleModel
    displayed_size: tuple[float, float] | None = None


def _dump(model: BaseModel) -> dict:
    return model.model_dump(exclude_none=True)


def _bad_request(exc: Exception) -> HTTPException:
    log.info("Rejected request: %s", exc)
    return HTTPException(400, f"Invalid input: {exc}")


# ── Routes ─────────────────────────────────────────────────────────

@app.get("/api/library")
def get_library():
    return library_to_dict(load_library())


@app.post("/api/calibrate")
def post_calibrate(req: CalibrateRequest):
    try:
        lines = parse_reference_lines([_dump(l) for l in req.lines])
    except (KeyError, TypeError, ValueError) as exc:
        raise _bad_request(exc)
    return calibration_to_dict(calibrate(lines, fallback_size=req.fallback_size))


@app.post("/api/check_fit")
def post_check_fit(req: FitRequest):
    try:
        scale = parse_scale(_dump(req.scale))
        position = parse_point(_dump(req.position))
    except (KeyError, TypeError, ValueError) as exc:
        raise _bad_request(exc)
    fits = check_fit(position, Dimension(req.size.width, req.size.height), scale)
    return {"fits": fits}


@app.post("/api/place")
def post_place(req: PlaceRequest):
    try:
        scale = parse_scale(_dump(req.scale))
        area = parse_area(_dump(req.area))
        fixtures = [parse_fixture(_dump(f)) for f in req.fixtures]
        existing = [parse_placed_fixture(_dump(p)) for p in req.existing]
        clearance = parse_clearance(req.clearance)
    except (KeyError, TypeError, ValueError) as exc:
        raise _bad_request(exc)

    report = plan_placement(area, fixtures, existing, scale,
                            clearance=clearance)
    return report_to_dict(report)


@app.post("/api/place_single")
def post_place_single(req: PlaceSingleRequest):
    try:
        scale = parse_scale(_dump(req.scale))
        fixture = parse_fixture(_dump(req.fixture))
    except (KeyError, TypeError, ValueError) as exc:
        raise _bad_request(exc)

    pf = place_single_fixture(fixture, scale, req.image_size)
    return {"placed": placed_fixture_to_dict(pf) if pf else None}


@app.post("/api/area")
def post_area(req: AreaRequest):
    try:
        scale = parse_scale(_dump(req.scale))
        if req.displayed_size is not None and not all(
                math.isfinite(v) and v > 0 for v in req.displayed_size):
            raise ValueError(f"displayed_size must be positive, got {req.displayed_size}")
        start = parse_point(_dump(req.start))
        end = parse_point(_dump(req.end))
    except (KeyError, TypeError, ValueError) as exc:
        raise _bad_request(exc)

    area = area_from_drag(start, end, scale, req.displayed_size)
    return area_to_dict(area)


def main(host: str = "127.0.0.1", port: int = 8000):
    import uvicorn
    uvicorn.run("floorfit.web.server:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
