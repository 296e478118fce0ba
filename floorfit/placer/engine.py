"""Main placement engine — greedy largest-first grid-search packer.

All collision work happens in calibration pixels.  The placement area
arrives in millimetres and is converted once on entry; placed positions
leave in calibration pixels, the same frame existing fixtures use.

Nothing here raises for infeasible geometry: fixtures that do not fit are
left out of the result.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from floorfit.config import PLACEMENT_RULES, PlacementRules
from floorfit.geometry.models import Dimension, Point, Rect, ScaleInfo
from floorfit.geometry.rects import overlaps_any, covered_fraction
from floorfit.geometry.transform import check_fit

from .geometry import area_to_px, usable_area, placed_rect, orientations
from .ids import IdGenerator, sequential_ids
from .models import Fixture, PlacedFixture, PlacementArea, PlacementReport


log = logging.getLogger(__name__)


# ── Grid search ────────────────────────────────────────────────────


def _scan(
    width: float, height: float,
    usable: Rect,
    occupied: Sequence[Rect],
    step: float,
    tolerance: float,
) -> Point | None:
    """First free top-left position on a *step* grid, row by row.

    Rows run top to bottom, columns left to right, both starting at the
    usable area's top-left corner.  Grid positions are computed from
    their index so the scan does not accumulate float drift.
    """
    max_x = usable.right - width
    max_y = usable.bottom - height

    row = 0
    while True:
        y = usable.y + row * step
        if y > max_y + tolerance:
            return None
        col = 0
        while True:
            x = usable.x + col * step
            if x > max_x + tolerance:
                break
            if not overlaps_any(Rect(x, y, width, height), occupied):
                return Point(x, y)
            col += 1
        row += 1


def find_position(
    width: float, height: float,
    usable: Rect,
    occupied: Sequence[Rect],
    *,
    rules: PlacementRules = PLACEMENT_RULES,
) -> Point | None:
    """Find a free spot for a width × height rectangle (pixels).

    Tries a coarse grid sized to the rectangle first, then one finer pass
    before giving up.
    """
    coarse = rules.coarse_step(width)
    pos = _scan(width, height, usable, occupied, coarse, rules.fit_tolerance_px)
    if pos is not None:
        return pos

    fine = rules.fine_step(coarse)
    return _scan(width, height, usable, occupied, fine, rules.fit_tolerance_px)


# ── Main placement function ───────────────────────────────────────


def _valid_scale(scale: ScaleInfo | None) -> bool:
    if scale is None:
        return False
    ppm = scale.pixels_per_millimeter
    return _positive(ppm)


def _positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


def _place(
    area: PlacementArea,
    fixtures: Sequence[Fixture],
    existing: Sequence[PlacedFixture],
    scale: ScaleInfo,
    clearance: float,
    id_generator: IdGenerator | None,
    rules: PlacementRules,
) -> tuple[list[PlacedFixture], list[Fixture], Rect | None]:
    """Shared core of auto_place_fixtures / plan_placement.

    Returns (placed, not_placed, usable_area_px).
    """
    if not _valid_scale(scale):
        log.warning("Auto-placement skipped: no valid scale")
        return [], list(fixtures), None

    if not (math.isfinite(clearance) and clearance >= 0):
        log.warning("Auto-placement skipped: clearance must be >= 0, got %r",
                    clearance)
        return [], list(fixtures), None

    usable_mm = usable_area(area, clearance)
    if usable_mm is None:
        log.info("Placement area %.0f×%.0fmm too small for %.0fmm clearance",
                 area.width, area.height, clearance)
        return [], list(fixtures), None

    usable = area_to_px(usable_mm, scale)
    if not (_positive(usable.width) and _positive(usable.height)):
        log.warning("Placement area does not convert to finite pixels")
        return [], list(fixtures), None
    tol = rules.fit_tolerance_px

    # Largest first; sorted() is stable so equal areas keep input order.
    # NaN keys would break the ordering, so unusable sizes sort last.
    ordered = sorted(
        fixtures,
        key=lambda f: f.area if math.isfinite(f.area) else -math.inf,
        reverse=True,
    )

    # NaN obstacle footprints compare as overlapping every candidate.
    occupied: list[Rect] = [placed_rect(pf, scale) for pf in existing]
    next_id = id_generator or sequential_ids(taken={pf.id for pf in existing})

    placed: list[PlacedFixture] = []
    not_placed: list[Fixture] = []

    for fixture in ordered:
        if not (_positive(fixture.width) and _positive(fixture.height)):
            log.warning("Skipping %s (%s): invalid size %.1f×%.1fmm",
                        fixture.id, fixture.name, fixture.width, fixture.height)
            not_placed.append(fixture)
            continue

        result: tuple[Point, float, float, int] | None = None
        for w, h, rotation in orientations(fixture, scale):
            if w > usable.width + tol or h > usable.height + tol:
                log.debug("%s rot=%d° (%.1f×%.1fpx) larger than usable area",
                          fixture.id, rotation, w, h)
                continue
            pos = find_position(w, h, usable, occupied, rules=rules)
            if pos is not None:
                result = (pos, w, h, rotation)
                break
            log.debug("%s rot=%d°: no free slot", fixture.id, rotation)

        if result is None:
            log.info("Could not place %s (%s, %.0f×%.0fmm)",
                     fixture.id, fixture.name, fixture.width, fixture.height)
            not_placed.append(fixture)
            continue

        pos, w, h, rotation = result
        pf = PlacedFixture.from_fixture(fixture, next_id(fixture), pos, rotation)
        placed.append(pf)
        occupied.append(Rect(pos.x, pos.y, w, h))
        log.info("Auto-placed %s as %s at (%.1f, %.1f)px rot=%d°",
                 fixture.id, pf.id, pos.x, pos.y, rotation)

    return placed, not_placed, usable


def auto_place_fixtures(
    area: PlacementArea,
    fixtures: Sequence[Fixture],
    existing: Sequence[PlacedFixture],
    scale: ScaleInfo,
    *,
    clearance: float | None = None,
    id_generator: IdGenerator | None = None,
    rules: PlacementRules = PLACEMENT_RULES,
) -> list[PlacedFixture]:
    """Place as many *fixtures* inside *area* as fit, largest first.

    Parameters
    ----------
    area : PlacementArea
        Target region in millimetres (calibration frame).
    fixtures : sequence of Fixture
        Candidates.  Not modified.
    existing : sequence of PlacedFixture
        Obstacles already on the plan, positions in calibration pixels.
        Not modified.
    scale : ScaleInfo
        Calibration used for every mm → px conversion.
    clearance : float, optional
        Margin (mm) inset from every side of *area*.  Defaults to
        ``rules.default_clearance_mm`` (0: clearance is part of the
        fixture dimensions).  A negative or non-finite value places
        nothing.
    id_generator : callable, optional
        Supplies ids for placed fixtures.  Defaults to
        ``sequential_ids`` seeded with the ids of *existing*.

    Returns
    -------
    list of PlacedFixture
        Newly placed fixtures in placement order.  Fixtures that did not
        fit are absent; an empty list is a valid outcome.
    """
    if clearance is None:
        clearance = rules.default_clearance_mm
    placed, _, _ = _place(area, fixtures, existing, scale,
                          clearance, id_generator, rules)
    return placed


def plan_placement(
    area: PlacementArea,
    fixtures: Sequence[Fixture],
    existing: Sequence[PlacedFixture],
    scale: ScaleInfo,
    *,
    clearance: float | None = None,
    id_generator: IdGenerator | None = None,
    rules: PlacementRules = PLACEMENT_RULES,
) -> PlacementReport:
    """Like auto_place_fixtures, plus skipped fixtures and coverage."""
    if clearance is None:
        clearance = rules.default_clearance_mm
    placed, not_placed, usable = _place(area, fixtures, existing, scale,
                                        clearance, id_generator, rules)

    coverage = 0.0
    if usable is not None and placed:
        coverage = covered_fraction(
            [placed_rect(pf, scale) for pf in placed], usable,
        )

    if not_placed:
        log.warning("%d of %d fixture(s) did not fit",
                    len(not_placed), len(fixtures))

    return PlacementReport(
        placed=placed,
        skipped=[f.id for f in not_placed],
        usable_area_px=usable,
        coverage=coverage,
    )


# ── Manual drop ────────────────────────────────────────────────────


def place_single_fixture(
    fixture: Fixture,
    scale: ScaleInfo,
    image_size: tuple[float, float] | None = None,
    *,
    id_generator: IdGenerator | None = None,
) -> PlacedFixture | None:
    """Drop one fixture onto the plan without collision checks.

    The fixture's top-left corner goes to the image centre; if it would
    stick out of the image there, the top-left corner of the image is
    tried instead.  Returns None when it fits in neither spot.
    """
    if not _valid_scale(scale):
        return None
    width, height = image_size or (scale.image_width, scale.image_height)
    size = Dimension(fixture.width, fixture.height)
    next_id = id_generator or sequential_ids(prefix="manual")

    for pos in (Point(width / 2, height / 2), Point(0.0, 0.0)):
        if check_fit(pos, size, scale):
            pf = PlacedFixture.from_fixture(fixture, next_id(fixture), pos)
            log.info("Dropped %s at (%.1f, %.1f)px", fixture.id, pos.x, pos.y)
            return pf

    log.info("%s (%.0f×%.0fmm) is too large for the floor plan",
             fixture.id, fixture.width, fixture.height)
    return None
