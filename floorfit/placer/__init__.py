"""Placer — arranges fixtures inside a placement area without overlaps.

Submodules:
  models        Fixture, PlacedFixture, PlacementArea, PlacementReport.
  ids           Injectable identity generators for placed fixtures.
  geometry      Footprints and areas in calibration pixels.
  engine        Greedy largest-first grid search; single manual drop.
  area          Placement area from a dragged rectangle.
  serialization JSON conversion.
"""

from .models import (
    Fixture, PlacedFixture, PlacementArea, PlacementReport, VALID_ROTATIONS,
)
from .ids import IdGenerator, sequential_ids, uuid_ids
from .engine import (
    auto_place_fixtures, plan_placement, find_position, place_single_fixture,
)
from .area import area_from_drag
from .geometry import placed_rect, area_to_px, usable_area
from .serialization import (
    fixture_to_dict, parse_fixture,
    placed_fixture_to_dict, parse_placed_fixture,
    area_to_dict, parse_area, parse_clearance,
    report_to_dict,
)

__all__ = [
    # Models
    "Fixture", "PlacedFixture", "PlacementArea", "PlacementReport",
    "VALID_ROTATIONS",
    # Ids
    "IdGenerator", "sequential_ids", "uuid_ids",
    # Engine
    "auto_place_fixtures", "plan_placement", "find_position",
    "place_single_fixture", "area_from_drag",
    # Geometry (used by tests)
    "placed_rect", "area_to_px", "usable_area",
    # Serialization
    "fixture_to_dict", "parse_fixture",
    "placed_fixture_to_dict", "parse_placed_fixture",
    "area_to_dict", "parse_area", "parse_clearance", "report_to_dict",
]
