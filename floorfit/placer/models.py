"""Placer dataclasses — fixture templates, placed fixtures and areas."""

from __future__ import annotations

from dataclasses import dataclass, field

from floorfit.geometry.models import Point, Rect


VALID_ROTATIONS = (0, 90)


@dataclass(frozen=True)
class Fixture:
    """A fixture template: a named rectangle in millimetres."""

    id: str
    name: str
    width: float                        # mm
    height: float                       # mm
    color: str | None = None
    icon: str | None = None
    group: str | None = None
    is_custom: bool = False

    @property
    def area(self) -> float:
        """Footprint area in mm², used for placement ordering."""
        return self.width * self.height


@dataclass(frozen=True)
class PlacedFixture:
    """A fixture positioned on the floor plan.

    ``position`` is the top-left corner of the axis-aligned footprint in
    calibration pixels.  At 90° the footprint is ``height × width``.
    """

    id: str
    template_id: str
    name: str
    width: float                        # mm, unrotated
    height: float                       # mm, unrotated
    position: Point
    rotation: int = 0                   # 0 or 90
    color: str | None = None
    icon: str | None = None
    group: str | None = None

    @property
    def footprint_mm(self) -> tuple[float, float]:
        """(width, height) of the footprint after rotation."""
        if self.rotation == 90:
            return (self.height, self.width)
        return (self.width, self.height)

    @classmethod
    def from_fixture(
        cls, fixture: Fixture, placed_id: str, position: Point, rotation: int = 0,
    ) -> PlacedFixture:
        return cls(
            id=placed_id,
            template_id=fixture.id,
            name=fixture.name,
            width=fixture.width,
            height=fixture.height,
            position=position,
            rotation=rotation,
            color=fixture.color,
            icon=fixture.icon,
            group=fixture.group,
        )


@dataclass(frozen=True)
class PlacementArea:
    """Rectangular region for auto-placement, in millimetres.

    Millimetres are measured in the calibration frame, so multiplying by
    the scale gives calibration pixels.
    """

    x: float
    y: float
    width: float
    height: float
    id: str = ""

    def to_rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)


@dataclass
class PlacementReport:
    """Auto-placement outcome with the fixtures that did not fit."""

    placed: list[PlacedFixture]
    skipped: list[str] = field(default_factory=list)    # template ids
    usable_area_px: Rect | None = None
    coverage: float = 0.0               # placed footprint / usable area

    @property
    def complete(self) -> bool:
        return not self.skipped
