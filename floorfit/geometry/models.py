"""Geometry dataclasses shared by calibration and placement."""

from __future__ import annotations

from dataclasses import dataclass


VALID_UNITS = ("millimeters", "meters", "feet", "inches")


@dataclass(frozen=True)
class Point:
    """A location.  Whether it is in pixels or millimetres depends on the
    structure holding it."""

    x: float
    y: float


@dataclass(frozen=True)
class Dimension:
    """A size in millimetres."""

    width: float
    height: float


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle, top-left origin, y grows downward."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def inset(self, margin: float) -> Rect:
        """Shrink by *margin* on every side (may produce width/height <= 0)."""
        return Rect(
            x=self.x + margin,
            y=self.y + margin,
            width=self.width - 2 * margin,
            height=self.height - 2 * margin,
        )


@dataclass(frozen=True)
class ScaleInfo:
    """Mapping between the calibration pixel frame and millimetres."""

    image_width: float                  # calibration frame, px
    image_height: float                 # calibration frame, px
    pixels_per_millimeter: float        # > 0
    unit: str = "millimeters"           # one of VALID_UNITS
