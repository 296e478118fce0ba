"""Calibration dataclasses — reference lines and the derived scale."""

from __future__ import annotations

from dataclasses import dataclass, field

from floorfit.geometry.models import Point, ScaleInfo
from floorfit.geometry.transform import line_length


@dataclass(frozen=True)
class ReferenceLine:
    """A user-drawn line of known real length.

    ``start``/``end`` are in the displayed pixel frame the line was drawn
    on, whose size is recorded in ``image_width``/``image_height``.
    ``pixel_length`` is always derived from the endpoints.
    """

    start: Point
    end: Point
    real_length: float                  # mm
    image_width: float | None = None    # displayed frame at creation, px
    image_height: float | None = None
    id: str = ""
    pixel_length: float = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "pixel_length", line_length(self.start, self.end))

    @property
    def dx(self) -> float:
        return abs(self.end.x - self.start.x)

    @property
    def dy(self) -> float:
        return abs(self.end.y - self.start.y)

    @property
    def is_horizontal(self) -> bool:
        """Mostly-X lines are horizontal; ties count as vertical."""
        return self.dx > self.dy

    @property
    def has_frame(self) -> bool:
        return bool(self.image_width) and bool(self.image_height)


@dataclass
class AxisScales:
    """Scale averaged separately over horizontal and vertical lines."""

    avg_scale: float                    # 0 when there are no lines
    scale_x: float | None
    scale_y: float | None
    mismatch_percent: float | None


@dataclass
class LineValidation:
    """Advisory consistency check across reference lines."""

    is_valid: bool
    inconsistent_line_index: int | None = None
    mismatch_percent: float | None = None
    message: str | None = None


@dataclass
class Calibration:
    """Everything derived from one set of reference lines."""

    scale: ScaleInfo | None
    axis: AxisScales
    validation: LineValidation
    hint: str
    line_count: int = 0

    @property
    def calibrated(self) -> bool:
        return self.scale is not None
