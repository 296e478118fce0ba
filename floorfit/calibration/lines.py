"""Reference line creation from a drawn segment."""

from __future__ import annotations

import logging

from floorfit.config import PLACEMENT_RULES
from floorfit.geometry.models import Point
from floorfit.geometry.transform import line_length, snap_to_axis

from .models import ReferenceLine


log = logging.getLogger(__name__)


def create_reference_line(
    start: Point,
    end: Point,
    real_length: float,
    image_size: tuple[float, float] | None = None,
    *,
    line_id: str = "",
    snap: bool = False,
    min_length_px: float = PLACEMENT_RULES.min_line_length_px,
) -> ReferenceLine | None:
    """Build a ReferenceLine, or None if the input cannot calibrate.

    A segment shorter than *min_length_px* is treated as a misclick and a
    non-positive *real_length* would make the scale meaningless; both
    return None.  With *snap* the end point is constrained to the nearer
    axis first.
    """
    if snap:
        end = snap_to_axis(start, end)

    drawn = line_length(start, end)
    if drawn <= min_length_px:
        log.debug("Discarding %.1fpx reference line (min %.1fpx)",
                  drawn, min_length_px)
        return None
    if not real_length or real_length <= 0:
        log.debug("Discarding reference line with real length %r", real_length)
        return None

    width, height = image_size if image_size else (None, None)
    return ReferenceLine(
        start=start,
        end=end,
        real_length=float(real_length),
        image_width=width,
        image_height=height,
        id=line_id,
    )
