"""Axis-aligned rectangle helpers for the placer."""

from __future__ import annotations

from typing import Iterable

from shapely.geometry import box as shapely_box
from shapely.ops import unary_union

from .models import Rect


def rects_overlap(a: Rect, b: Rect) -> bool:
    """True if two rectangles share interior area.

    Rectangles that only touch along an edge or corner do not overlap.
    """
    return not (
        a.x + a.width <= b.x
        or a.x >= b.x + b.width
        or a.y + a.height <= b.y
        or a.y >= b.y + b.height
    )


def overlaps_any(rect: Rect, occupied: Iterable[Rect]) -> bool:
    """True if *rect* overlaps any rectangle in *occupied*."""
    return any(rects_overlap(rect, o) for o in occupied)


def rect_within(inner: Rect, outer: Rect, tolerance: float = 0.0) -> bool:
    """True if *inner* lies inside *outer* (edges may coincide)."""
    return (
        inner.x >= outer.x - tolerance
        and inner.y >= outer.y - tolerance
        and inner.right <= outer.right + tolerance
        and inner.bottom <= outer.bottom + tolerance
    )


def rect_to_box(r: Rect):
    """Shapely polygon for a Rect."""
    return shapely_box(r.x, r.y, r.right, r.bottom)


def covered_fraction(rects: Iterable[Rect], region: Rect) -> float:
    """Fraction of *region* covered by the union of *rects* (0..1)."""
    if region.width <= 0 or region.height <= 0:
        return 0.0
    boxes = [rect_to_box(r) for r in rects if r.width > 0 and r.height > 0]
    if not boxes:
        return 0.0
    covered = unary_union(boxes).intersection(rect_to_box(region))
    return min(1.0, covered.area / region.area)
