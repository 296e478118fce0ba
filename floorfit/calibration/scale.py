"""Scale calibration — derive pixels-per-millimetre from reference lines.

Everything here is recomputed from the full line set on every call; there
is no state between calls.  Consistency validation is advisory: it never
prevents a scale from being produced.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from floorfit.config import PLACEMENT_RULES, PlacementRules
from floorfit.geometry.models import ScaleInfo

from .models import ReferenceLine, AxisScales, LineValidation, Calibration


log = logging.getLogger(__name__)


def line_scale(line: ReferenceLine) -> float | None:
    """Pixels per millimetre implied by one line (None if unusable)."""
    real = line.real_length
    if real is None or not (math.isfinite(real) and real > 0):
        return None
    return line.pixel_length / real


def _indexed_scales(lines: Sequence[ReferenceLine]) -> list[tuple[int, float]]:
    """(original index, scale) for every line that yields a scale."""
    out: list[tuple[int, float]] = []
    for i, line in enumerate(lines):
        s = line_scale(line)
        if s is not None:
            out.append((i, s))
    return out


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def _percent_of(diff: float, base: float) -> float:
    return (diff / base) * 100 if base > 0 else 0.0


# ── Scale estimates ────────────────────────────────────────────────


def calculate_scale_from_lines(lines: Sequence[ReferenceLine]) -> float | None:
    """Arithmetic mean of the per-line scales, or None without usable lines."""
    scales = [s for _, s in _indexed_scales(lines)]
    if not scales:
        return None
    return _mean(scales)


def calculate_separate_scales(lines: Sequence[ReferenceLine]) -> AxisScales:
    """Average horizontal-dominant and vertical-dominant lines separately.

    A line is horizontal when ``|dx| > |dy|``; ties count as vertical.
    ``mismatch_percent`` is only set when both axes have at least one line.
    """
    horizontal: list[float] = []
    vertical: list[float] = []
    every: list[float] = []

    for line in lines:
        s = line_scale(line)
        if s is None:
            continue
        every.append(s)
        if line.is_horizontal:
            horizontal.append(s)
        else:
            vertical.append(s)

    if not every:
        return AxisScales(avg_scale=0.0, scale_x=None, scale_y=None,
                          mismatch_percent=None)

    scale_x = _mean(horizontal) if horizontal else None
    scale_y = _mean(vertical) if vertical else None

    mismatch = None
    if scale_x is not None and scale_y is not None:
        mismatch = _percent_of(abs(scale_x - scale_y), (scale_x + scale_y) / 2)

    return AxisScales(
        avg_scale=_mean(every),
        scale_x=scale_x,
        scale_y=scale_y,
        mismatch_percent=mismatch,
    )


# ── Consistency validation ─────────────────────────────────────────


def _most_deviant(indexed_devs: list[tuple[int, float]]) -> tuple[int, float]:
    """Line with the largest deviation; equal deviations pick the later line.

    Preferring the later line keeps the flag stable as more lines are
    drawn: an earlier line never steals the flag on a tie.
    """
    max_dev = max(d for _, d in indexed_devs)
    tied = [
        i for i, d in indexed_devs
        if math.isclose(d, max_dev, rel_tol=1e-9, abs_tol=1e-12)
    ]
    return tied[-1], max_dev


def validate_reference_lines(
    lines: Sequence[ReferenceLine],
    *,
    rules: PlacementRules = PLACEMENT_RULES,
) -> LineValidation:
    """Check whether the reference lines agree on a single scale.

    Two lines are compared directly (threshold 5 %); three or more are
    each compared to the mean scale (threshold 10 %).  Returns the index
    of the most suspicious line when the threshold is exceeded.
    """
    indexed = _indexed_scales(lines)
    if len(indexed) < 2:
        return LineValidation(is_valid=True)

    if len(indexed) == 2:
        (_, s1), (_, s2) = indexed
        avg = (s1 + s2) / 2
        mismatch = _percent_of(abs(s1 - s2), avg)

        if mismatch > rules.two_line_mismatch_pct:
            idx, _ = _most_deviant([(i, abs(s - avg)) for i, s in indexed])
            return LineValidation(
                is_valid=False,
                inconsistent_line_index=idx,
                mismatch_percent=mismatch,
                message=(f"Line {idx + 1} appears to be incorrect "
                         f"({mismatch:.1f}% difference)"),
            )

        message = "Lines are consistent"
        if mismatch > rules.consistency_note_pct:
            message = f"Lines are consistent ({mismatch:.1f}% difference)"
        return LineValidation(is_valid=True, mismatch_percent=mismatch,
                              message=message)

    avg = _mean([s for _, s in indexed])
    idx, max_dev = _most_deviant([(i, abs(s - avg)) for i, s in indexed])
    max_pct = _percent_of(max_dev, avg)

    if max_pct > rules.multi_line_deviation_pct:
        return LineValidation(
            is_valid=False,
            inconsistent_line_index=idx,
            mismatch_percent=max_pct,
            message=(f"Line {idx + 1} appears to be incorrect "
                     f"({max_pct:.1f}% deviation from average)"),
        )

    message = "All lines are consistent"
    if max_pct > rules.consistency_note_pct:
        message = f"All lines are consistent (max {max_pct:.1f}% deviation)"
    return LineValidation(is_valid=True, mismatch_percent=max_pct,
                          message=message)


# ── Presentation helpers ───────────────────────────────────────────


def mismatch_severity(
    percent: float | None, *, rules: PlacementRules = PLACEMENT_RULES,
) -> str | None:
    """Bucket an X/Y mismatch: "consistent", "slight" or "significant"."""
    if percent is None:
        return None
    if percent < rules.consistency_note_pct:
        return "consistent"
    if percent < rules.slight_mismatch_pct:
        return "slight"
    return "significant"


def calibration_hint(lines: Sequence[ReferenceLine], axis: AxisScales) -> str:
    """Suggest the next reference line the user should draw.

    Only lines that yield a scale are counted.
    """
    n = len(_indexed_scales(lines))
    if n == 0:
        return "Draw at least one reference line to set the scale."
    if n == 1:
        return "Draw a second reference line to verify scale accuracy."
    if axis.scale_x is None:
        return "Draw a horizontal line to check the X-axis scale."
    if axis.scale_y is None:
        return "Draw a vertical line to check the Y-axis scale."
    return f"Scale calculated from {n} lines."


# ── Main entry point ───────────────────────────────────────────────


def calibrate(
    lines: Sequence[ReferenceLine],
    fallback_size: tuple[float, float] | None = None,
) -> Calibration:
    """Derive the scale, axis split, validation and hint from *lines*.

    The returned ScaleInfo takes its reference frame from the most
    recently added usable line: all lines are assumed to be drawn on the
    same displayed image, and the last one reflects its current size.
    Lines with a non-positive real length are skipped.  A last line
    without a recorded frame falls back to *fallback_size*.
    """
    lines = list(lines)
    avg = calculate_scale_from_lines(lines)
    axis = calculate_separate_scales(lines)
    validation = validate_reference_lines(lines)
    hint = calibration_hint(lines, axis)

    scale: ScaleInfo | None = None
    if avg is not None and avg > 0:
        last = lines[_indexed_scales(lines)[-1][0]]
        if last.has_frame:
            frame = (last.image_width, last.image_height)
        else:
            frame = fallback_size
        if frame:
            scale = ScaleInfo(
                image_width=float(frame[0]),
                image_height=float(frame[1]),
                pixels_per_millimeter=avg,
                unit="millimeters",
            )
            log.info("Calibrated %.4f px/mm from %d line(s), frame %.0f×%.0f",
                     avg, len(lines), scale.image_width, scale.image_height)
        else:
            log.warning("Scale %.4f px/mm has no reference frame; "
                        "leaving uncalibrated", avg)

    if not validation.is_valid:
        log.warning("Reference lines disagree: %s", validation.message)

    return Calibration(
        scale=scale,
        axis=axis,
        validation=validation,
        hint=hint,
        line_count=len(lines),
    )
