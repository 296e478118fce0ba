"""Shared tuning constants for calibration and placement.

Both the **calibrator** (which judges how well reference lines agree) and
the **placer** (which scans the placement area on a grid) read their
thresholds from this single source of truth.

Change a value here and every stage picks it up automatically.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PlacementRules:
    """Tuning knobs for the grid-search placer and the scale calibrator.

    Pixel values refer to the calibration pixel frame; millimetre values
    to real-world units.
    """

    coarse_step_min_px: float = 10.0
    """Smallest coarse grid step."""

    coarse_step_max_px: float = 100.0
    """Largest coarse grid step."""

    coarse_step_divisor: float = 10.0
    """Coarse step is the orientation width divided by this, clamped."""

    fine_step_min_px: float = 5.0
    """Smallest step of the fallback fine pass."""

    fine_step_factor: float = 0.5
    """Fine step as a fraction of the coarse step."""

    default_clearance_mm: float = 0.0
    """Margin inset from the placement area.  Usually 0 because clearance
    is already baked into the fixture dimensions."""

    fit_tolerance_px: float = 1e-9
    """Slack for containment comparisons so exact fits survive float
    rounding."""

    two_line_mismatch_pct: float = 5.0
    """Two reference lines disagreeing by more than this are inconsistent."""

    multi_line_deviation_pct: float = 10.0
    """With three or more lines, a line deviating from the mean scale by
    more than this is inconsistent."""

    consistency_note_pct: float = 1.0
    """Consistent lines above this mismatch get the percentage in their
    message."""

    slight_mismatch_pct: float = 3.0
    """Axis mismatch below this is "slight", above it "significant"."""

    min_line_length_px: float = 10.0
    """Reference lines shorter than this are discarded as misclicks."""

    # ── Derived helpers ────────────────────────────────────────────

    def coarse_step(self, width_px: float) -> float:
        """Adaptive grid step for an orientation of the given pixel width."""
        return max(
            self.coarse_step_min_px,
            min(self.coarse_step_max_px, width_px / self.coarse_step_divisor),
        )

    def fine_step(self, coarse_step: float) -> float:
        """Step for the second, finer pass after a failed coarse pass."""
        return max(self.fine_step_min_px, coarse_step * self.fine_step_factor)


# Module-level singleton, importable everywhere.
PLACEMENT_RULES = PlacementRules()
