"""Tests for the coordinate transform and rectangle helpers.

Validates:
  - mm ↔ px conversions round-trip
  - check_fit accepts exact fits and rejects 1px overshoots
  - check_fit fails closed on bad input instead of raising
  - displayed ↔ calibration frame mapping and axis snapping
  - rectangle overlap (touching is not overlapping) and coverage
"""

from __future__ import annotations

import math
import unittest

from floorfit.geometry import (
    Point, Dimension, Rect, ScaleInfo,
    pixels_to_real_units, real_units_to_pixels, line_length, check_fit,
    display_to_calibration, calibration_to_display, snap_to_axis,
    rects_overlap, overlaps_any, rect_within, covered_fraction,
)


class TestUnitConversion(unittest.TestCase):

    def setUp(self):
        self.scale = ScaleInfo(image_width=800, image_height=600,
                               pixels_per_millimeter=2.0)

    def test_real_units_to_pixels(self):
        self.assertEqual(real_units_to_pixels(250, self.scale), 500)

    def test_pixels_to_real_units(self):
        self.assertEqual(pixels_to_real_units(500, self.scale), 250)

    def test_round_trip(self):
        """mm → px → mm is the identity for awkward scales too."""
        for ppm in (0.1, 0.37, 2.0, 13.7):
            scale = ScaleInfo(1000, 1000, ppm)
            for mm in (0.5, 1.0, 333.3, 12000.0):
                back = pixels_to_real_units(real_units_to_pixels(mm, scale), scale)
                self.assertAlmostEqual(back, mm, places=9)

    def test_line_length(self):
        self.assertAlmostEqual(line_length(Point(0, 0), Point(3, 4)), 5.0)
        self.assertEqual(line_length(Point(7, 7), Point(7, 7)), 0.0)


class TestCheckFit(unittest.TestCase):

    def setUp(self):
        self.scale = ScaleInfo(image_width=800, image_height=600,
                               pixels_per_millimeter=2.0)
        self.full = Dimension(800 / 2.0, 600 / 2.0)

    def test_exact_fit_at_origin(self):
        self.assertTrue(check_fit(Point(0, 0), self.full, self.scale))

    def test_one_pixel_past_each_edge(self):
        self.assertFalse(check_fit(Point(1, 0), self.full, self.scale))
        self.assertFalse(check_fit(Point(0, 1), self.full, self.scale))
        self.assertFalse(check_fit(Point(-1, 0), self.full, self.scale))
        self.assertFalse(check_fit(Point(0, -1), self.full, self.scale))

    def test_exact_fit_survives_float_rounding(self):
        """image / ppm * ppm may overshoot by an ulp; still an exact fit."""
        scale = ScaleInfo(image_width=1000, image_height=700,
                          pixels_per_millimeter=3.7)
        size = Dimension(1000 / 3.7, 700 / 3.7)
        self.assertTrue(check_fit(Point(0, 0), size, scale))

    def test_small_fixture_inside(self):
        self.assertTrue(check_fit(Point(100, 100), Dimension(50, 50), self.scale))

    def test_fails_closed(self):
        """Bad input returns False rather than raising."""
        self.assertFalse(check_fit(Point(0, 0), Dimension(10, 10), None))
        zero = ScaleInfo(800, 600, 0.0)
        self.assertFalse(check_fit(Point(0, 0), Dimension(10, 10), zero))
        negative = ScaleInfo(800, 600, -1.0)
        self.assertFalse(check_fit(Point(0, 0), Dimension(10, 10), negative))
        self.assertFalse(check_fit(Point(0, 0), Dimension(-10, 10), self.scale))
        self.assertFalse(check_fit(Point(math.nan, 0), Dimension(10, 10), self.scale))
        self.assertFalse(check_fit(Point(0, 0), Dimension(math.inf, 10), self.scale))


class TestDisplayFrame(unittest.TestCase):

    def setUp(self):
        self.scale = ScaleInfo(image_width=800, image_height=600,
                               pixels_per_millimeter=1.0)

    def test_display_to_calibration(self):
        p = display_to_calibration(Point(100, 50), (400, 300), self.scale)
        self.assertAlmostEqual(p.x, 200)
        self.assertAlmostEqual(p.y, 100)

    def test_non_uniform_display(self):
        """X and Y factors are independent."""
        p = display_to_calibration(Point(100, 100), (400, 600), self.scale)
        self.assertAlmostEqual(p.x, 200)
        self.assertAlmostEqual(p.y, 100)

    def test_inverse(self):
        p = Point(123.0, 456.0)
        there = calibration_to_display(p, (1200, 900), self.scale)
        back = display_to_calibration(there, (1200, 900), self.scale)
        self.assertAlmostEqual(back.x, p.x)
        self.assertAlmostEqual(back.y, p.y)


class TestSnapToAxis(unittest.TestCase):

    def test_mostly_horizontal(self):
        self.assertEqual(snap_to_axis(Point(0, 0), Point(10, 3)), Point(10, 0))

    def test_mostly_vertical(self):
        self.assertEqual(snap_to_axis(Point(0, 0), Point(3, 10)), Point(0, 10))

    def test_tie_goes_vertical(self):
        self.assertEqual(snap_to_axis(Point(1, 1), Point(6, 6)), Point(1, 6))


class TestRects(unittest.TestCase):

    def test_touching_edges_do_not_overlap(self):
        a = Rect(0, 0, 100, 100)
        self.assertFalse(rects_overlap(a, Rect(100, 0, 50, 50)))
        self.assertFalse(rects_overlap(a, Rect(0, 100, 50, 50)))
        self.assertFalse(rects_overlap(a, Rect(100, 100, 50, 50)))

    def test_overlap(self):
        self.assertTrue(rects_overlap(Rect(0, 0, 100, 100), Rect(99, 99, 10, 10)))

    def test_contained_overlaps(self):
        self.assertTrue(rects_overlap(Rect(0, 0, 100, 100), Rect(10, 10, 5, 5)))

    def test_overlaps_any(self):
        occupied = [Rect(0, 0, 10, 10), Rect(50, 50, 10, 10)]
        self.assertTrue(overlaps_any(Rect(55, 55, 2, 2), occupied))
        self.assertFalse(overlaps_any(Rect(20, 20, 2, 2), occupied))
        self.assertFalse(overlaps_any(Rect(20, 20, 2, 2), []))

    def test_rect_within(self):
        outer = Rect(0, 0, 100, 100)
        self.assertTrue(rect_within(Rect(0, 0, 100, 100), outer))
        self.assertFalse(rect_within(Rect(1, 0, 100, 100), outer))

    def test_inset(self):
        self.assertEqual(Rect(0, 0, 100, 50).inset(10), Rect(10, 10, 80, 30))
        inner = Rect(0, 0, 100, 50).inset(30)
        self.assertLessEqual(inner.height, 0)

    def test_covered_fraction(self):
        region = Rect(0, 0, 100, 100)
        self.assertAlmostEqual(covered_fraction([Rect(0, 0, 50, 100)], region), 0.5)
        # Overlapping rectangles are only counted once
        self.assertAlmostEqual(
            covered_fraction([Rect(0, 0, 50, 100), Rect(25, 0, 50, 100)], region),
            0.75,
        )
        self.assertEqual(covered_fraction([], region), 0.0)


if __name__ == "__main__":
    unittest.main()
