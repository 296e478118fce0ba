"""Tests for the HTTP API.

Validates:
  - Each endpoint returns the serialized result of its operation
  - Semantically invalid input is a 400, malformed bodies a 422
  - NaN and Infinity in a body are rejected with a 400, not a server error
"""

from __future__ import annotations

import json
import math
import unittest

from fastapi.testclient import TestClient

from floorfit.calibration import reference_line_to_dict
from floorfit.placer import area_to_dict, fixture_to_dict, placed_fixture_to_dict
from floorfit.web.server import app
from tests.floorplan_fixture import (
    make_area, make_candidates, make_existing, make_reference_lines,
)


SCALE = {"image_width": 2000, "image_height": 1200, "pixels_per_millimeter": 0.1}


class TestServer(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def test_library(self):
        r = self.client.get("/api/library")
        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertTrue(body["ok"])
        self.assertEqual(body["fixture_count"], 11)

    def test_calibrate(self):
        lines = [reference_line_to_dict(l) for l in make_reference_lines()]
        r = self.client.post("/api/calibrate", json={"lines": lines})
        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertTrue(body["calibrated"])
        self.assertAlmostEqual(body["scale"]["pixels_per_millimeter"], 0.1)
        self.assertTrue(body["validation"]["is_valid"])

    def test_calibrate_empty(self):
        r = self.client.post("/api/calibrate", json={"lines": []})
        self.assertEqual(r.status_code, 200)
        self.assertFalse(r.json()["calibrated"])

    def test_check_fit(self):
        payload = {"position": {"x": 0, "y": 0},
                   "size": {"width": 20000, "height": 12000}, "scale": SCALE}
        self.assertTrue(self.client.post("/api/check_fit", json=payload).json()["fits"])
        payload["position"] = {"x": 1, "y": 0}
        self.assertFalse(self.client.post("/api/check_fit", json=payload).json()["fits"])

    def test_place(self):
        payload = {
            "area": area_to_dict(make_area()),
            "fixtures": [fixture_to_dict(f) for f in make_candidates()],
            "existing": [placed_fixture_to_dict(p) for p in make_existing()],
            "scale": SCALE,
        }
        r = self.client.post("/api/place", json=payload)
        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertEqual(len(body["placed"]), 8)
        self.assertEqual(body["skipped"], [])
        self.assertEqual(body["placed"][0]["id"], "auto-2")

    def test_place_single(self):
        payload = {"fixture": {"id": "end_cap", "width": 600, "height": 450},
                   "scale": SCALE}
        r = self.client.post("/api/place_single", json=payload)
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["placed"]["position"], {"x": 1000, "y": 600})

    def test_place_single_too_large(self):
        payload = {"fixture": {"id": "huge", "width": 50000, "height": 450},
                   "scale": SCALE}
        r = self.client.post("/api/place_single", json=payload)
        self.assertIsNone(r.json()["placed"])

    def test_area(self):
        payload = {"start": {"x": 500, "y": 300}, "end": {"x": 100, "y": 100},
                   "scale": SCALE, "displayed_size": [1000, 600]}
        r = self.client.post("/api/area", json=payload)
        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertAlmostEqual(body["x"], 2000)
        self.assertAlmostEqual(body["width"], 8000)
        self.assertAlmostEqual(body["height"], 4000)

    def test_zero_scale_rejected(self):
        payload = {"position": {"x": 0, "y": 0},
                   "size": {"width": 1, "height": 1},
                   "scale": {**SCALE, "pixels_per_millimeter": 0}}
        r = self.client.post("/api/check_fit", json=payload)
        self.assertEqual(r.status_code, 400)

    def test_bad_rotation_rejected(self):
        existing = placed_fixture_to_dict(make_existing()[0])
        existing["rotation"] = 45
        payload = {"area": area_to_dict(make_area()), "fixtures": [],
                   "existing": [existing], "scale": SCALE}
        r = self.client.post("/api/place", json=payload)
        self.assertEqual(r.status_code, 400)

    def test_missing_field(self):
        r = self.client.post("/api/place", json={"fixtures": [], "scale": SCALE})
        self.assertEqual(r.status_code, 422)

    def _post_raw(self, url: str, payload: dict):
        # json.dumps writes NaN / Infinity tokens, which the server accepts
        return self.client.post(url, content=json.dumps(payload),
                                headers={"Content-Type": "application/json"})

    def _place_payload(self) -> dict:
        return {
            "area": area_to_dict(make_area()),
            "fixtures": [fixture_to_dict(f) for f in make_candidates()],
            "scale": SCALE,
        }

    def test_nan_area_rejected(self):
        payload = self._place_payload()
        payload["area"]["width"] = math.nan
        self.assertEqual(self._post_raw("/api/place", payload).status_code, 400)

    def test_infinite_fixture_rejected(self):
        payload = self._place_payload()
        payload["fixtures"][0]["width"] = math.inf
        self.assertEqual(self._post_raw("/api/place", payload).status_code, 400)

    def test_nan_position_rejected(self):
        payload = {"position": {"x": math.nan, "y": 0},
                   "size": {"width": 1, "height": 1}, "scale": SCALE}
        self.assertEqual(self._post_raw("/api/check_fit", payload).status_code, 400)

    def test_nan_displayed_size_rejected(self):
        payload = {"start": {"x": 0, "y": 0}, "end": {"x": 10, "y": 10},
                   "scale": SCALE, "displayed_size": [math.nan, 600]}
        self.assertEqual(self._post_raw("/api/area", payload).status_code, 400)

    def test_negative_clearance_rejected(self):
        payload = {**self._place_payload(), "clearance": -200}
        r = self.client.post("/api/place", json=payload)
        self.assertEqual(r.status_code, 400)
        self.assertIn("clearance", r.json()["detail"])


if __name__ == "__main__":
    unittest.main()
