"""Tests for the fixture library loader.

Validates:
  - The shipped library loads without errors
  - Group colours are inherited by member fixtures
  - Bad files and bad entries are reported, not raised
"""

from __future__ import annotations

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from floorfit.library import (
    load_library, get_fixture, library_dir, library_to_dict,
)


class TestShippedLibrary(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.result = load_library()

    def test_loads_cleanly(self):
        self.assertTrue(self.result.ok, [str(e) for e in self.result.errors])

    def test_counts(self):
        self.assertEqual(len(self.result.fixtures), 11)
        self.assertEqual(sorted(g.name for g in self.result.groups),
                         ["Checkout", "Display", "Shelving"])

    def test_group_membership(self):
        shelving = self.result.in_group("Shelving")
        self.assertEqual(len(shelving), 4)
        self.assertTrue(all(f.group == "Shelving" for f in shelving))

    def test_colour_inherited(self):
        gondola = get_fixture(self.result, "gondola_1200")
        self.assertIsNotNone(gondola)
        self.assertEqual(gondola.color, "#4a90d9")
        self.assertEqual((gondola.width, gondola.height), (1200, 600))

    def test_get_fixture_missing(self):
        self.assertIsNone(get_fixture(self.result, "nope"))
        self.assertIsNone(get_fixture(self.result.fixtures, "nope"))

    def test_to_dict(self):
        d = library_to_dict(self.result)
        json.dumps(d)
        self.assertTrue(d["ok"])
        self.assertEqual(d["fixture_count"], 11)


class TestLibraryErrors(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, name: str, content) -> None:
        text = content if isinstance(content, str) else json.dumps(content)
        (self.dir / name).write_text(text, encoding="utf-8")

    def test_empty_directory(self):
        result = load_library(self.dir)
        self.assertFalse(result.ok)
        self.assertEqual(result.errors[0].field, "files")

    def test_bad_json(self):
        self._write("broken.json", "{not json")
        result = load_library(self.dir)
        self.assertEqual([(e.fixture_id, e.field) for e in result.errors],
                         [("broken", "json")])

    def test_missing_width_skipped(self):
        self._write("g.json", {"group": "G", "fixtures": [
            {"id": "a", "height": 10},
            {"id": "b", "width": 10, "height": 10},
        ]})
        result = load_library(self.dir)
        self.assertEqual([f.id for f in result.fixtures], ["b"])
        self.assertEqual(result.errors[0].fixture_id, "a")
        self.assertEqual(result.errors[0].field, "parse")

    def test_negative_width_reported_but_kept(self):
        self._write("g.json", {"group": "G", "fixtures": [
            {"id": "a", "width": -5, "height": 10},
        ]})
        result = load_library(self.dir)
        self.assertEqual([f.id for f in result.fixtures], ["a"])
        self.assertEqual([(e.fixture_id, e.field) for e in result.errors],
                         [("a", "width")])

    def test_duplicate_ids_across_files(self):
        self._write("a.json", {"group": "A", "fixtures": [
            {"id": "x", "width": 1, "height": 1}]})
        self._write("b.json", {"group": "B", "fixtures": [
            {"id": "x", "width": 2, "height": 2}]})
        result = load_library(self.dir)
        self.assertIn(("x", "id"), [(e.fixture_id, e.field) for e in result.errors])

    def test_group_defaults_to_file_stem(self):
        self._write("seating.json", {"fixtures": [
            {"id": "bench", "width": 1500, "height": 400}]})
        result = load_library(self.dir)
        self.assertTrue(result.ok)
        self.assertEqual(result.groups[0].name, "seating")
        self.assertEqual(result.fixtures[0].group, "seating")

    def test_env_override(self):
        with mock.patch.dict(os.environ, {"FLOORFIT_LIBRARY_DIR": str(self.dir)}):
            self.assertEqual(library_dir(), self.dir)


if __name__ == "__main__":
    unittest.main()
