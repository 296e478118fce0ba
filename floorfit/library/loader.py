"""Library loader — reads library/*.json files, parses and validates them.

Each file holds one group::

    {
      "group": "Shelving",
      "color": "#4a90d9",
      "fixtures": [
        {"id": "gondola_1200", "name": "Gondola 1200", "width": 1200, "height": 600}
      ]
    }
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from floorfit.placer.models import Fixture

from .models import FixtureGroup, ValidationError, LibraryResult


LIBRARY_DIR = Path(__file__).resolve().parent.parent.parent / "library"


def library_dir() -> Path:
    """Library location, overridable with ``FLOORFIT_LIBRARY_DIR``."""
    override = os.environ.get("FLOORFIT_LIBRARY_DIR")
    return Path(override) if override else LIBRARY_DIR


# ── Validation ─────────────────────────────────────────────────────

def _validate_fixture(fx: Fixture) -> list[ValidationError]:
    errs: list[ValidationError] = []
    if not fx.name.strip():
        errs.append(ValidationError(fx.id, "name", "Must not be empty"))
    if fx.width <= 0:
        errs.append(ValidationError(fx.id, "width", "Must be > 0"))
    if fx.height <= 0:
        errs.append(ValidationError(fx.id, "height", "Must be > 0"))
    return errs


# ── Parsing ────────────────────────────────────────────────────────

def _parse_fixture(data: dict, group: str, group_color: str | None) -> Fixture:
    return Fixture(
        id=data["id"],
        name=data.get("name", data["id"]),
        width=float(data["width"]),
        height=float(data["height"]),
        color=data.get("color", group_color),
        icon=data.get("icon"),
        group=group,
        is_custom=data.get("is_custom", False),
    )


# ── Public API ─────────────────────────────────────────────────────

def load_library(directory: Path | None = None) -> LibraryResult:
    """Load all library/*.json files, parse and validate.

    Fixtures that fail to parse are skipped (error recorded).  Fixtures
    that parse but fail validation are still included.
    """
    d = directory or library_dir()
    fixtures: list[Fixture] = []
    groups: list[FixtureGroup] = []
    errors: list[ValidationError] = []

    json_files = sorted(d.glob("*.json"))
    if not json_files:
        errors.append(ValidationError("_library", "files", f"No .json files found in {d}"))
        return LibraryResult(fixtures=fixtures, groups=groups, errors=errors)

    for path in json_files:
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            errors.append(ValidationError(path.stem, "json", f"Parse error: {exc}"))
            continue
        except OSError as exc:
            errors.append(ValidationError(path.stem, "file", f"Read error: {exc}"))
            continue
        if not isinstance(raw, dict):
            errors.append(ValidationError(path.stem, "json", "Top level must be an object"))
            continue

        group_name = raw.get("group") or path.stem
        group = FixtureGroup(name=group_name, color=raw.get("color"),
                             source_file=str(path))

        for i, item in enumerate(raw.get("fixtures", [])):
            try:
                fx = _parse_fixture(item, group_name, group.color)
            except (KeyError, TypeError, ValueError) as exc:
                fid = item.get("id", f"{path.stem}[{i}]") if isinstance(item, dict) else f"{path.stem}[{i}]"
                errors.append(ValidationError(fid, "parse", f"Missing/invalid field: {exc}"))
                continue
            errors.extend(_validate_fixture(fx))
            fixtures.append(fx)
            group.fixture_ids.append(fx.id)

        groups.append(group)

    # Check for duplicate IDs across files
    id_counts: dict[str, int] = {}
    for fx in fixtures:
        id_counts[fx.id] = id_counts.get(fx.id, 0) + 1
    for fid, count in id_counts.items():
        if count > 1:
            errors.append(ValidationError(fid, "id", f"Duplicate fixture ID (appears {count} times)"))

    # Group names must be unique too
    seen_groups: set[str] = set()
    for g in groups:
        if g.name in seen_groups:
            errors.append(ValidationError("_library", "group", f"Duplicate group '{g.name}'"))
        seen_groups.add(g.name)

    return LibraryResult(fixtures=fixtures, groups=groups, errors=errors)


def get_fixture(library: list[Fixture] | LibraryResult, fixture_id: str) -> Fixture | None:
    """Look up a fixture by ID. Returns None if not found."""
    items = library.fixtures if isinstance(library, LibraryResult) else library
    for f in items:
        if f.id == fixture_id:
            return f
    return None
