"""Library serialization — convert dataclasses to JSON-safe dicts."""

from __future__ import annotations

from floorfit.placer.serialization import fixture_to_dict

from .models import LibraryResult


def library_to_dict(result: LibraryResult) -> dict:
    """Serialize a LibraryResult to a JSON-safe dict for the web API."""
    return {
        "ok": result.ok,
        "fixture_count": len(result.fixtures),
        "fixtures": [fixture_to_dict(f) for f in result.fixtures],
        "groups": [
            {
                "name": g.name,
                "fixture_ids": list(g.fixture_ids),
                **({"color": g.color} if g.color else {}),
            }
            for g in result.groups
        ],
        "errors": [{"fixture_id": e.fixture_id, "field": e.field, "message": e.message}
                   for e in result.errors],
    }
