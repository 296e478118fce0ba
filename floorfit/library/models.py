"""Fixture library dataclasses — typed representations of library/*.json."""

from __future__ import annotations

from dataclasses import dataclass, field

from floorfit.placer.models import Fixture


@dataclass
class FixtureGroup:
    name: str
    fixture_ids: list[str] = field(default_factory=list)
    color: str | None = None            # default colour for members
    source_file: str = ""               # path of the JSON file (for error reporting)


@dataclass
class ValidationError:
    fixture_id: str
    field: str
    message: str

    def __str__(self) -> str:
        return f"[{self.fixture_id}] {self.field}: {self.message}"


@dataclass
class LibraryResult:
    """Result of loading the library — fixtures, groups + validation errors."""
    fixtures: list[Fixture]
    groups: list[FixtureGroup]
    errors: list[ValidationError]

    @property
    def ok(self) -> bool:
        return len(self.errors) == 0

    def in_group(self, name: str) -> list[Fixture]:
        return [f for f in self.fixtures if f.group == name]
