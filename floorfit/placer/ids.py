"""Identity generators for placed fixtures.

The engine asks a generator for one id per placed fixture.  Injecting it
keeps the packing itself deterministic; pick ``sequential_ids`` for
reproducible results and ``uuid_ids`` when ids must be globally unique.
"""

from __future__ import annotations

import itertools
import uuid
from typing import Callable, Iterable

from .models import Fixture


IdGenerator = Callable[[Fixture], str]


def sequential_ids(prefix: str = "auto", taken: Iterable[str] = ()) -> IdGenerator:
    """``prefix-1``, ``prefix-2``, … skipping ids already in *taken*."""
    used = set(taken)
    counter = itertools.count(1)

    def _next(fixture: Fixture) -> str:
        while True:
            candidate = f"{prefix}-{next(counter)}"
            if candidate not in used:
                used.add(candidate)
                return candidate

    return _next


def uuid_ids(prefix: str = "auto") -> IdGenerator:
    """Random ``prefix-<12 hex>`` ids."""

    def _next(fixture: Fixture) -> str:
        return f"{prefix}-{uuid.uuid4().hex[:12]}"

    return _next
