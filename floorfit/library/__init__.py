"""Fixture library — load, validate, query, and serialize library/*.json."""

from .models import FixtureGroup, ValidationError, LibraryResult
from .loader import load_library, get_fixture, library_dir, LIBRARY_DIR
from .serialization import library_to_dict

__all__ = [
    # Models
    "FixtureGroup", "ValidationError", "LibraryResult",
    # Loader
    "load_library", "get_fixture", "library_dir", "LIBRARY_DIR",
    # Serialization
    "library_to_dict",
]
