"""Schema resolution: fetch, classify and cache provider parameter schemas."""

from .extractor import extract_schema
from .fetchers import fetch_fal_schema, fetch_replicate_schema
from .mapping import INPUT_PATTERNS, map_inputs
from .refs import resolve_ref
from .store import SchemaStore

__all__ = [
    "INPUT_PATTERNS",
    "SchemaStore",
    "extract_schema",
    "fetch_fal_schema",
    "fetch_replicate_schema",
    "map_inputs",
    "resolve_ref",
]
