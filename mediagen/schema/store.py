"""In-process schema cache with a fixed TTL."""

import time
from typing import Callable

from ..config import SCHEMA_CACHE_TTL
from ..models.schema import ExtractedSchema, SchemaCacheEntry

CacheKey = tuple[str, str]  # (provider, model_id)


class SchemaStore:
    """
    Extraction results keyed by (provider, model_id).

    One instance lives for the whole process. Entries are replaced as whole
    values, so concurrent refreshes only duplicate work.
    """

    def __init__(self, ttl: float = SCHEMA_CACHE_TTL, clock: Callable[[], float] = time.time):
        self.ttl = ttl
        self.clock = clock
        self._entries: dict[CacheKey, SchemaCacheEntry] = {}

    def lookup(self, key: CacheKey) -> SchemaCacheEntry | None:
        """Return the entry if it is younger than the TTL, else None."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self.clock() - entry.timestamp >= self.ttl:
            return None
        return entry

    def store(self, key: CacheKey, schema: ExtractedSchema) -> SchemaCacheEntry:
        """Replace the entry for key with a freshly timestamped one."""
        entry = SchemaCacheEntry(
            parameters=list(schema.parameters),
            inputs=list(schema.inputs),
            timestamp=self.clock(),
        )
        self._entries[key] = entry
        return entry
