"""Time-bounded cache of the Weaviate schema.

The cache is a single ``SchemaSnapshot`` reference. A refresh builds a new
snapshot and swaps the reference in one assignment, so concurrent readers see
either the old or the new snapshot, never a mix. Concurrent refreshes may
each hit Weaviate; the last one to finish wins.
"""

import logging
import time
from dataclasses import dataclass

from weaviate_mcp.exceptions import StoreError, UpstreamUnavailableError
from weaviate_mcp.graph.models import ClassSchema
from weaviate_mcp.store.client import WeaviateClient

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_TTL = 60.0


@dataclass(frozen=True)
class SchemaSnapshot:
    """Immutable copy of the schema as fetched at ``fetched_at``."""

    classes: tuple[ClassSchema, ...]
    fetched_at: float

    @property
    def class_names(self) -> list[str]:
        return [cls.name for cls in self.classes if cls.name]

    def get_class(self, name: str) -> ClassSchema | None:
        for cls in self.classes:
            if cls.name == name:
                return cls
        return None

    def is_fresh(self, now: float, ttl: float) -> bool:
        """Whether the snapshot is younger than ``ttl`` seconds at ``now``."""
        return now - self.fetched_at < ttl


class SchemaCache:
    """Shared schema snapshot with a fixed time-to-live."""

    def __init__(
        self,
        client: WeaviateClient,
        ttl: float = DEFAULT_SCHEMA_TTL,
        clock=time.monotonic,
    ):
        self.client = client
        self.ttl = ttl
        self._clock = clock
        self._snapshot: SchemaSnapshot | None = None

    @property
    def snapshot(self) -> SchemaSnapshot | None:
        """The cached snapshot, fresh or not."""
        return self._snapshot

    def invalidate(self) -> None:
        self._snapshot = None

    async def get_schema(self, force_refresh: bool = False) -> SchemaSnapshot:
        """Return the cached snapshot or fetch a new one.

        Args:
            force_refresh: Bypass the cache even when it is still fresh.

        Raises:
            UpstreamUnavailableError: If Weaviate cannot be reached.
        """
        cached = self._snapshot
        if (
            not force_refresh
            and cached is not None
            and cached.is_fresh(self._clock(), self.ttl)
        ):
            return cached

        raw = await self.client.get_schema()
        snapshot = SchemaSnapshot(
            classes=tuple(ClassSchema.from_dict(cls) for cls in raw.get("classes") or ()),
            fetched_at=self._clock(),
        )
        self._snapshot = snapshot
        logger.debug(
            "Schema refreshed: %d classes (forced=%s)", len(snapshot.classes), force_refresh
        )
        return snapshot

    async def try_get_schema(self, force_refresh: bool = False) -> SchemaSnapshot | None:
        """Best-effort variant of ``get_schema``; ``None`` when Weaviate is down."""
        try:
            return await self.get_schema(force_refresh=force_refresh)
        except (UpstreamUnavailableError, StoreError) as e:
            logger.warning("Schema unavailable, continuing without it: %s", e)
            return None

    async def get_class_schema(self, name: str) -> ClassSchema:
        """Fetch a single class directly from Weaviate, bypassing the cache.

        Raises:
            ClassNotFoundError: If the class does not exist.
        """
        raw = await self.client.get_class_schema(name)
        return ClassSchema.from_dict(raw)
