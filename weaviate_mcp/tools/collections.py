"""
Collection resolution and property validation.

Tools accept an optional collection name. The resolver turns it into a
concrete class from the shared schema snapshot, refreshing the snapshot once
when a name is not known yet, and checks requested properties against the
class definition.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from weaviate_mcp.exceptions import (
    ClassNotFoundError,
    PropertyNotAllowedError,
    ReferenceSelectionError,
)
from weaviate_mcp.graph.models import ClassSchema
from weaviate_mcp.graph.schema import SchemaCache
from weaviate_mcp.query.builder import dedupe_fields

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedCollection:
    name: str
    schema: ClassSchema


class CollectionResolver:
    """Resolves tool-supplied collection names against the schema cache."""

    def __init__(self, schema_cache: SchemaCache):
        self.schema_cache = schema_cache

    async def available_collections(self, force_refresh: bool = False) -> list[str]:
        snapshot = await self.schema_cache.get_schema(force_refresh=force_refresh)
        return snapshot.class_names

    async def resolve_name(self, candidate: str | None) -> str:
        """Return the collection name to query.

        A blank or missing candidate falls back to the first collection in
        the schema. An unknown name triggers exactly one forced refresh of
        the snapshot before it is rejected.

        Raises:
            ClassNotFoundError: If no collection exists or the name is unknown.
        """
        name = (candidate or "").strip()
        available = await self.available_collections()

        if not name:
            if not available:
                raise ClassNotFoundError(None)
            logger.warning(
                "No collection given, defaulting to first available: %s", available[0]
            )
            return available[0]

        if name in available:
            return name

        logger.info("Collection %s not in cached schema, refreshing", name)
        available = await self.available_collections(force_refresh=True)
        if name in available:
            return name
        raise ClassNotFoundError(name, available)

    async def resolve(self, candidate: str | None) -> ResolvedCollection:
        """Resolve the name and fetch the class definition."""
        name = await self.resolve_name(candidate)
        schema = await self.schema_cache.get_class_schema(name)
        return ResolvedCollection(name=name, schema=schema)


def validate_target_properties(
    collection: str, properties: Sequence[str], class_schema: ClassSchema
) -> list[str]:
    """Deduplicated ``properties``, all plain fields declared on ``class_schema``.

    Raises:
        PropertyNotAllowedError: On the first property the class does not declare.
        ReferenceSelectionError: On the first reference property.
    """
    allowed = class_schema.property_names
    selected = dedupe_fields(properties)
    for prop in selected:
        if prop not in allowed:
            raise PropertyNotAllowedError(prop, collection, allowed)
        if class_schema.get_property(prop).is_reference:
            raise ReferenceSelectionError(
                prop, collection, class_schema.scalar_property_names
            )
    return selected
