"""
Reference traversal tools.

Both tools return the plain-text traversal report: matches with the labels
they link to, unrequested fields and the links available from the
collection.
"""

import logging

from weaviate_mcp.decorators import (
    handle_errors,
    mcp_tool,
    measure_performance,
    validate_input,
)
from weaviate_mcp.models.request_models import OriginInput, TraversalInput
from weaviate_mcp.query.executor import OriginShape

from .base import BaseTool

logger = logging.getLogger(__name__)

DEFAULT_ORIGIN_COLLECTION = "Etapa"


class TraversalTool(BaseTool):
    """One-hop and origin traversals along reference properties."""

    def __init__(self, *args, origin_shape: OriginShape | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.origin_shape = origin_shape or OriginShape()

    @property
    def tool_name(self) -> str:
        return "traversal_tool"

    @measure_performance(slow_threshold=5.0)
    @handle_errors()
    @validate_input(schema=TraversalInput)
    @mcp_tool(
        "weaviate-query-with-refs",
        "Hybrid search that follows one reference property from every match. "
        "query: free text to search for. "
        "ref_property: reference property to follow (e.g. 'belongsToFluxo'). "
        "ref_properties: properties to return from the referenced objects. "
        "target_properties: properties to return from the matches. "
        "collection: optional collection name. "
        "limit: optional maximum number of matches (1-50, default 3). "
        "Returns a text report with matches, unrequested fields and further links.",
    )
    async def weaviate_query_with_refs(
        self,
        query: str,
        ref_property: str,
        ref_properties: list[str],
        target_properties: list[str],
        collection: str | None = None,
        limit: int | None = None,
    ) -> str:
        """Follow ``ref_property`` from each match and report the result."""
        resolved, base_fields = await self.prepare(collection, target_properties)
        return await self.executor.query_with_refs(
            resolved.name,
            ref_property,
            query,
            limit,
            base_fields=base_fields,
            ref_fields=ref_properties,
        )

    @measure_performance(slow_threshold=5.0)
    @handle_errors()
    @validate_input(schema=OriginInput)
    @mcp_tool(
        "weaviate-query-origin",
        "Find where matching steps come from: for each match of a hybrid search "
        "over the collection (Etapa by default), reports the flow it belongs to "
        "and the entities reachable through its files. "
        "query: free text to search for. "
        "base_properties: properties to return from the matches (default: name). "
        "collection: optional collection name. "
        "limit: optional maximum number of matches (1-50, default 3).",
    )
    async def weaviate_query_origin(
        self,
        query: str,
        collection: str | None = None,
        base_properties: list[str] | None = None,
        limit: int | None = None,
    ) -> str:
        """Run the origin traversal and report the result."""
        if not collection:
            available = await self.resolver.available_collections()
            if DEFAULT_ORIGIN_COLLECTION in available:
                collection = DEFAULT_ORIGIN_COLLECTION
        properties = base_properties or [self.origin_shape.label_field]
        resolved, base_fields = await self.prepare(collection, properties)
        return await self.executor.query_origin(
            resolved.name,
            query,
            limit,
            base_fields=base_fields,
            shape=self.origin_shape,
        )
