"""
Hybrid query tools.

``weaviate-query`` returns Weaviate's own response as structured content;
``weaviate-generate-text`` adds a grouped generative task over the requested
properties.
"""

import logging
from typing import Any

from weaviate_mcp.decorators import (
    handle_errors,
    mcp_tool,
    measure_performance,
    validate_input,
)
from weaviate_mcp.models.request_models import QueryInput

from .base import BaseTool

logger = logging.getLogger(__name__)


def as_structured(body: Any) -> dict[str, Any]:
    """Wrap non-object responses so they can be sent as structured content."""
    if isinstance(body, dict):
        return body
    return {"results": body}


class QueryTool(BaseTool):
    """Plain and generative hybrid search over one collection."""

    @property
    def tool_name(self) -> str:
        return "query_tool"

    @measure_performance(slow_threshold=2.0)
    @handle_errors()
    @validate_input(schema=QueryInput)
    @mcp_tool(
        "weaviate-query",
        "Hybrid (vector + keyword) search over a Weaviate collection. "
        "query: free text to search for. "
        "target_properties: properties to return for each object. "
        "collection: optional collection name, the first available collection when omitted. "
        "limit: optional maximum number of objects (1-50, default 3). "
        "Returns the raw Weaviate response.",
    )
    async def weaviate_query(
        self,
        query: str,
        target_properties: list[str],
        collection: str | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]:
        """Run a hybrid query and return Weaviate's response."""
        resolved, fields = await self.prepare(collection, target_properties)
        body = await self.executor.query(
            resolved.name, query, fields, limit, class_schema=resolved.schema
        )
        return as_structured(body)

    @measure_performance(slow_threshold=10.0)
    @handle_errors()
    @validate_input(schema=QueryInput)
    @mcp_tool(
        "weaviate-generate-text",
        "Generative search: runs a hybrid query and asks Weaviate's generative "
        "module for a brief answer grounded in the matching objects. "
        "query: the question. "
        "target_properties: properties passed to the generator and returned. "
        "collection: optional collection name. "
        "limit: optional maximum number of objects (1-50, default 3).",
    )
    async def weaviate_generate_text(
        self,
        query: str,
        target_properties: list[str],
        collection: str | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]:
        """Run a grouped generative query."""
        resolved, fields = await self.prepare(collection, target_properties)
        body = await self.executor.generate_text(
            resolved.name, query, fields, limit, class_schema=resolved.schema
        )
        return as_structured(body)
