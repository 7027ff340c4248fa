"""
Weaviate MCP Resources Implementation.

Read-only views of the Weaviate schema, so a client can discover collections
and their properties before calling the query tools.
"""

import json
import logging

from fastmcp import FastMCP
from fastmcp.exceptions import ResourceError

from weaviate_mcp.exceptions import WeaviateMcpError
from weaviate_mcp.graph.schema import SchemaCache
from weaviate_mcp.providers import MCPProvider
from weaviate_mcp.store.client import WeaviateClient
from weaviate_mcp.tools.collections import CollectionResolver

logger = logging.getLogger(__name__)


def mcp_resource(description: str, uri: str):
    """Decorator to mark methods as MCP resources with description and URI."""

    def decorator(func):
        func._mcp_resource = True
        func._mcp_resource_uri = uri
        func._mcp_resource_description = description
        return func

    return decorator


class Resources(MCPProvider):
    """MCP resources exposing the Weaviate schema as JSON."""

    def __init__(
        self,
        client: WeaviateClient,
        schema_cache: SchemaCache,
        resolver: CollectionResolver | None = None,
    ):
        self.client = client
        self.schema_cache = schema_cache
        self.resolver = resolver or CollectionResolver(schema_cache)

    @property
    def name(self) -> str:
        """Provider name for logging and identification."""
        return "resources"

    def register(self, mcp: FastMCP):
        """Register all schema resources with the MCP server."""
        for attr_name in dir(self):
            attr = getattr(self, attr_name)
            if getattr(attr, "_mcp_resource", False):
                mcp.resource(
                    uri=attr._mcp_resource_uri,
                    description=attr._mcp_resource_description,
                    mime_type="application/json",
                )(attr)

    @mcp_resource(
        "Weaviate collections - name and description of every class in the schema.",
        "weaviate://schema",
    )
    async def get_collections(self) -> str:
        """Weaviate collections - name and description of every class.

        Use this resource to pick a ``collection`` argument for the query
        tools.
        """
        try:
            snapshot = await self.schema_cache.get_schema()
        except WeaviateMcpError as e:
            logger.error("Failed to read schema: %s", e)
            raise ResourceError(f"Failed to read the Weaviate schema: {e}") from e
        return json.dumps(
            [
                {"name": cls.name, "description": cls.description or ""}
                for cls in snapshot.classes
            ],
            indent=2,
            ensure_ascii=False,
        )

    @mcp_resource(
        "Collection schema - full Weaviate class definition of one collection.",
        "weaviate://schema/{collection}",
    )
    async def get_collection_schema(self, collection: str) -> str:
        """Collection schema - properties, data types and vectorizer settings.

        Use this resource to see which ``target_properties`` a collection
        accepts and which properties are references to other collections.
        """
        try:
            name = await self.resolver.resolve_name(collection)
            body = await self.client.get_class_schema(name)
        except WeaviateMcpError as e:
            logger.error("Failed to read schema for %s: %s", collection, e)
            raise ResourceError(
                f"Failed to read schema for collection '{collection}': {e}"
            ) from e
        return json.dumps(body, indent=2, ensure_ascii=False)
