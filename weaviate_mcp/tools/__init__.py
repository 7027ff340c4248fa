"""Weaviate MCP Tools Package.

Each module holds one group of tools; ``Tools`` registers them all with the
MCP server.
"""

import logging

from fastmcp import FastMCP

from weaviate_mcp.providers import MCPProvider
from weaviate_mcp.query.executor import QueryExecutor
from weaviate_mcp.settings import Settings

from .base import BaseTool
from .collections import CollectionResolver, ResolvedCollection
from .query_tool import QueryTool
from .traversal_tool import TraversalTool

logger = logging.getLogger(__name__)


class Tools(MCPProvider):
    """Main Tools class that delegates to individual tool implementations."""

    def __init__(
        self,
        executor: QueryExecutor,
        resolver: CollectionResolver,
        settings: Settings | None = None,
    ):
        self.settings = settings or executor.settings
        self.executor = executor
        self.resolver = resolver

        self.query_tool = QueryTool(executor, resolver, self.settings)
        self.traversal_tool = TraversalTool(executor, resolver, self.settings)

        self._tool_instances = [self.query_tool, self.traversal_tool]

    @property
    def name(self) -> str:
        """Provider name for logging and identification."""
        return "tools"

    def _tool_methods(self):
        for tool in self._tool_instances:
            for attr_name in dir(tool):
                if attr_name.startswith("_"):
                    continue
                attr = getattr(tool, attr_name)
                if getattr(attr, "_mcp_tool", False):
                    yield attr

    def register(self, mcp: FastMCP):
        """Register every enabled tool with the MCP server."""
        for method in self._tool_methods():
            if self.settings.is_tool_disabled(method._mcp_name):
                logger.info("Tool %s is disabled, not registering", method._mcp_name)
                continue
            mcp.tool(name=method._mcp_name, description=method._mcp_description)(
                method
            )

    def get_registered_tool_names(self) -> list[str]:
        """Names of the tools ``register`` would expose."""
        return sorted(
            method._mcp_name
            for method in self._tool_methods()
            if not self.settings.is_tool_disabled(method._mcp_name)
        )

    # Primary method delegation
    async def weaviate_query(self, *args, **kwargs):
        """Delegate to query tool."""
        return await self.query_tool.weaviate_query(*args, **kwargs)

    async def weaviate_generate_text(self, *args, **kwargs):
        """Delegate to query tool."""
        return await self.query_tool.weaviate_generate_text(*args, **kwargs)

    async def weaviate_query_with_refs(self, *args, **kwargs):
        """Delegate to traversal tool."""
        return await self.traversal_tool.weaviate_query_with_refs(*args, **kwargs)

    async def weaviate_query_origin(self, *args, **kwargs):
        """Delegate to traversal tool."""
        return await self.traversal_tool.weaviate_query_origin(*args, **kwargs)


__all__ = [
    "BaseTool",
    "CollectionResolver",
    "QueryTool",
    "ResolvedCollection",
    "Tools",
    "TraversalTool",
]
