"""
Base tool functionality for Weaviate MCP tools.

Tools share the query executor and the collection resolver; this module
holds the steps every tool repeats before it runs a query.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from weaviate_mcp.query.executor import QueryExecutor
from weaviate_mcp.settings import Settings

from .collections import (
    CollectionResolver,
    ResolvedCollection,
    validate_target_properties,
)

logger = logging.getLogger(__name__)


class BaseTool(ABC):
    """Base class for all Weaviate MCP tools."""

    def __init__(
        self,
        executor: QueryExecutor,
        resolver: CollectionResolver,
        settings: Settings | None = None,
    ):
        self.logger = logger
        self.executor = executor
        self.resolver = resolver
        self.settings = settings or executor.settings

    @property
    @abstractmethod
    def tool_name(self) -> str:
        """Return the name of this tool - must be implemented by subclasses."""
        pass

    async def prepare(
        self, collection: str | None, properties: Sequence[str]
    ) -> tuple[ResolvedCollection, list[str]]:
        """Resolve the collection and check the requested properties on it."""
        resolved = await self.resolver.resolve(collection)
        selected = validate_target_properties(
            resolved.name, properties, resolved.schema
        )
        logger.debug(
            "%s: collection=%s properties=%s", self.tool_name, resolved.name, selected
        )
        return resolved, selected
