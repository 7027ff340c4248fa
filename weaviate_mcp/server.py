"""
Weaviate MCP Server - Composable Integrator.

Combines the query tools and the schema resources from separate providers on
one FastMCP instance. All providers share a single Weaviate client and a
single schema cache.

Each component is accessible via server.tools and server.resources properties.
"""

import logging
from dataclasses import dataclass, field
from typing import Literal

from fastmcp import FastMCP

from weaviate_mcp.graph.schema import SchemaCache
from weaviate_mcp.query.executor import QueryExecutor
from weaviate_mcp.resource_provider import Resources
from weaviate_mcp.settings import Settings
from weaviate_mcp.store.client import WeaviateClient
from weaviate_mcp.tools import Tools
from weaviate_mcp.tools.collections import CollectionResolver

# Default to WARNING; the CLI raises or lowers this with --log-level
logging.basicConfig(
    level=logging.WARNING, format="%(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)

# Keep FastMCP startup banners out of MCP client logs
fastmcp_server_logger = logging.getLogger("FastMCP.fastmcp.server.server")
fastmcp_server_logger.setLevel(logging.ERROR)

fastmcp_logger = logging.getLogger("FastMCP")
fastmcp_logger.setLevel(logging.WARNING)

SERVER_NAME = "weaviate-mcp-server"


@dataclass
class Server:
    """Weaviate MCP Server - composable integrator using composition pattern."""

    settings: Settings = field(default_factory=Settings)
    client: WeaviateClient | None = None

    # Internal fields
    mcp: FastMCP = field(init=False, repr=False)
    schema_cache: SchemaCache = field(init=False, repr=False)
    executor: QueryExecutor = field(init=False, repr=False)
    resolver: CollectionResolver = field(init=False, repr=False)
    tools: Tools = field(init=False, repr=False)
    resources: Resources = field(init=False, repr=False)

    def __post_init__(self):
        """Initialize the MCP server after dataclass initialization."""
        self.mcp = FastMCP(name=SERVER_NAME)

        if self.client is None:
            self.client = WeaviateClient(self.settings)
        self.schema_cache = SchemaCache(self.client, ttl=self.settings.schema_cache_ttl)
        self.executor = QueryExecutor(self.client, self.schema_cache, self.settings)
        self.resolver = CollectionResolver(self.schema_cache)

        self.tools = Tools(self.executor, self.resolver, self.settings)
        self.resources = Resources(self.client, self.schema_cache, self.resolver)

        self._register_components()

        if self.settings.read_only:
            logger.info("Read-only mode enabled")
        logger.debug("Weaviate MCP Server initialized with tools and resources")

    def _register_components(self):
        """Register tools and resources with the MCP server."""
        logger.debug("Registering tools component")
        self.tools.register(self.mcp)

        logger.debug("Registering resources component")
        self.resources.register(self.mcp)

        logger.debug("Successfully registered all components")

    def run(
        self,
        transport: Literal["stdio", "sse", "streamable-http"] = "stdio",
        host: str = "127.0.0.1",
        port: int = 8000,
    ):
        """Run the server with the specified transport.

        Args:
            transport: Transport protocol to use
            host: Host to bind to (for HTTP transports)
            port: Port to bind to (for HTTP transports)
        """
        if transport == "stdio":
            logger.debug("Starting Weaviate MCP server with stdio transport")
            self.mcp.run(transport=transport)
        elif transport in ["sse", "streamable-http"]:
            logger.info(
                "Starting Weaviate MCP server with %s transport on %s:%s",
                transport,
                host,
                port,
            )
            self.mcp.run(transport=transport, host=host, port=port)
        else:
            raise ValueError(
                f"Unsupported transport: {transport}. "
                f"Supported transports: stdio, sse, streamable-http"
            )


def run_server(
    transport: Literal["stdio", "sse", "streamable-http"] = "stdio",
    host: str = "127.0.0.1",
    port: int = 8000,
):
    """Entry point for running the server with specified transport."""
    server = Server()
    server.run(transport=transport, host=host, port=port)
