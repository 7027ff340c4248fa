"""
Base class for MCP providers.

A provider owns a group of capabilities (tools or resources) and registers
them with the FastMCP server.
"""

from abc import ABC, abstractmethod

from fastmcp import FastMCP


class MCPProvider(ABC):
    """Base class for MCP providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for logging and identification."""
        pass

    @abstractmethod
    def register(self, mcp: FastMCP):
        """Register this provider's capabilities with the MCP server.

        Args:
            mcp: FastMCP server instance to register with
        """
        pass
