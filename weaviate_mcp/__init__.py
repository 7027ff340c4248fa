"""
Weaviate MCP Server - Model Context Protocol access to a Weaviate instance.
"""

import importlib.metadata

try:
    __version__ = importlib.metadata.version("weaviate-mcp")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = ["__version__"]
