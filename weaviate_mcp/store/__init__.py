"""Access to the external Weaviate store."""

from weaviate_mcp.store.client import WeaviateClient

__all__ = ["WeaviateClient"]
