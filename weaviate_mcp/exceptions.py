"""Exceptions raised by the Weaviate MCP server.

The tool layer converts every ``WeaviateMcpError`` into a single MCP tool
error with a human-readable message, so messages here are written for the
caller rather than for a stack trace.
"""


class WeaviateMcpError(Exception):
    """Base class for all server errors."""

    pass


class UpstreamUnavailableError(WeaviateMcpError):
    """Raised when the Weaviate instance cannot be reached."""

    pass


class StoreError(WeaviateMcpError):
    """Raised when Weaviate answers with an error or an unreadable payload."""

    pass


class ValidationError(WeaviateMcpError):
    """Raised when tool input does not match its schema."""

    pass


class ClassNotFoundError(WeaviateMcpError):
    """Raised when a collection is not part of the Weaviate schema."""

    def __init__(self, name: str | None, available: list[str] | None = None):
        self.name = name
        self.available = list(available or [])
        if name is None:
            message = "No collections are available in the Weaviate schema."
        else:
            listing = ", ".join(self.available) if self.available else "none"
            message = (
                f"Collection '{name}' was not found. "
                f"Available collections: {listing}"
            )
        super().__init__(message)


class PropertyNotAllowedError(WeaviateMcpError):
    """Raised when a requested property is not declared on the collection."""

    def __init__(
        self,
        prop: str,
        collection: str,
        allowed: list[str],
        message: str | None = None,
    ):
        self.property = prop
        self.collection = collection
        self.allowed = list(allowed)
        super().__init__(
            message
            or f"Property '{prop}' does not exist in collection '{collection}', "
            f"what exists is: {', '.join(self.allowed)}"
        )


class ReferenceSelectionError(PropertyNotAllowedError):
    """Raised when a reference property is requested as a plain field."""

    def __init__(self, prop: str, collection: str, allowed: list[str]):
        super().__init__(
            prop,
            collection,
            allowed,
            message=(
                f"Property '{prop}' on collection '{collection}' is a reference "
                "and cannot be selected as a plain field, follow it with "
                f"weaviate-query-with-refs. Plain properties: {', '.join(allowed)}"
            ),
        )


class QueryFailedError(WeaviateMcpError):
    """Raised when a built query could not be executed by the store."""

    def __init__(self, collection: str, cause: Exception):
        self.collection = collection
        self.cause = cause
        super().__init__(f"Query on '{collection}' failed: {cause}")
