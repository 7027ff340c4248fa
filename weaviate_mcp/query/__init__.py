"""Query construction, execution and reporting."""

from weaviate_mcp.query.builder import (
    QuerySpec,
    build_query,
    check_field_names,
    dedupe_fields,
    is_hybrid_eligible,
    reference_projection,
)
from weaviate_mcp.query.executor import OriginShape, QueryExecutor
from weaviate_mcp.query.summary import TraversalResult, summarize

__all__ = [
    "OriginShape",
    "QueryExecutor",
    "QuerySpec",
    "TraversalResult",
    "build_query",
    "check_field_names",
    "dedupe_fields",
    "is_hybrid_eligible",
    "reference_projection",
    "summarize",
]
