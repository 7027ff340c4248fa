"""Schema model, schema cache and reference index.

This module provides:
    - models: typed ClassSchema / PropertySchema built from Weaviate JSON
    - schema: the time-bounded SchemaSnapshot cache
    - references: outgoing / incoming reference lookups over a snapshot
"""

from weaviate_mcp.graph.models import (
    ClassSchema,
    IncomingReference,
    PropertySchema,
    ReferenceEdge,
    is_reference_data_type,
)
from weaviate_mcp.graph.references import (
    incoming_refs,
    outgoing_refs,
    targets_for_property,
)
from weaviate_mcp.graph.schema import SchemaCache, SchemaSnapshot

__all__ = [
    "ClassSchema",
    "IncomingReference",
    "PropertySchema",
    "ReferenceEdge",
    "SchemaCache",
    "SchemaSnapshot",
    "incoming_refs",
    "is_reference_data_type",
    "outgoing_refs",
    "targets_for_property",
]
