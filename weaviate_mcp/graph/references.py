"""Reference index derived from a schema snapshot.

Pure functions: nothing is cached here, every call reads the snapshot it is
given. A missing snapshot or an unknown class yields an empty result so that
callers can treat link discovery as optional.
"""

from weaviate_mcp.graph.models import IncomingReference, ReferenceEdge
from weaviate_mcp.graph.schema import SchemaSnapshot


def outgoing_refs(schema: SchemaSnapshot | None, class_name: str) -> list[ReferenceEdge]:
    """Reference properties declared on ``class_name``, in declaration order."""
    if schema is None:
        return []
    cls = schema.get_class(class_name)
    if cls is None:
        return []
    return [
        ReferenceEdge(
            from_class=cls.name,
            property_name=prop.name,
            to_classes=prop.reference_targets,
        )
        for prop in cls.properties
        if prop.is_reference
    ]


def incoming_refs(
    schema: SchemaSnapshot | None, class_name: str
) -> list[IncomingReference]:
    """Properties on any class (itself included) that may point at ``class_name``."""
    if schema is None:
        return []
    incoming = []
    for cls in schema.classes:
        for edge in outgoing_refs(schema, cls.name):
            if class_name in edge.to_classes:
                incoming.append(
                    IncomingReference(from_class=cls.name, property_name=edge.property_name)
                )
    return incoming


def targets_for_property(
    schema: SchemaSnapshot | None, class_name: str, property_name: str
) -> list[str]:
    """Classes a single reference property may point at."""
    if schema is None:
        return []
    cls = schema.get_class(class_name)
    if cls is None:
        return []
    prop = cls.get_property(property_name)
    if prop is None:
        return []
    return list(prop.reference_targets)
