"""Tests for the reference index."""

from weaviate_mcp.graph.models import ClassSchema, IncomingReference, ReferenceEdge
from weaviate_mcp.graph.references import (
    incoming_refs,
    outgoing_refs,
    targets_for_property,
)
from weaviate_mcp.graph.schema import SchemaSnapshot

from tests.conftest import make_schema


def snapshot() -> SchemaSnapshot:
    return SchemaSnapshot(
        classes=tuple(ClassSchema.from_dict(cls) for cls in make_schema()["classes"]),
        fetched_at=0.0,
    )


class TestOutgoingRefs:
    def test_only_reference_properties(self):
        edges = outgoing_refs(snapshot(), "Etapa")
        assert edges == [
            ReferenceEdge("Etapa", "belongsToFluxo", ("Fluxo",)),
            ReferenceEdge("Etapa", "hasFicheiros", ("Ficheiro",)),
        ]

    def test_polymorphic_targets(self):
        edges = outgoing_refs(snapshot(), "Nota")
        assert edges == [ReferenceEdge("Nota", "about", ("Etapa", "Fluxo"))]

    def test_class_without_references(self):
        assert outgoing_refs(snapshot(), "Entidade") == []

    def test_unknown_class_and_missing_schema(self):
        assert outgoing_refs(snapshot(), "Missing") == []
        assert outgoing_refs(None, "Etapa") == []


class TestIncomingRefs:
    def test_incoming_from_several_classes(self):
        assert incoming_refs(snapshot(), "Fluxo") == [
            IncomingReference("Etapa", "belongsToFluxo"),
            IncomingReference("Nota", "about"),
        ]

    def test_incoming_matches_outgoing(self):
        schema = snapshot()
        for target in schema.class_names:
            expected = {
                (edge.from_class, edge.property_name)
                for source in schema.class_names
                for edge in outgoing_refs(schema, source)
                if target in edge.to_classes
            }
            actual = {
                (ref.from_class, ref.property_name)
                for ref in incoming_refs(schema, target)
            }
            assert actual == expected

    def test_self_reference_included(self):
        schema = SchemaSnapshot(
            classes=(
                ClassSchema.from_dict(
                    {
                        "class": "Node",
                        "properties": [{"name": "parent", "dataType": ["Node"]}],
                    }
                ),
            ),
            fetched_at=0.0,
        )
        assert incoming_refs(schema, "Node") == [IncomingReference("Node", "parent")]

    def test_missing_schema(self):
        assert incoming_refs(None, "Fluxo") == []


class TestTargetsForProperty:
    def test_reference_property(self):
        assert targets_for_property(snapshot(), "Nota", "about") == ["Etapa", "Fluxo"]

    def test_scalar_property(self):
        assert targets_for_property(snapshot(), "Etapa", "name") == []

    def test_unknown_property_class_or_schema(self):
        assert targets_for_property(snapshot(), "Etapa", "missing") == []
        assert targets_for_property(snapshot(), "Missing", "name") == []
        assert targets_for_property(None, "Etapa", "belongsToFluxo") == []
