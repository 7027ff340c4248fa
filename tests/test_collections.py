"""Tests for collection resolution and property validation."""

import pytest

from weaviate_mcp.exceptions import (
    ClassNotFoundError,
    PropertyNotAllowedError,
    ReferenceSelectionError,
)
from weaviate_mcp.graph.models import ClassSchema
from weaviate_mcp.graph.schema import SchemaCache
from weaviate_mcp.tools.collections import (
    CollectionResolver,
    validate_target_properties,
)

from tests.conftest import FakeStoreClient


class TestResolve:
    @pytest.mark.asyncio
    async def test_known_collection(self, resolver, store):
        resolved = await resolver.resolve("Fluxo")
        assert resolved.name == "Fluxo"
        assert resolved.schema.property_names == ["name", "code"]
        assert store.schema_calls == 1

    @pytest.mark.asyncio
    async def test_name_is_trimmed(self, resolver):
        assert await resolver.resolve_name("  Fluxo ") == "Fluxo"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("candidate", [None, "", "   "])
    async def test_default_to_first_collection(self, resolver, candidate):
        assert await resolver.resolve_name(candidate) == "Etapa"

    @pytest.mark.asyncio
    async def test_no_collections(self):
        resolver = CollectionResolver(SchemaCache(FakeStoreClient(schema={"classes": []})))
        with pytest.raises(ClassNotFoundError, match="No collections are available"):
            await resolver.resolve_name(None)

    @pytest.mark.asyncio
    async def test_unknown_name_refreshes_exactly_once(self, resolver, store):
        await resolver.resolve_name("Etapa")
        assert store.schema_calls == 1

        with pytest.raises(ClassNotFoundError) as exc_info:
            await resolver.resolve_name("Missing")

        assert store.schema_calls == 2
        message = str(exc_info.value)
        assert "Missing" in message
        for name in ["Etapa", "Fluxo", "Ficheiro", "Entidade", "Nota"]:
            assert name in message

    @pytest.mark.asyncio
    async def test_refresh_finds_new_collection(self, resolver, store):
        await resolver.resolve_name("Etapa")
        store.schema["classes"].append({"class": "Novo", "properties": []})
        assert await resolver.resolve_name("Novo") == "Novo"
        assert store.schema_calls == 2

    @pytest.mark.asyncio
    async def test_unknown_name_with_empty_schema(self):
        resolver = CollectionResolver(SchemaCache(FakeStoreClient(schema={"classes": []})))
        with pytest.raises(ClassNotFoundError, match="Available collections: none"):
            await resolver.resolve_name("Missing")


class TestValidateTargetProperties:
    @pytest.fixture
    def etapa(self):
        return ClassSchema.from_dict(
            {
                "class": "Etapa",
                "properties": [
                    {"name": "name", "dataType": ["text"]},
                    {"name": "description", "dataType": ["text"]},
                    {"name": "belongsToFluxo", "dataType": ["Fluxo"]},
                ],
            }
        )

    def test_valid_properties_are_deduplicated(self, etapa):
        assert validate_target_properties("Etapa", ["name", "name"], etapa) == ["name"]

    def test_unknown_property(self, etapa):
        with pytest.raises(PropertyNotAllowedError) as exc_info:
            validate_target_properties("Etapa", ["name", "colour"], etapa)
        error = exc_info.value
        assert error.property == "colour"
        assert error.allowed == ["name", "description", "belongsToFluxo"]
        assert "what exists is: name, description, belongsToFluxo" in str(error)

    def test_reference_property_is_not_a_plain_field(self, etapa):
        with pytest.raises(ReferenceSelectionError) as exc_info:
            validate_target_properties("Etapa", ["name", "belongsToFluxo"], etapa)
        error = exc_info.value
        assert isinstance(error, PropertyNotAllowedError)
        assert error.property == "belongsToFluxo"
        assert error.allowed == ["name", "description"]
        assert "is a reference" in str(error)
