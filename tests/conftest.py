"""
Test configuration and fixtures.

The Weaviate instance is replaced by ``FakeStoreClient``, an in-memory
stand-in that serves a fixed schema and canned GraphQL responses and records
every query it receives.
"""

import copy
from typing import Any

import pytest

from weaviate_mcp.exceptions import ClassNotFoundError
from weaviate_mcp.graph.schema import SchemaCache
from weaviate_mcp.query.executor import QueryExecutor
from weaviate_mcp.settings import Settings
from weaviate_mcp.tools.collections import CollectionResolver

SETTINGS_ENV_VARS = (
    "WEAVIATE_HOST",
    "WEAVIATE_SCHEME",
    "WEAVIATE_API_KEY",
    "WEAVIATE_TIMEOUT",
    "SCHEMA_CACHE_TTL",
    "DEFAULT_QUERY_LIMIT",
    "MCP_DISABLED_TOOLS",
    "MCP_READ_ONLY",
    "MCP_LOG_OUTPUT",
    "TRANSPORT",
    "HOST",
    "PORT",
)


def _prop(name: str, *data_type: str) -> dict[str, Any]:
    return {"name": name, "dataType": list(data_type)}


def make_schema() -> dict[str, Any]:
    """Etapa -> Fluxo / Ficheiro -> Entidade, plus a keyword-only Nota class."""
    return {
        "classes": [
            {
                "class": "Etapa",
                "description": "A step of a process",
                "vectorizer": "text2vec-openai",
                "moduleConfig": {"text2vec-openai": {"model": "ada"}},
                "properties": [
                    _prop("name", "text"),
                    _prop("description", "text"),
                    _prop("belongsToFluxo", "Fluxo"),
                    _prop("hasFicheiros", "Ficheiro"),
                ],
            },
            {
                "class": "Fluxo",
                "description": "A process flow",
                "vectorizer": "text2vec-openai",
                "properties": [_prop("name", "text"), _prop("code", "text")],
            },
            {
                "class": "Ficheiro",
                "vectorizer": "text2vec-openai",
                "properties": [
                    _prop("name", "text"),
                    _prop("path", "text"),
                    _prop("hasEntidades", "Entidade"),
                ],
            },
            {
                "class": "Entidade",
                "vectorizer": "text2vec-openai",
                "properties": [_prop("name", "text"), _prop("kind", "text")],
            },
            {
                "class": "Nota",
                "description": "Free-form notes",
                "vectorizer": "none",
                "moduleConfig": {},
                "properties": [
                    _prop("titulo", "text"),
                    _prop("texto", "text"),
                    _prop("about", "Etapa", "Fluxo"),
                ],
            },
        ]
    }


def get_response(collection: str, rows: list[dict[str, Any]]) -> dict[str, Any]:
    """GraphQL ``Get`` response body for ``collection``."""
    return {"data": {"Get": {collection: rows}}}


class FakeStoreClient:
    """In-memory replacement for ``WeaviateClient``."""

    def __init__(self, schema: dict[str, Any] | None = None):
        self.schema = schema if schema is not None else make_schema()
        self.responses: list[dict[str, Any]] = []
        self.queries: list[str] = []
        self.schema_calls = 0
        self.class_schema_calls: list[str] = []
        self.schema_error: Exception | None = None
        self.query_error: Exception | None = None

    async def get_schema(self) -> dict[str, Any]:
        self.schema_calls += 1
        if self.schema_error is not None:
            raise self.schema_error
        return copy.deepcopy(self.schema)

    async def get_class_schema(self, class_name: str) -> dict[str, Any]:
        self.class_schema_calls.append(class_name)
        for cls in self.schema.get("classes", []):
            if cls["class"] == class_name:
                return copy.deepcopy(cls)
        raise ClassNotFoundError(class_name)

    async def graphql(self, query: str) -> dict[str, Any]:
        self.queries.append(query)
        if self.query_error is not None:
            raise self.query_error
        if self.responses:
            return self.responses.pop(0)
        return {"data": {"Get": {}}}

    @property
    def last_query(self) -> str:
        return self.queries[-1]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Run every test against default settings."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def store():
    return FakeStoreClient()


@pytest.fixture
def schema_cache(store):
    return SchemaCache(store, ttl=60.0)


@pytest.fixture
def executor(store, schema_cache, settings):
    return QueryExecutor(store, schema_cache, settings)


@pytest.fixture
def resolver(schema_cache):
    return CollectionResolver(schema_cache)
