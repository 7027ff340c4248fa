"""Tests for the Weaviate REST/GraphQL client."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from weaviate_mcp.exceptions import (
    ClassNotFoundError,
    StoreError,
    UpstreamUnavailableError,
)
from weaviate_mcp.store.client import WeaviateClient


def mock_session(status: int = 200, body=None, text: str | None = None, error=None):
    """ClientSession stand-in returning one canned response."""
    response = MagicMock()
    response.status = status
    if text is None:
        text = json.dumps(body) if body is not None else ""
    response.text = AsyncMock(return_value=text)

    request_cm = MagicMock()
    request_cm.__aenter__ = AsyncMock(return_value=response)
    request_cm.__aexit__ = AsyncMock(return_value=False)

    session = MagicMock()
    if error is not None:
        session.request.side_effect = error
    else:
        session.request.return_value = request_cm

    session_cm = MagicMock()
    session_cm.__aenter__ = AsyncMock(return_value=session)
    session_cm.__aexit__ = AsyncMock(return_value=False)
    return session_cm, session


@pytest.fixture
def client(settings):
    return WeaviateClient(settings)


class TestRequests:
    @pytest.mark.asyncio
    async def test_get_schema(self, client):
        session_cm, session = mock_session(body={"classes": [{"class": "Etapa"}]})
        with patch("aiohttp.ClientSession", return_value=session_cm) as session_cls:
            schema = await client.get_schema()

        assert schema == {"classes": [{"class": "Etapa"}]}
        session.request.assert_called_once_with(
            "GET", "http://host.docker.internal:8080/v1/schema"
        )
        headers = session_cls.call_args.kwargs["headers"]
        assert "Authorization" not in headers

    @pytest.mark.asyncio
    async def test_api_key_is_sent(self, monkeypatch):
        monkeypatch.setenv("WEAVIATE_API_KEY", "secret")
        monkeypatch.setenv("WEAVIATE_SCHEME", "https")
        monkeypatch.setenv("WEAVIATE_HOST", "weaviate.example.org")
        client = WeaviateClient()
        session_cm, session = mock_session(body={"classes": []})
        with patch("aiohttp.ClientSession", return_value=session_cm) as session_cls:
            await client.get_schema()

        assert session_cls.call_args.kwargs["headers"]["Authorization"] == "Bearer secret"
        session.request.assert_called_once_with(
            "GET", "https://weaviate.example.org/v1/schema"
        )

    @pytest.mark.asyncio
    async def test_get_schema_http_error(self, client):
        session_cm, _ = mock_session(status=500, body={"error": "boom"})
        with patch("aiohttp.ClientSession", return_value=session_cm):
            with pytest.raises(StoreError, match="HTTP 500"):
                await client.get_schema()

    @pytest.mark.asyncio
    async def test_get_class_schema_not_found(self, client):
        session_cm, _ = mock_session(status=404)
        with patch("aiohttp.ClientSession", return_value=session_cm):
            with pytest.raises(ClassNotFoundError, match="Missing"):
                await client.get_class_schema("Missing")

    @pytest.mark.asyncio
    async def test_graphql_posts_query(self, client):
        body = {"data": {"Get": {"Etapa": []}}}
        session_cm, session = mock_session(body=body)
        with patch("aiohttp.ClientSession", return_value=session_cm):
            result = await client.graphql("{ Get { Etapa { name } } }")

        assert result == body
        session.request.assert_called_once_with(
            "POST",
            "http://host.docker.internal:8080/v1/graphql",
            json={"query": "{ Get { Etapa { name } } }"},
        )

    @pytest.mark.asyncio
    async def test_graphql_errors(self, client):
        session_cm, _ = mock_session(
            body={"data": None, "errors": [{"message": "Cannot query field"}]}
        )
        with patch("aiohttp.ClientSession", return_value=session_cm):
            with pytest.raises(StoreError, match="GraphQL errors: Cannot query field"):
                await client.graphql("{ Get { Etapa { nope } } }")

    @pytest.mark.asyncio
    async def test_malformed_json(self, client):
        session_cm, _ = mock_session(text="<html>")
        with patch("aiohttp.ClientSession", return_value=session_cm):
            with pytest.raises(StoreError, match="Failed to parse JSON"):
                await client.get_schema()


class TestConnectionFailures:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [aiohttp.ClientConnectionError("refused"), asyncio.TimeoutError()],
    )
    async def test_unreachable(self, client, error):
        session_cm, _ = mock_session(error=error)
        with patch("aiohttp.ClientSession", return_value=session_cm):
            with pytest.raises(UpstreamUnavailableError, match="unreachable"):
                await client.get_schema()

    @pytest.mark.asyncio
    async def test_other_client_errors(self, client):
        session_cm, _ = mock_session(error=aiohttp.ClientPayloadError("truncated"))
        with patch("aiohttp.ClientSession", return_value=session_cm):
            with pytest.raises(StoreError, match="HTTP request failed"):
                await client.get_schema()
