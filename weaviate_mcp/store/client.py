"""
Weaviate REST/GraphQL client.

Thin async wrapper over the three Weaviate endpoints the server needs:
the full schema, a single class definition and the GraphQL query endpoint.
Every request opens its own aiohttp session bounded by the configured
timeout, so the client holds no connection state between calls.
"""

import asyncio
import json
import logging
from typing import Any

import aiohttp

from weaviate_mcp.exceptions import (
    ClassNotFoundError,
    StoreError,
    UpstreamUnavailableError,
)
from weaviate_mcp.settings import Settings

logger = logging.getLogger(__name__)


class WeaviateClient:
    """Async client for the Weaviate schema and GraphQL APIs."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()
        self.timeout = self.settings.timeout
        logger.info("Using Weaviate at %s", self.settings.base_url)

    @property
    def base_url(self) -> str:
        return self.settings.base_url

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.settings.weaviate_api_key:
            headers["Authorization"] = f"Bearer {self.settings.weaviate_api_key}"
        return headers

    async def _request(
        self, endpoint: str, method: str = "GET", **kwargs
    ) -> tuple[int, Any]:
        """Send a request to Weaviate and return (status, parsed JSON body).

        Raises:
            UpstreamUnavailableError: Connection refused, DNS failure or timeout.
            StoreError: Body that is not valid JSON.
        """
        url = f"{self.base_url}/v1/{endpoint}"
        logger.debug("%s %s", method, url)

        try:
            async with aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers=self._headers(),
            ) as session:
                async with session.request(method, url, **kwargs) as response:
                    text = await response.text()
                    status = response.status
        except (aiohttp.ClientConnectionError, asyncio.TimeoutError) as e:
            reason = str(e) or type(e).__name__
            raise UpstreamUnavailableError(
                f"Weaviate at {self.base_url} is unreachable: {reason}"
            ) from e
        except aiohttp.ClientError as e:
            raise StoreError(f"HTTP request failed: {e}") from e

        if not text:
            return status, {}
        try:
            return status, json.loads(text)
        except json.JSONDecodeError as e:
            if status != 200:
                raise StoreError(f"HTTP {status}: {text}") from e
            raise StoreError(f"Failed to parse JSON response: {e}") from e

    async def get_schema(self) -> dict[str, Any]:
        """Fetch the full schema (``GET /v1/schema``)."""
        status, body = await self._request("schema")
        if status != 200:
            raise StoreError(f"Failed to get schema: HTTP {status}: {body}")
        return body

    async def get_class_schema(self, class_name: str) -> dict[str, Any]:
        """Fetch one class definition (``GET /v1/schema/{class}``).

        Raises:
            ClassNotFoundError: If Weaviate does not know the class.
        """
        status, body = await self._request(f"schema/{class_name}")
        if status == 404 or (status == 200 and not body):
            raise ClassNotFoundError(class_name)
        if status != 200:
            raise StoreError(
                f"Failed to get class schema for '{class_name}': HTTP {status}: {body}"
            )
        return body

    async def graphql(self, query: str) -> dict[str, Any]:
        """Run a GraphQL query (``POST /v1/graphql``) and return the response.

        Raises:
            StoreError: HTTP failure or a non-empty ``errors`` array.
        """
        status, body = await self._request(
            "graphql", method="POST", json={"query": query}
        )
        if status != 200:
            raise StoreError(f"HTTP {status}: {body}")
        errors = body.get("errors") if isinstance(body, dict) else None
        if errors:
            messages = "; ".join(
                str(error.get("message", error)) if isinstance(error, dict) else str(error)
                for error in errors
            )
            raise StoreError(f"GraphQL errors: {messages}")
        return body
