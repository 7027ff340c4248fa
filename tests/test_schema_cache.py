"""Tests for the time-bounded schema cache."""

import pytest

from weaviate_mcp.exceptions import (
    ClassNotFoundError,
    StoreError,
    UpstreamUnavailableError,
)
from weaviate_mcp.graph.schema import SchemaCache, SchemaSnapshot

from tests.conftest import FakeStoreClient


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(store, clock):
    return SchemaCache(store, ttl=60.0, clock=clock)


class TestSnapshot:
    def test_freshness_predicate(self):
        snapshot = SchemaSnapshot(classes=(), fetched_at=100.0)
        assert snapshot.is_fresh(now=159.9, ttl=60.0) is True
        assert snapshot.is_fresh(now=160.0, ttl=60.0) is False


class TestSchemaCache:
    @pytest.mark.asyncio
    async def test_fresh_snapshot_is_reused(self, cache, store, clock):
        first = await cache.get_schema()
        clock.now += 30
        second = await cache.get_schema()
        assert first is second
        assert store.schema_calls == 1
        assert first.class_names == ["Etapa", "Fluxo", "Ficheiro", "Entidade", "Nota"]

    @pytest.mark.asyncio
    async def test_expired_snapshot_is_refetched(self, cache, store, clock):
        first = await cache.get_schema()
        clock.now += 61
        second = await cache.get_schema()
        assert first is not second
        assert store.schema_calls == 2
        assert second.fetched_at == clock.now

    @pytest.mark.asyncio
    async def test_force_refresh_bypasses_cache(self, cache, store):
        await cache.get_schema()
        await cache.get_schema(force_refresh=True)
        assert store.schema_calls == 2

    @pytest.mark.asyncio
    async def test_refresh_replaces_snapshot(self, cache, store):
        await cache.get_schema()
        store.schema["classes"].append({"class": "Extra", "properties": []})
        refreshed = await cache.get_schema(force_refresh=True)
        assert "Extra" in refreshed.class_names
        assert cache.snapshot is refreshed

    @pytest.mark.asyncio
    async def test_invalidate(self, cache, store):
        await cache.get_schema()
        cache.invalidate()
        assert cache.snapshot is None
        await cache.get_schema()
        assert store.schema_calls == 2

    @pytest.mark.asyncio
    async def test_upstream_failure_propagates(self, cache, store):
        store.schema_error = UpstreamUnavailableError("down")
        with pytest.raises(UpstreamUnavailableError):
            await cache.get_schema()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error", [UpstreamUnavailableError("down"), StoreError("HTTP 500")]
    )
    async def test_try_get_schema_degrades_to_none(self, cache, store, error):
        store.schema_error = error
        assert await cache.try_get_schema() is None

    @pytest.mark.asyncio
    async def test_empty_schema(self, clock):
        cache = SchemaCache(FakeStoreClient(schema={}), clock=clock)
        snapshot = await cache.get_schema()
        assert snapshot.classes == ()


class TestClassSchema:
    @pytest.mark.asyncio
    async def test_get_class_schema_is_not_cached(self, cache, store):
        first = await cache.get_class_schema("Fluxo")
        second = await cache.get_class_schema("Fluxo")
        assert first.name == "Fluxo"
        assert first == second
        assert store.class_schema_calls == ["Fluxo", "Fluxo"]

    @pytest.mark.asyncio
    async def test_unknown_class(self, cache):
        with pytest.raises(ClassNotFoundError):
            await cache.get_class_schema("Missing")
