"""Tests for the in-process admission store."""

import asyncio

import pytest

from smartsearch.infrastructure.admission.memory_store import InMemoryAdmissionStore, bucket_idle_ttl


class Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def store(clock) -> InMemoryAdmissionStore:
    return InMemoryAdmissionStore(clock=clock)


class TestConsumeToken:
    @pytest.mark.asyncio
    async def test_new_bucket_starts_full(self, store):
        assert await store.consume_token("b", 3, 3, 60) == 2

    @pytest.mark.asyncio
    async def test_empty_bucket(self, store):
        remaining = [await store.consume_token("b", 2, 2, 60) for _ in range(3)]
        assert remaining == [1, 0, -1]

    @pytest.mark.asyncio
    async def test_refill_capped_at_capacity(self, store, clock):
        await store.consume_token("b", 2, 2, 60)
        clock.now += 3600
        assert await store.consume_token("b", 2, 2, 60) == 1

    @pytest.mark.asyncio
    async def test_concurrent_consumers(self, store):
        results = await asyncio.gather(*(store.consume_token("b", 5, 5, 60) for _ in range(8)))
        assert sum(1 for r in results if r >= 0) == 5


class TestCounters:
    @pytest.mark.asyncio
    async def test_increment(self, store):
        assert [await store.increment_with_ttl("c", 60) for _ in range(3)] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_window_resets(self, store, clock):
        await store.increment_with_ttl("c", 60)
        await store.increment_with_ttl("c", 60)
        clock.now += 60
        assert await store.increment_with_ttl("c", 60) == 1

    @pytest.mark.asyncio
    async def test_window_not_extended_by_hits(self, store, clock):
        await store.increment_with_ttl("c", 60)
        clock.now += 59
        assert await store.increment_with_ttl("c", 60) == 2
        clock.now += 1
        assert await store.increment_with_ttl("c", 60) == 1


class TestFlags:
    @pytest.mark.asyncio
    async def test_missing(self, store):
        assert await store.exists("f") is False

    @pytest.mark.asyncio
    async def test_set_and_expire(self, store, clock):
        await store.set_with_ttl("f", 10)
        assert await store.exists("f") is True
        clock.now += 10
        assert await store.exists("f") is False

    @pytest.mark.asyncio
    async def test_close_is_safe(self, store):
        await store.close()


class TestSweep:
    @pytest.mark.asyncio
    async def test_idle_clients_dropped(self, store, clock):
        for i in range(1000):
            client = f"10.0.{i // 256}.{i % 256}"
            await store.consume_token(f"bucket:{client}", 20, 20, 60)
            await store.increment_with_ttl(f"count:{client}", 60)

        clock.now += 10_000
        await store.consume_token("bucket:fresh", 20, 20, 60)

        assert store.size == 1

    @pytest.mark.asyncio
    async def test_live_entries_kept(self, store, clock):
        await store.consume_token("bucket:a", 2, 2, 60)
        await store.increment_with_ttl("count:a", 600)
        await store.set_with_ttl("blacklist:a", 900)

        clock.now += 61
        await store.consume_token("bucket:b", 2, 2, 60)

        assert await store.exists("blacklist:a") is True
        assert await store.increment_with_ttl("count:a", 600) == 2
        assert await store.consume_token("bucket:a", 2, 2, 60) == 1

    @pytest.mark.asyncio
    async def test_sweep_is_periodic(self, clock):
        store = InMemoryAdmissionStore(clock=clock, sweep_interval=60)
        await store.increment_with_ttl("c", 1)

        clock.now += 30
        await store.increment_with_ttl("d", 1)
        assert store.size == 2

        clock.now += 30
        await store.increment_with_ttl("e", 1)
        assert store.size == 1

    def test_idle_ttl(self):
        assert bucket_idle_ttl(20, 10, 60) == 240
        assert bucket_idle_ttl(1, 0, 0) == 1
