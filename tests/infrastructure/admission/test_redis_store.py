"""Tests for the Redis admission store with a mocked client."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from smartsearch.core.exceptions import AdmissionStoreError
from smartsearch.infrastructure.admission.redis_store import (
    COUNTER_SCRIPT,
    TOKEN_BUCKET_SCRIPT,
    RedisAdmissionStore,
)


@pytest.fixture
def script() -> AsyncMock:
    return AsyncMock(return_value=4)


@pytest.fixture
def counter_script() -> AsyncMock:
    return AsyncMock(return_value=1)


@pytest.fixture
def client(script, counter_script) -> MagicMock:
    client = MagicMock()
    scripts = {TOKEN_BUCKET_SCRIPT: script, COUNTER_SCRIPT: counter_script}
    client.register_script.side_effect = scripts.__getitem__
    client.set = AsyncMock(return_value=True)
    client.exists = AsyncMock(return_value=0)
    client.ping = AsyncMock(return_value=True)
    client.aclose = AsyncMock()
    return client


@pytest.fixture
def store(client) -> RedisAdmissionStore:
    return RedisAdmissionStore(client=client)


class TestTokenBucket:
    def test_script_registered(self, store, client):
        client.register_script.assert_any_call(TOKEN_BUCKET_SCRIPT)
        client.register_script.assert_any_call(COUNTER_SCRIPT)

    def test_script_uses_server_clock(self):
        assert "redis.call('TIME')" in TOKEN_BUCKET_SCRIPT

    @pytest.mark.asyncio
    async def test_consume(self, store, script):
        assert await store.consume_token("sk:bucket:1.1.1.1", 20, 10, 60) == 4
        script.assert_awaited_once_with(keys=["sk:bucket:1.1.1.1"], args=[20, 10, 60])

    @pytest.mark.asyncio
    async def test_empty_bucket(self, store, script):
        script.return_value = -1
        assert await store.consume_token("k", 1, 1, 60) == -1

    @pytest.mark.asyncio
    async def test_redis_error_wrapped(self, store, script):
        script.side_effect = RedisConnectionError("refused")
        with pytest.raises(AdmissionStoreError) as exc_info:
            await store.consume_token("k", 1, 1, 60)
        assert exc_info.value.code == "ADMISSION_STORE_ERROR"


class TestCounters:
    @pytest.mark.asyncio
    async def test_increment_is_one_script_call(self, store, client, counter_script):
        assert await store.increment_with_ttl("c", 60) == 1
        counter_script.assert_awaited_once_with(keys=["c"], args=[60])
        assert not client.incr.called
        assert not client.expire.called

    @pytest.mark.asyncio
    async def test_later_hits(self, store, counter_script):
        counter_script.return_value = 7
        assert await store.increment_with_ttl("c", 60) == 7

    def test_script_sets_expiry_with_increment(self):
        assert "redis.call('INCR', KEYS[1])" in COUNTER_SCRIPT
        assert "redis.call('EXPIRE', KEYS[1], tonumber(ARGV[1]))" in COUNTER_SCRIPT

    def test_script_repairs_key_without_ttl(self):
        # TTL is -1 for a key that exists without expiry
        assert "redis.call('TTL', KEYS[1]) < 0" in COUNTER_SCRIPT
        assert "count == 1" not in COUNTER_SCRIPT

    @pytest.mark.asyncio
    async def test_error_wrapped(self, store, counter_script):
        counter_script.side_effect = [RedisConnectionError("down"), 2, 3]

        with pytest.raises(AdmissionStoreError):
            await store.increment_with_ttl("c", 60)
        assert [await store.increment_with_ttl("c", 60) for _ in range(2)] == [2, 3]

        assert counter_script.await_count == 3
        assert all(call.kwargs == {"keys": ["c"], "args": [60]} for call in counter_script.await_args_list)


class TestFlags:
    @pytest.mark.asyncio
    async def test_set_with_ttl(self, store, client):
        await store.set_with_ttl("f", 900)
        client.set.assert_awaited_once_with("f", "1", ex=900)

    @pytest.mark.asyncio
    async def test_exists(self, store, client):
        client.exists.return_value = 1
        assert await store.exists("f") is True

    @pytest.mark.asyncio
    async def test_exists_error_wrapped(self, store, client):
        client.exists.side_effect = OSError("reset")
        with pytest.raises(AdmissionStoreError):
            await store.exists("f")


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_ping(self, store):
        assert await store.ping() is True

    @pytest.mark.asyncio
    async def test_ping_failure(self, store, client):
        client.ping.side_effect = RedisConnectionError("down")
        assert await store.ping() is False

    @pytest.mark.asyncio
    async def test_close(self, store, client):
        await store.close()
        client.aclose.assert_awaited_once()
