"""
Redis-backed admission store.

The token bucket lives in a hash (tokens, ts) and is refilled and consumed
by a single Lua script, so concurrent requests of one client are applied
one after another on the server. The script reads the server clock, which
keeps every API instance on the same time base. The abuse counter is a
second script so its increment and expiry are applied together.
"""

import redis.asyncio as redis
from redis.exceptions import RedisError

from smartsearch.config import get_logger
from smartsearch.core.exceptions import AdmissionStoreError
from smartsearch.core.interfaces.admission import IAdmissionStore

logger = get_logger(__name__)

# KEYS[1] bucket key; ARGV capacity, refill tokens, interval seconds.
# Returns remaining tokens, or -1 when the bucket is empty.
TOKEN_BUCKET_SCRIPT = """
local key = KEYS[1]
local capacity = tonumber(ARGV[1])
local refill_tokens = tonumber(ARGV[2])
local interval_ms = tonumber(ARGV[3]) * 1000

local clock = redis.call('TIME')
local now = tonumber(clock[1]) * 1000 + math.floor(tonumber(clock[2]) / 1000)

local state = redis.call('HMGET', key, 'tokens', 'ts')
local tokens = tonumber(state[1])
local ts = tonumber(state[2])
if tokens == nil or ts == nil then
    tokens = capacity
    ts = now
end

local elapsed = now - ts
if elapsed > 0 and interval_ms > 0 then
    tokens = math.min(capacity, tokens + (elapsed / interval_ms) * refill_tokens)
end

local remaining = -1
if tokens >= 1 then
    tokens = tokens - 1
    remaining = math.floor(tokens)
end

redis.call('HSET', key, 'tokens', tostring(tokens), 'ts', tostring(now))

-- Idle buckets expire once they would be full again
local full_after = math.ceil(capacity / math.max(refill_tokens, 1) * interval_ms / 1000)
redis.call('EXPIRE', key, math.max(full_after * 2, 1))

return remaining
"""

# KEYS[1] counter key; ARGV[1] window seconds.
# The window starts on the first hit; a key found without a TTL gets one.
COUNTER_SCRIPT = """
local count = redis.call('INCR', KEYS[1])
if redis.call('TTL', KEYS[1]) < 0 then
    redis.call('EXPIRE', KEYS[1], tonumber(ARGV[1]))
end
return count
"""


class RedisAdmissionStore(IAdmissionStore):
    """Admission store on a shared Redis instance."""

    def __init__(self, client: redis.Redis | None = None, url: str = "redis://localhost:6379/0"):
        self._client = client or redis.from_url(url, decode_responses=True)
        self._bucket_script = self._client.register_script(TOKEN_BUCKET_SCRIPT)
        self._counter_script = self._client.register_script(COUNTER_SCRIPT)

    async def consume_token(
        self,
        key: str,
        capacity: int,
        refill_tokens: int,
        interval_seconds: int,
    ) -> int:
        try:
            result = await self._bucket_script(
                keys=[key],
                args=[capacity, refill_tokens, interval_seconds],
            )
        except (RedisError, OSError) as e:
            raise AdmissionStoreError("consume_token", str(e)) from e
        return int(result)

    async def increment_with_ttl(self, key: str, window_seconds: int) -> int:
        try:
            count = await self._counter_script(keys=[key], args=[window_seconds])
        except (RedisError, OSError) as e:
            raise AdmissionStoreError("increment_with_ttl", str(e)) from e
        return int(count)

    async def set_with_ttl(self, key: str, ttl_seconds: int) -> None:
        try:
            await self._client.set(key, "1", ex=ttl_seconds)
        except (RedisError, OSError) as e:
            raise AdmissionStoreError("set_with_ttl", str(e)) from e

    async def exists(self, key: str) -> bool:
        try:
            return bool(await self._client.exists(key))
        except (RedisError, OSError) as e:
            raise AdmissionStoreError("exists", str(e)) from e

    async def ping(self) -> bool:
        try:
            return bool(await self._client.ping())
        except (RedisError, OSError) as e:
            logger.warning("redis_ping_failed", error=str(e))
            return False

    async def close(self) -> None:
        await self._client.aclose()
        logger.info("redis_admission_store_closed")
