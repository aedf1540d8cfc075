"""
In-process admission store.

Same contract as the Redis store for a single API process; state is lost on
restart and not shared between workers. Expired entries are swept at most
once per sweep_interval so idle client keys do not accumulate.
"""

import asyncio
import math
import time
from collections.abc import Callable
from dataclasses import dataclass

from smartsearch.config import get_logger
from smartsearch.core.interfaces.admission import IAdmissionStore

logger = get_logger(__name__)


@dataclass
class _Bucket:
    tokens: float
    updated_at: float
    expires_at: float


@dataclass
class _Counter:
    count: int
    expires_at: float


def bucket_idle_ttl(capacity: int, refill_tokens: int, interval_seconds: int) -> int:
    """Twice the time an empty bucket needs to fill up again."""
    full_after = math.ceil(capacity / max(refill_tokens, 1) * interval_seconds)
    return max(full_after * 2, 1)


class InMemoryAdmissionStore(IAdmissionStore):
    """Dictionary-backed admission store guarded by one asyncio lock."""

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: float = 60.0,
    ):
        self._clock = clock
        self._lock = asyncio.Lock()
        self._buckets: dict[str, _Bucket] = {}
        self._counters: dict[str, _Counter] = {}
        self._flags: dict[str, float] = {}
        self._sweep_interval = sweep_interval
        self._next_sweep = clock() + sweep_interval

    @property
    def size(self) -> int:
        return len(self._buckets) + len(self._counters) + len(self._flags)

    async def consume_token(
        self,
        key: str,
        capacity: int,
        refill_tokens: int,
        interval_seconds: int,
    ) -> int:
        async with self._lock:
            now = self._clock()
            self._sweep(now)

            bucket = self._buckets.get(key)
            if bucket is None or bucket.expires_at <= now:
                bucket = _Bucket(tokens=float(capacity), updated_at=now, expires_at=now)
                self._buckets[key] = bucket

            elapsed = now - bucket.updated_at
            if elapsed > 0 and interval_seconds > 0:
                bucket.tokens = min(
                    float(capacity),
                    bucket.tokens + elapsed / interval_seconds * refill_tokens,
                )
            bucket.updated_at = now
            bucket.expires_at = now + bucket_idle_ttl(capacity, refill_tokens, interval_seconds)

            if bucket.tokens < 1:
                return -1
            bucket.tokens -= 1
            return int(bucket.tokens)

    async def increment_with_ttl(self, key: str, window_seconds: int) -> int:
        async with self._lock:
            now = self._clock()
            self._sweep(now)

            counter = self._counters.get(key)
            if counter is None or counter.expires_at <= now:
                counter = _Counter(count=0, expires_at=now + window_seconds)
                self._counters[key] = counter
            counter.count += 1
            return counter.count

    async def set_with_ttl(self, key: str, ttl_seconds: int) -> None:
        async with self._lock:
            now = self._clock()
            self._sweep(now)
            self._flags[key] = now + ttl_seconds

    async def exists(self, key: str) -> bool:
        async with self._lock:
            expires_at = self._flags.get(key)
            if expires_at is None:
                return False
            if expires_at <= self._clock():
                del self._flags[key]
                return False
            return True

    def _sweep(self, now: float) -> None:
        if now < self._next_sweep:
            return
        self._next_sweep = now + self._sweep_interval

        before = self.size
        self._buckets = {k: b for k, b in self._buckets.items() if b.expires_at > now}
        self._counters = {k: c for k, c in self._counters.items() if c.expires_at > now}
        self._flags = {k: t for k, t in self._flags.items() if t > now}

        dropped = before - self.size
        if dropped:
            logger.debug("admission_state_swept", dropped=dropped, remaining=self.size)
