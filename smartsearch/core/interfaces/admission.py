"""
Abstract interface for the shared admission store.

Implementations must make consume_token a single atomic operation so that
concurrent requests of one client cannot lose updates.
"""

from abc import ABC, abstractmethod


class IAdmissionStore(ABC):
    """Key-value store holding token buckets, counters and blacklist flags."""

    @abstractmethod
    async def consume_token(
        self,
        key: str,
        capacity: int,
        refill_tokens: int,
        interval_seconds: int,
    ) -> int:
        """
        Refill and take one token from the bucket at key.

        Returns:
            Remaining tokens after consumption, or -1 if the bucket was empty.

        Raises:
            AdmissionStoreError: If the store cannot be reached.
        """
        pass

    @abstractmethod
    async def increment_with_ttl(self, key: str, window_seconds: int) -> int:
        """Increment a counter; the TTL is set on the first increment only."""
        pass

    @abstractmethod
    async def set_with_ttl(self, key: str, ttl_seconds: int) -> None:
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        pass

    async def close(self) -> None:
        """Release connections held by the store."""
        return None
