"""
Request admission control.

Two gates per request, in order:
1. Blacklist: a live blacklist flag rejects immediately.
2. Token bucket: an atomic consume against the shared store.

Every request also bumps a windowed counter; reaching the threshold puts
the client on the blacklist for blacklist_ttl_seconds. Store errors on the
gates fail open, errors on the counter path are logged and dropped.
"""

import math
from collections.abc import Mapping

from smartsearch.config import AdmissionSettings, get_logger
from smartsearch.core.entities.admission import AdmissionDecision, AdmissionOutcome
from smartsearch.core.interfaces.admission import IAdmissionStore

logger = get_logger(__name__)

UNKNOWN_CLIENT = "unknown"


def resolve_client_identity(
    headers: Mapping[str, str],
    peer: str | None,
    header_chain: list[str],
) -> str:
    """
    First usable address from the header chain, else the peer address.

    Empty values and the literal 'unknown' are skipped; comma lists yield
    their first entry.
    """
    for header in header_chain:
        value = headers.get(header)
        if not value or not value.strip() or value.strip().lower() == UNKNOWN_CLIENT:
            continue
        first = value.split(",")[0].strip()
        if first:
            return first
    return peer or UNKNOWN_CLIENT


class AdmissionController:
    """Blacklist and token-bucket gate backed by a shared store."""

    def __init__(self, store: IAdmissionStore, settings: AdmissionSettings):
        self._store = store
        self._settings = settings

    def bucket_key(self, client_id: str) -> str:
        return f"{self._settings.key_prefix}:bucket:{client_id}"

    def counter_key(self, client_id: str) -> str:
        return f"{self._settings.key_prefix}:count:{client_id}"

    def blacklist_key(self, client_id: str) -> str:
        return f"{self._settings.key_prefix}:blacklist:{client_id}"

    @property
    def retry_after_seconds(self) -> int:
        """Seconds until the bucket earns one token back."""
        interval = self._settings.refill_interval_seconds
        refill = max(self._settings.refill_tokens, 1)
        return max(1, math.ceil(interval / refill))

    async def admit(self, client_id: str) -> AdmissionDecision:
        blacklisted = await self._is_blacklisted(client_id)
        await self._record_request(client_id, blacklisted)

        if blacklisted:
            logger.warning("client_blacklisted_rejected", client_id=client_id)
            return AdmissionDecision(
                client_id=client_id,
                outcome=AdmissionOutcome.BLACKLISTED,
                retry_after=self._settings.blacklist_ttl_seconds,
            )

        remaining = await self._consume_token(client_id)
        if remaining is not None and remaining < 0:
            logger.warning("client_rate_limited", client_id=client_id)
            return AdmissionDecision(
                client_id=client_id,
                outcome=AdmissionOutcome.RATE_LIMITED,
                remaining_tokens=0,
                retry_after=self.retry_after_seconds,
            )

        return AdmissionDecision(client_id=client_id, remaining_tokens=remaining)

    async def _is_blacklisted(self, client_id: str) -> bool:
        try:
            return await self._store.exists(self.blacklist_key(client_id))
        except Exception as e:
            logger.warning(
                "admission_store_unavailable",
                operation="blacklist_check",
                client_id=client_id,
                error=str(e),
            )
            return False

    async def _consume_token(self, client_id: str) -> int | None:
        try:
            return await self._store.consume_token(
                self.bucket_key(client_id),
                self._settings.capacity,
                self._settings.refill_tokens,
                self._settings.refill_interval_seconds,
            )
        except Exception as e:
            logger.warning(
                "admission_store_unavailable",
                operation="consume_token",
                client_id=client_id,
                error=str(e),
            )
            return None

    async def _record_request(self, client_id: str, blacklisted: bool) -> None:
        try:
            count = await self._store.increment_with_ttl(
                self.counter_key(client_id), self._settings.window_seconds
            )
            # A live flag keeps its original expiry
            if not blacklisted and count >= self._settings.blacklist_threshold:
                await self._store.set_with_ttl(
                    self.blacklist_key(client_id), self._settings.blacklist_ttl_seconds
                )
                if count == self._settings.blacklist_threshold:
                    logger.warning(
                        "client_blacklisted",
                        client_id=client_id,
                        requests=count,
                        window_seconds=self._settings.window_seconds,
                        ttl_seconds=self._settings.blacklist_ttl_seconds,
                    )
        except Exception as e:
            logger.warning(
                "admission_counter_failed",
                client_id=client_id,
                error=str(e),
            )
