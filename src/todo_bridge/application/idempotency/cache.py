"""Application idempotency – InMemoryIdempotencyCache."""
from __future__ import annotations

from todo_bridge.application.idempotency.rwlock import ReadWriteLock
from todo_bridge.kernel.messaging import (
    IdempotencyCache,
    IdempotencyRecord,
    IdempotencyTTL,
    ttl_to_timedelta,
)
from todo_bridge.kernel.time import Clock, SystemClock
from todo_bridge.observability.logging import get_logger

__all__ = ["InMemoryIdempotencyCache"]

logger = get_logger(__name__)


class InMemoryIdempotencyCache(IdempotencyCache):
    """Process-local idempotency cache.

    Records are keyed by ``(owner_id, key)``, so two owners presenting the
    same credential and caller key never displace each other. Shared by
    every consumer and HTTP handler of the process. Not durable
    across restarts; :class:`~todo_bridge.adapters.redis.RedisIdempotencyCache`
    implements the same port over the network.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or SystemClock()
        self._records: dict[tuple[int, str], IdempotencyRecord] = {}
        self._lock = ReadWriteLock()

    async def check(self, owner_id: int, key: str) -> int | None:
        with self._lock.read():
            record = self._records.get((owner_id, key))
            now = self._clock.now()
            if record is None:
                return None
            if not record.is_expired(now):
                return record.result_resource_id if record.visible_to(owner_id) else None

        with self._lock.write():
            # another writer may have replaced the record in between
            current = self._records.get((owner_id, key))
            if current is not None and current.is_expired(self._clock.now()):
                del self._records[(owner_id, key)]
                logger.debug("idempotency_record_expired", key=key)
        return None

    async def store(self, owner_id: int, key: str, resource_id: int, ttl: IdempotencyTTL) -> None:
        now = self._clock.now()
        record = IdempotencyRecord(
            owner_id=owner_id,
            result_resource_id=resource_id,
            expires_at=now + ttl_to_timedelta(ttl),
        )
        with self._lock.write():
            self._records[(owner_id, key)] = record
            expired = [k for k, r in self._records.items() if r.is_expired(now)]
            for k in expired:
                del self._records[k]
        if expired:
            logger.debug("idempotency_records_swept", count=len(expired))

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._records)
