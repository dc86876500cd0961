"""Application inbox – InMemoryProcessedRequestStore."""
from __future__ import annotations

import threading
from datetime import datetime, timedelta

from todo_bridge.kernel.messaging import IdempotencyTTL, ProcessedRequestStore, ttl_to_timedelta
from todo_bridge.kernel.time import Clock, SystemClock

__all__ = ["InMemoryProcessedRequestStore"]


class InMemoryProcessedRequestStore(ProcessedRequestStore):
    """Request ids with an expiry; expired ids are swept on every write."""

    def __init__(self, ttl: IdempotencyTTL = timedelta(hours=24), clock: Clock | None = None) -> None:
        self._ttl = ttl_to_timedelta(ttl)
        self._clock = clock or SystemClock()
        self._seen: dict[str, datetime] = {}
        self._lock = threading.Lock()

    async def record(self, request_id: str) -> None:
        now = self._clock.now()
        with self._lock:
            self._seen[request_id] = now + self._ttl
            for rid in [r for r, exp in self._seen.items() if now >= exp]:
                del self._seen[rid]

    async def has_been_processed(self, request_id: str) -> bool:
        with self._lock:
            expires_at = self._seen.get(request_id)
            if expires_at is None:
                return False
            if self._clock.now() >= expires_at:
                del self._seen[request_id]
                return False
            return True
