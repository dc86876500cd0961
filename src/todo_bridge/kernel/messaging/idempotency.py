"""Kernel messaging – business-level idempotency port."""
from __future__ import annotations

import abc
import dataclasses
from datetime import datetime, timedelta
from typing import TypeAlias

IdempotencyTTL: TypeAlias = timedelta | int | float


@dataclasses.dataclass(frozen=True)
class IdempotencyRecord:
    """Resource produced by the first request carrying a given key."""

    owner_id: int
    result_resource_id: int
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def visible_to(self, owner_id: int) -> bool:
        return self.owner_id == owner_id


def ttl_to_timedelta(ttl: IdempotencyTTL) -> timedelta:
    """Normalise a TTL given as ``timedelta`` or seconds."""
    if isinstance(ttl, timedelta):
        return ttl
    return timedelta(seconds=ttl)


class IdempotencyCache(abc.ABC):
    """Port: (owner, dedup key) → previously created resource id."""

    @abc.abstractmethod
    async def check(self, owner_id: int, key: str) -> int | None:
        """Return the stored resource id, or ``None`` when absent, expired or foreign."""

    @abc.abstractmethod
    async def store(self, owner_id: int, key: str, resource_id: int, ttl: IdempotencyTTL) -> None:
        """Upsert the record for (*owner_id*, *key*); other owners' records are untouched."""


__all__ = [
    "IdempotencyCache",
    "IdempotencyRecord",
    "IdempotencyTTL",
    "ttl_to_timedelta",
]
