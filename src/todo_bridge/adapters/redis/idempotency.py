"""Redis adapter – RedisIdempotencyCache.

Records live under ``<cache prefix>:idempotency:<owner_id>:<key>`` as
``{"owner_id", "resource_id"}`` JSON; expiry is Redis' own key TTL, so there
is nothing to sweep.
"""
from __future__ import annotations

from todo_bridge.adapters.redis.cache import RedisCache
from todo_bridge.kernel.errors import SerializationError
from todo_bridge.kernel.messaging import IdempotencyCache, IdempotencyTTL, ttl_to_timedelta
from todo_bridge.observability.logging import get_logger

__all__ = ["RedisIdempotencyCache"]

logger = get_logger(__name__)


class RedisIdempotencyCache(IdempotencyCache):
    def __init__(self, cache: RedisCache, namespace: str = "idempotency") -> None:
        self._cache = cache
        self._namespace = namespace

    async def check(self, owner_id: int, key: str) -> int | None:
        try:
            data = await self._cache.get_record(self._namespace, owner_id, key)
        except SerializationError as exc:
            logger.warning("idempotency_record_corrupt", **exc.log_fields())
            return None
        except Exception as exc:  # noqa: BLE001
            logger.warning("idempotency_lookup_failed", error=str(exc))
            return None
        if data is None:
            return None
        try:
            if data["owner_id"] != owner_id:
                return None
            return int(data["resource_id"])
        except (ValueError, KeyError, TypeError):
            logger.warning("idempotency_record_corrupt", key=self._cache.key(self._namespace, owner_id, key))
            return None

    async def store(self, owner_id: int, key: str, resource_id: int, ttl: IdempotencyTTL) -> None:
        await self._cache.put_record(
            (self._namespace, owner_id, key),
            {"owner_id": owner_id, "resource_id": resource_id},
            ttl_to_timedelta(ttl).total_seconds(),
        )
