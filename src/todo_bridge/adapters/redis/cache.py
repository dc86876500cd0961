"""Redis adapter – RedisCache.

Namespaced JSON records over ``redis.asyncio``. Keys are joined from their
parts with ``:`` under the cache's prefix; expiry is Redis' own key TTL.
"""
from __future__ import annotations

import json
import math
from typing import Any

from todo_bridge.kernel.errors import SerializationError


def _require_redis() -> Any:
    try:
        import redis.asyncio as aioredis
        return aioredis
    except ImportError as exc:
        raise ImportError("Install 'redis' to use the Redis adapter") from exc


class RedisCache:
    """The only place that touches the Redis client."""

    def __init__(self, url: str = "redis://localhost:6379/0", *, prefix: str = "todo_bridge", **kwargs: Any) -> None:
        aioredis = _require_redis()
        self._client = aioredis.from_url(url, **kwargs)
        self.prefix = prefix

    def key(self, *parts: object) -> str:
        head = [self.prefix] if self.prefix else []
        return ":".join([*head, *(str(p) for p in parts)])

    async def get_record(self, *parts: object) -> dict[str, Any] | None:
        """Return the JSON object stored under *parts*, or ``None``.

        Raises :class:`SerializationError` when the stored value is not a
        JSON object.
        """
        raw = await self._client.get(self.key(*parts))
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise SerializationError(f"corrupt record at {self.key(*parts)}", cause=exc) from exc
        if not isinstance(data, dict):
            raise SerializationError(f"corrupt record at {self.key(*parts)}")
        return data

    async def put_record(self, parts: tuple[object, ...], record: dict[str, Any], ttl_seconds: float) -> None:
        """Store *record* for *ttl_seconds*, rounded up; a non-positive TTL drops the key."""
        if ttl_seconds <= 0:
            await self.drop(*parts)
            return
        payload = json.dumps(record, separators=(",", ":")).encode()
        await self._client.set(self.key(*parts), payload, ex=math.ceil(ttl_seconds))

    async def drop(self, *parts: object) -> None:
        await self._client.delete(self.key(*parts))

    async def ping(self) -> bool:
        return bool(await self._client.ping())

    async def close(self) -> None:
        await self._client.aclose()


__all__ = ["RedisCache"]
