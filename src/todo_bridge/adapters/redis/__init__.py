"""Redis adapter (redis.asyncio)."""
from todo_bridge.adapters.redis.cache import RedisCache
from todo_bridge.adapters.redis.idempotency import RedisIdempotencyCache

__all__ = ["RedisCache", "RedisIdempotencyCache"]
