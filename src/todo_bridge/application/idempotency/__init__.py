"""Application idempotency – business-level dedup of resource creation."""
from todo_bridge.application.idempotency.cache import InMemoryIdempotencyCache
from todo_bridge.application.idempotency.keys import derive_idempotency_key
from todo_bridge.application.idempotency.rwlock import ReadWriteLock
from todo_bridge.application.idempotency.service import CreationResult, IdempotentCreator

__all__ = [
    "CreationResult",
    "IdempotentCreator",
    "InMemoryIdempotencyCache",
    "ReadWriteLock",
    "derive_idempotency_key",
]
