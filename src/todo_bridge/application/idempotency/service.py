"""Application idempotency – IdempotentCreator.

Shared by the queue handlers and the HTTP v2 routes: a create request that
carries an idempotency key returns the resource created by the first request
with the same (owner, credential, key) instead of creating another one.
"""
from __future__ import annotations

import dataclasses
from datetime import timedelta
from typing import Generic, TypeVar

from todo_bridge.application.idempotency.keys import derive_idempotency_key
from todo_bridge.kernel.messaging import IdempotencyCache, IdempotencyTTL
from todo_bridge.kernel.todo import TodoBackend, TodoItem, TodoList
from todo_bridge.observability.logging import get_logger

__all__ = ["CreationResult", "IdempotentCreator"]

logger = get_logger(__name__)

R = TypeVar("R", TodoList, TodoItem)


@dataclasses.dataclass(frozen=True)
class CreationResult(Generic[R]):
    resource: R
    created: bool

    @property
    def duplicate(self) -> bool:
        return not self.created


class IdempotentCreator:
    def __init__(
        self,
        backend: TodoBackend,
        cache: IdempotencyCache,
        ttl: IdempotencyTTL = timedelta(hours=24),
    ) -> None:
        self._backend = backend
        self._cache = cache
        self._ttl = ttl

    async def create_list(
        self,
        user_id: int,
        todo_list: TodoList,
        *,
        credential: str = "",
        idempotency_key: str | None = None,
    ) -> CreationResult[TodoList]:
        key = derive_idempotency_key(credential, idempotency_key) if idempotency_key else None
        if key is not None:
            existing = await self._cache.check(user_id, key)
            if existing is not None:
                logger.info("duplicate_create_list", user_id=user_id, list_id=existing)
                return CreationResult(await self._backend.lists.get_by_id(user_id, existing), created=False)

        list_id = await self._backend.lists.create(user_id, todo_list)
        if key is not None:
            await self._remember(user_id, key, list_id)
        return CreationResult(dataclasses.replace(todo_list, id=list_id), created=True)

    async def create_item(
        self,
        user_id: int,
        list_id: int,
        item: TodoItem,
        *,
        credential: str = "",
        idempotency_key: str | None = None,
    ) -> CreationResult[TodoItem]:
        key = derive_idempotency_key(credential, idempotency_key) if idempotency_key else None
        if key is not None:
            existing = await self._cache.check(user_id, key)
            if existing is not None:
                logger.info("duplicate_create_item", user_id=user_id, item_id=existing)
                return CreationResult(await self._backend.items.get_by_id(user_id, existing), created=False)

        item_id = await self._backend.items.create(user_id, list_id, item)
        if key is not None:
            await self._remember(user_id, key, item_id)
        return CreationResult(dataclasses.replace(item, id=item_id, list_id=list_id), created=True)

    async def _remember(self, user_id: int, key: str, resource_id: int) -> None:
        # the resource is already created at this point
        try:
            await self._cache.store(user_id, key, resource_id, self._ttl)
        except Exception as exc:  # noqa: BLE001
            logger.warning("idempotency_store_failed", user_id=user_id, resource_id=resource_id, error=str(exc))
