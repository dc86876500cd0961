"""Testing fakes – in-process todo backend.

Follows the same visibility rules as the SQL backend: archived lists and
items are hidden from ``get_all``, ``delete`` removes rows, and resources
owned by another user are reported as missing.
"""
from __future__ import annotations

import dataclasses
import itertools

from todo_bridge.application.pagination import Page, PageRequest
from todo_bridge.kernel.errors import ConflictError, NotFoundError
from todo_bridge.kernel.time import Clock, SystemClock
from todo_bridge.kernel.todo import (
    TodoBackend,
    TodoItem,
    TodoList,
    UpdateItemInput,
    UpdateListInput,
    User,
)


class _Store:
    def __init__(self, clock: Clock) -> None:
        self.clock = clock
        self.users: dict[int, User] = {}
        self.lists: dict[int, TodoList] = {}
        self.list_owner: dict[int, int] = {}
        self.items: dict[int, TodoItem] = {}
        self._ids = itertools.count(1)

    def next_id(self) -> int:
        return next(self._ids)

    def owned_list(self, user_id: int, list_id: int) -> TodoList:
        todo_list = self.lists.get(list_id)
        if todo_list is None or self.list_owner.get(list_id) != user_id:
            raise NotFoundError("list", list_id)
        return todo_list

    def owned_item(self, user_id: int, item_id: int) -> TodoItem:
        item = self.items.get(item_id)
        if item is None or self.list_owner.get(item.list_id) != user_id:
            raise NotFoundError("item", item_id)
        return item


class InMemoryUserService:
    def __init__(self, store: _Store) -> None:
        self._store = store

    async def create_user(self, user: User) -> int:
        if any(u.username == user.username for u in self._store.users.values()):
            raise ConflictError(f"username '{user.username}' is already taken")
        user_id = self._store.next_id()
        self._store.users[user_id] = dataclasses.replace(user, id=user_id)
        return user_id

    async def get_user(self, user_id: int) -> User:
        user = self._store.users.get(user_id)
        if user is None:
            raise NotFoundError("user", user_id)
        return user


class InMemoryTodoListService:
    def __init__(self, store: _Store) -> None:
        self._store = store

    async def create(self, user_id: int, todo_list: TodoList) -> int:
        if user_id not in self._store.users:
            raise NotFoundError("user", user_id)
        now = self._store.clock.now()
        list_id = self._store.next_id()
        self._store.lists[list_id] = dataclasses.replace(
            todo_list, id=list_id, archived=False, created_at=now, updated_at=now
        )
        self._store.list_owner[list_id] = user_id
        return list_id

    def _of_user(self, user_id: int) -> list[TodoList]:
        return [
            tl for list_id, tl in sorted(self._store.lists.items())
            if self._store.list_owner[list_id] == user_id
        ]

    async def get_all(self, user_id: int) -> list[TodoList]:
        return [tl for tl in self._of_user(user_id) if not tl.archived]

    async def get_by_id(self, user_id: int, list_id: int) -> TodoList:
        return self._store.owned_list(user_id, list_id)

    async def update(self, user_id: int, list_id: int, data: UpdateListInput) -> None:
        data.validate()
        todo_list = self._store.owned_list(user_id, list_id)
        self._store.lists[list_id] = dataclasses.replace(
            todo_list, **data.changes(), updated_at=self._store.clock.now()
        )

    async def delete(self, user_id: int, list_id: int) -> None:
        self._store.owned_list(user_id, list_id)
        del self._store.lists[list_id]
        del self._store.list_owner[list_id]
        for item_id in [i.id for i in self._store.items.values() if i.list_id == list_id]:
            del self._store.items[item_id]

    async def archive(self, user_id: int, list_id: int) -> None:
        await self.update(user_id, list_id, UpdateListInput(archived=True))

    async def get_all_paginated(
        self, user_id: int, request: PageRequest, archived: bool | None = None
    ) -> Page[TodoList]:
        wanted = bool(archived)
        return Page.of([tl for tl in self._of_user(user_id) if tl.archived == wanted], request)

    async def get_item_count(self, user_id: int, list_id: int) -> int:
        self._store.owned_list(user_id, list_id)
        return sum(1 for i in self._store.items.values() if i.list_id == list_id and not i.archived)


class InMemoryTodoItemService:
    def __init__(self, store: _Store) -> None:
        self._store = store

    async def create(self, user_id: int, list_id: int, item: TodoItem) -> int:
        self._store.owned_list(user_id, list_id)
        now = self._store.clock.now()
        item_id = self._store.next_id()
        self._store.items[item_id] = dataclasses.replace(
            item, id=item_id, list_id=list_id, done=False, archived=False, created_at=now, updated_at=now
        )
        return item_id

    async def get_all(self, user_id: int, list_id: int) -> list[TodoItem]:
        self._store.owned_list(user_id, list_id)
        return [
            i for _, i in sorted(self._store.items.items())
            if i.list_id == list_id and not i.archived
        ]

    async def get_by_id(self, user_id: int, item_id: int) -> TodoItem:
        return self._store.owned_item(user_id, item_id)

    async def update(self, user_id: int, item_id: int, data: UpdateItemInput) -> None:
        data.validate()
        item = self._store.owned_item(user_id, item_id)
        self._store.items[item_id] = dataclasses.replace(
            item, **data.changes(), updated_at=self._store.clock.now()
        )

    async def delete(self, user_id: int, item_id: int) -> None:
        self._store.owned_item(user_id, item_id)
        del self._store.items[item_id]

    async def archive(self, user_id: int, item_id: int) -> None:
        await self.update(user_id, item_id, UpdateItemInput(archived=True))

    async def complete(self, user_id: int, item_id: int) -> None:
        await self.update(user_id, item_id, UpdateItemInput(done=True))

    async def get_all_paginated(
        self,
        user_id: int,
        list_id: int | None,
        request: PageRequest,
        done: bool | None = None,
    ) -> Page[TodoItem]:
        if list_id is not None:
            self._store.owned_list(user_id, list_id)
        items = [
            i for _, i in sorted(self._store.items.items())
            if self._store.list_owner.get(i.list_id) == user_id
            and not i.archived
            and (list_id is None or i.list_id == list_id)
            and (done is None or i.done == done)
        ]
        return Page.of(items, request)


def InMemoryTodoBackend(clock: Clock | None = None) -> TodoBackend:
    """Return a :class:`TodoBackend` whose three services share one in-memory store."""
    store = _Store(clock or SystemClock())
    return TodoBackend(
        users=InMemoryUserService(store),
        lists=InMemoryTodoListService(store),
        items=InMemoryTodoItemService(store),
    )


__all__ = [
    "InMemoryTodoBackend",
    "InMemoryTodoItemService",
    "InMemoryTodoListService",
    "InMemoryUserService",
]
