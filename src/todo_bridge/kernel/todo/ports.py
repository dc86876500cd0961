"""Kernel todo – backend collaborator ports consumed by the bridge.

Every method either returns a value or raises a
:class:`~todo_bridge.kernel.errors.DomainError` subclass; callers never
inspect storage internals.
"""
from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Protocol

from todo_bridge.kernel.todo.models import TodoItem, TodoList, UpdateItemInput, UpdateListInput, User

if TYPE_CHECKING:
    from todo_bridge.application.pagination import Page, PageRequest


class UserService(Protocol):
    async def create_user(self, user: User) -> int: ...
    async def get_user(self, user_id: int) -> User: ...


class TodoListService(Protocol):
    async def create(self, user_id: int, todo_list: TodoList) -> int: ...
    async def get_all(self, user_id: int) -> list[TodoList]: ...
    async def get_by_id(self, user_id: int, list_id: int) -> TodoList: ...
    async def update(self, user_id: int, list_id: int, data: UpdateListInput) -> None: ...
    async def delete(self, user_id: int, list_id: int) -> None: ...
    async def archive(self, user_id: int, list_id: int) -> None: ...
    async def get_all_paginated(
        self, user_id: int, request: "PageRequest", archived: bool | None = None
    ) -> "Page[TodoList]": ...
    async def get_item_count(self, user_id: int, list_id: int) -> int: ...


class TodoItemService(Protocol):
    async def create(self, user_id: int, list_id: int, item: TodoItem) -> int: ...
    async def get_all(self, user_id: int, list_id: int) -> list[TodoItem]: ...
    async def get_by_id(self, user_id: int, item_id: int) -> TodoItem: ...
    async def update(self, user_id: int, item_id: int, data: UpdateItemInput) -> None: ...
    async def delete(self, user_id: int, item_id: int) -> None: ...
    async def archive(self, user_id: int, item_id: int) -> None: ...
    async def complete(self, user_id: int, item_id: int) -> None: ...
    async def get_all_paginated(
        self,
        user_id: int,
        list_id: int | None,
        request: "PageRequest",
        done: bool | None = None,
    ) -> "Page[TodoItem]": ...


@dataclasses.dataclass(frozen=True)
class TodoBackend:
    """The three collaborators the dispatcher and HTTP routes talk to."""

    users: UserService
    lists: TodoListService
    items: TodoItemService


__all__ = ["TodoBackend", "TodoItemService", "TodoListService", "UserService"]
