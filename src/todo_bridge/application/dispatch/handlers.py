"""Application dispatch – one coroutine per action.

Handlers receive an already-decoded request plus the caller's credential and
return plain JSON-ready dicts; they know nothing about queues or HTTP.
"""
from __future__ import annotations

import dataclasses
from typing import Any, Awaitable, Callable, TypeAlias

from todo_bridge.application.dispatch.requests import (
    ActionRequest,
    CreateItemRequest,
    CreateListRequest,
    CreateUserRequest,
    GetAllItemsRequest,
    GetAllListsRequest,
    GetUserRequest,
    ItemRef,
    ListRef,
    UpdateItemRequest,
    UpdateListRequest,
)
from todo_bridge.application.idempotency import IdempotentCreator
from todo_bridge.application.pagination import PageRequest
from todo_bridge.kernel.todo import TodoBackend, TodoItem, TodoList, User

HandlerFn: TypeAlias = Callable[[Any, "ActionContext"], Awaitable[dict[str, Any]]]


@dataclasses.dataclass(frozen=True)
class ActionContext:
    """What a handler may know about the caller besides its payload."""

    credential: str = ""


@dataclasses.dataclass(frozen=True)
class ActionHandler:
    """Entry of the dispatch table: payload model + coroutine."""

    action: str
    request_model: type[ActionRequest]
    fn: HandlerFn

    async def __call__(self, request: ActionRequest, context: ActionContext) -> dict[str, Any]:
        return await self.fn(request, context)


class TodoActionHandlers:
    """Handlers for the todo backend, keyed by action tag via :meth:`table`."""

    def __init__(self, backend: TodoBackend, creator: IdempotentCreator) -> None:
        self._backend = backend
        self._creator = creator

    def table(self) -> dict[str, ActionHandler]:
        entries: list[tuple[str, type[ActionRequest], HandlerFn]] = [
            ("create_user", CreateUserRequest, self.create_user),
            ("create_list", CreateListRequest, self.create_list),
            ("create_item", CreateItemRequest, self.create_item),
            ("get_user", GetUserRequest, self.get_user),
            ("get_list", ListRef, self.get_list),
            ("get_item", ItemRef, self.get_item),
            ("get_all_lists", GetAllListsRequest, self.get_all_lists),
            ("get_all_items", GetAllItemsRequest, self.get_all_items),
            ("update_list", UpdateListRequest, self.update_list),
            ("update_item", UpdateItemRequest, self.update_item),
            ("delete_list", ListRef, self.delete_list),
            ("delete_item", ItemRef, self.delete_item),
            ("archive_list", ListRef, self.archive_list),
            ("complete_item", ItemRef, self.complete_item),
        ]
        return {name: ActionHandler(name, model, fn) for name, model, fn in entries}

    # -- users ---------------------------------------------------------------

    async def create_user(self, req: CreateUserRequest, ctx: ActionContext) -> dict[str, Any]:
        user_id = await self._backend.users.create_user(
            User(username=req.username, password=req.password, name=req.name)
        )
        return {"user_id": user_id, "username": req.username}

    async def get_user(self, req: GetUserRequest, ctx: ActionContext) -> dict[str, Any]:
        user = await self._backend.users.get_user(req.user_id)
        return {"user_id": user.id, "username": user.username}

    # -- lists ---------------------------------------------------------------

    async def create_list(self, req: CreateListRequest, ctx: ActionContext) -> dict[str, Any]:
        result = await self._creator.create_list(
            req.user_id,
            TodoList(
                title=req.title,
                description=req.description,
                color=req.color,
                priority=req.priority,
            ),
            credential=ctx.credential,
            idempotency_key=req.idempotency_key,
        )
        if result.duplicate:
            return {
                "status": "duplicate",
                "message": "Resource already created",
                "list_id": result.resource.id,
                "title": result.resource.title,
                "data": result.resource.to_dict(),
            }
        return {"list_id": result.resource.id, "title": result.resource.title}

    async def get_list(self, req: ListRef, ctx: ActionContext) -> dict[str, Any]:
        todo_list = await self._backend.lists.get_by_id(req.user_id, req.list_id)
        return todo_list.to_dict()

    async def get_all_lists(self, req: GetAllListsRequest, ctx: ActionContext) -> dict[str, Any]:
        if not req.paginated:
            lists = await self._backend.lists.get_all(req.user_id)
            return {"lists": [tl.to_dict() for tl in lists], "count": len(lists)}
        page = await self._backend.lists.get_all_paginated(
            req.user_id, PageRequest.clamped(req.page, req.limit), archived=req.archived
        )
        return {
            "lists": [tl.to_dict() for tl in page.items],
            "count": len(page.items),
            "meta": page.meta(),
        }

    async def update_list(self, req: UpdateListRequest, ctx: ActionContext) -> dict[str, Any]:
        await self._backend.lists.update(req.user_id, req.list_id, req.to_input())
        return {"list_id": req.list_id, "status": "updated"}

    async def delete_list(self, req: ListRef, ctx: ActionContext) -> dict[str, Any]:
        await self._backend.lists.delete(req.user_id, req.list_id)
        return {"list_id": req.list_id, "status": "deleted"}

    async def archive_list(self, req: ListRef, ctx: ActionContext) -> dict[str, Any]:
        await self._backend.lists.archive(req.user_id, req.list_id)
        return {"list_id": req.list_id, "status": "archived"}

    # -- items ---------------------------------------------------------------

    async def create_item(self, req: CreateItemRequest, ctx: ActionContext) -> dict[str, Any]:
        result = await self._creator.create_item(
            req.user_id,
            req.list_id,
            TodoItem(title=req.title, description=req.description),
            credential=ctx.credential,
            idempotency_key=req.idempotency_key,
        )
        if result.duplicate:
            return {
                "status": "duplicate",
                "message": "Resource already created",
                "item_id": result.resource.id,
                "title": result.resource.title,
                "list_id": result.resource.list_id,
                "data": result.resource.to_dict(),
            }
        return {"item_id": result.resource.id, "title": result.resource.title, "list_id": req.list_id}

    async def get_item(self, req: ItemRef, ctx: ActionContext) -> dict[str, Any]:
        item = await self._backend.items.get_by_id(req.user_id, req.item_id)
        return item.to_dict()

    async def get_all_items(self, req: GetAllItemsRequest, ctx: ActionContext) -> dict[str, Any]:
        if not req.paginated:
            items = await self._backend.items.get_all(req.user_id, req.list_id)
            return {"items": [item.to_dict() for item in items], "count": len(items)}
        page = await self._backend.items.get_all_paginated(
            req.user_id, req.list_id, PageRequest.clamped(req.page, req.limit), done=req.done
        )
        return {
            "items": [item.to_dict() for item in page.items],
            "count": len(page.items),
            "meta": page.meta(),
        }

    async def update_item(self, req: UpdateItemRequest, ctx: ActionContext) -> dict[str, Any]:
        await self._backend.items.update(req.user_id, req.item_id, req.to_input())
        return {"item_id": req.item_id, "status": "updated"}

    async def delete_item(self, req: ItemRef, ctx: ActionContext) -> dict[str, Any]:
        await self._backend.items.delete(req.user_id, req.item_id)
        return {"item_id": req.item_id, "status": "deleted"}

    async def complete_item(self, req: ItemRef, ctx: ActionContext) -> dict[str, Any]:
        await self._backend.items.complete(req.user_id, req.item_id)
        return {"item_id": req.item_id, "status": "completed"}


__all__ = ["ActionContext", "ActionHandler", "HandlerFn", "TodoActionHandlers"]
