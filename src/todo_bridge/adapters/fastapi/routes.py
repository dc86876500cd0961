"""FastAPI adapter – routers: health, bridge (``/rabbitmq``), lists and items (``/api/v2``)."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from todo_bridge import __version__
from todo_bridge.adapters.fastapi.deps import (
    ContainerDep,
    CredentialDep,
    PageDep,
    UserIdDep,
    optional_flag,
    optional_int,
)
from todo_bridge.application.pagination import Page
from todo_bridge.kernel.errors import InvalidCredentialError
from todo_bridge.kernel.messaging import RequestEnvelope, ResponseEnvelope
from todo_bridge.kernel.time import utc_now
from todo_bridge.kernel.todo import TodoItem, TodoList, UpdateItemInput, UpdateListInput

BRIDGE_FEATURES = ("api_key_auth", "idempotency_check", "structured_responses", "error_handling")

DUPLICATE_MESSAGE = "Resource already created"


# -- bodies -------------------------------------------------------------------

class _Body(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ListCreateBody(_Body):
    title: str = Field(min_length=1)
    description: str = ""
    color: str = ""
    priority: int = 0
    idempotency_key: str | None = None


class ListUpdateBody(_Body):
    title: str | None = None
    description: str | None = None
    archived: bool | None = None
    color: str | None = None
    priority: int | None = None


class ItemCreateBody(_Body):
    list_id: int = Field(ge=1)
    title: str = Field(min_length=1)
    description: str = ""
    idempotency_key: str | None = None


class ItemUpdateBody(_Body):
    title: str | None = None
    description: str | None = None
    done: bool | None = None


def _paged(page: Page[Any]) -> JSONResponse:
    data = [item.to_dict() for item in page.items]
    return JSONResponse(
        {"data": data, "meta": page.meta()},
        headers={
            "X-Total-Count": str(page.total),
            "X-Page": str(page.page),
            "X-Limit": str(page.size),
        },
    )


def _duplicate(resource: TodoList | TodoItem) -> JSONResponse:
    return JSONResponse(
        {"message": DUPLICATE_MESSAGE, "status": "duplicate", "data": resource.to_dict()},
        status_code=200,
    )


# -- ops ------------------------------------------------------------------------

def health_router() -> APIRouter:
    router = APIRouter(tags=["ops"])

    @router.get("/health")
    async def health(container: ContainerDep) -> dict[str, Any]:
        return {
            "status": "healthy",
            "timestamp": utc_now().isoformat(),
            "version": __version__,
            "dependencies": await container.dependencies(),
        }

    return router


def bridge_router() -> APIRouter:
    router = APIRouter(prefix="/rabbitmq", tags=["bridge"])

    @router.post("/process")
    async def process(request: Request, container: ContainerDep) -> JSONResponse:
        """Run one request envelope through the queue pipeline synchronously."""
        envelope = RequestEnvelope.decode(await request.body())
        envelope = envelope.with_default_id(request.headers.get("x-correlation-id", ""))
        try:
            result = await container.pipeline.process(envelope)
        except InvalidCredentialError as exc:
            failure = ResponseEnvelope.failure(envelope.id, exc.message)
            return JSONResponse(failure.model_dump(mode="json"), status_code=401)
        await container.pipeline.complete(envelope, result)
        return JSONResponse(result.response.model_dump(mode="json"), status_code=200)

    @router.get("/stats")
    async def stats(container: ContainerDep) -> dict[str, Any]:
        topology = container.topology
        return {
            "status": "ok",
            "service": "todo_bridge",
            "timestamp": utc_now().isoformat(),
            "supported_actions": list(container.dispatcher.actions),
            "features": list(BRIDGE_FEATURES),
            "min_credential_length": container.settings.min_credential_length,
            "queues": [topology.request_queue, topology.response_queue, topology.dead_letter_queue],
        }

    return router


# -- lists ------------------------------------------------------------------------

def lists_router() -> APIRouter:
    router = APIRouter(prefix="/api/v2/lists", tags=["lists"])

    @router.post("", status_code=201)
    async def create_list(
        body: ListCreateBody, user_id: UserIdDep, auth: CredentialDep, container: ContainerDep
    ) -> Any:
        result = await container.creator.create_list(
            user_id,
            TodoList(title=body.title, description=body.description, color=body.color, priority=body.priority),
            credential=auth,
            idempotency_key=body.idempotency_key,
        )
        if result.duplicate:
            return _duplicate(result.resource)
        return result.resource.to_dict()

    @router.get("")
    async def get_all_lists(
        user_id: UserIdDep,
        page: PageDep,
        container: ContainerDep,
        archived: bool | None = optional_flag("archived"),
    ) -> JSONResponse:
        return _paged(await container.backend.lists.get_all_paginated(user_id, page, archived=archived))

    @router.get("/{list_id}")
    async def get_list(list_id: int, user_id: UserIdDep, container: ContainerDep) -> dict[str, Any]:
        todo_list = await container.backend.lists.get_by_id(user_id, list_id)
        item_count = await container.backend.lists.get_item_count(user_id, list_id)
        return {**todo_list.to_dict(), "item_count": item_count}

    @router.put("/{list_id}")
    async def update_list(
        list_id: int, body: ListUpdateBody, user_id: UserIdDep, container: ContainerDep
    ) -> dict[str, Any]:
        await container.backend.lists.update(user_id, list_id, UpdateListInput(**body.model_dump()))
        return (await container.backend.lists.get_by_id(user_id, list_id)).to_dict()

    @router.delete("/{list_id}")
    async def delete_list(list_id: int, user_id: UserIdDep, container: ContainerDep) -> dict[str, str]:
        await container.backend.lists.archive(user_id, list_id)
        return {"status": "list archived successfully"}

    @router.patch("/{list_id}/archive")
    async def archive_list(list_id: int, user_id: UserIdDep, container: ContainerDep) -> dict[str, str]:
        await container.backend.lists.archive(user_id, list_id)
        return {"status": "list archived successfully"}

    return router


# -- items ------------------------------------------------------------------------

def items_router() -> APIRouter:
    router = APIRouter(prefix="/api/v2/items", tags=["items"])

    @router.post("", status_code=201)
    async def create_item(
        body: ItemCreateBody, user_id: UserIdDep, auth: CredentialDep, container: ContainerDep
    ) -> Any:
        result = await container.creator.create_item(
            user_id,
            body.list_id,
            TodoItem(title=body.title, description=body.description),
            credential=auth,
            idempotency_key=body.idempotency_key,
        )
        if result.duplicate:
            return _duplicate(result.resource)
        return result.resource.to_dict()

    @router.get("")
    async def get_all_items(
        user_id: UserIdDep,
        page: PageDep,
        container: ContainerDep,
        list_id: int | None = optional_int("list_id"),
        completed: bool | None = optional_flag("completed"),
    ) -> JSONResponse:
        list_filter = list_id if list_id is not None and list_id > 0 else None
        return _paged(
            await container.backend.items.get_all_paginated(user_id, list_filter, page, done=completed)
        )

    @router.get("/{item_id}")
    async def get_item(item_id: int, user_id: UserIdDep, container: ContainerDep) -> dict[str, Any]:
        return (await container.backend.items.get_by_id(user_id, item_id)).to_dict()

    @router.put("/{item_id}")
    async def update_item(
        item_id: int, body: ItemUpdateBody, user_id: UserIdDep, container: ContainerDep
    ) -> dict[str, Any]:
        await container.backend.items.update(user_id, item_id, UpdateItemInput(**body.model_dump()))
        return (await container.backend.items.get_by_id(user_id, item_id)).to_dict()

    @router.delete("/{item_id}")
    async def delete_item(item_id: int, user_id: UserIdDep, container: ContainerDep) -> dict[str, str]:
        await container.backend.items.archive(user_id, item_id)
        return {"status": "item archived successfully"}

    @router.patch("/{item_id}/complete")
    async def complete_item(item_id: int, user_id: UserIdDep, container: ContainerDep) -> dict[str, str]:
        await container.backend.items.complete(user_id, item_id)
        return {"status": "item completed successfully"}

    return router


__all__ = ["bridge_router", "health_router", "items_router", "lists_router"]
