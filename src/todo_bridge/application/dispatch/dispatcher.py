"""Application dispatch – ActionDispatcher.

Maps an action tag to its handler through a table built once at construction.
Everything the handlers raise leaves this module as a ``DomainError`` or a
``BridgeError``; anything else is wrapped into :class:`BackendError`.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeAlias

import pydantic

from todo_bridge.application.dispatch.handlers import ActionContext, ActionHandler
from todo_bridge.application.dispatch.requests import ActionRequest, OwnedRequest
from todo_bridge.kernel.errors import (
    BackendError,
    BaseError,
    InvalidActionError,
    MalformedPayloadError,
)
from todo_bridge.observability.logging import get_logger

__all__ = ["ActionDispatcher"]

logger = get_logger(__name__)

Payload: TypeAlias = bytes | str | Mapping[str, Any] | None


class ActionDispatcher:
    """Resolve and run the handler registered for an action tag."""

    def __init__(self, handlers: Mapping[str, ActionHandler]) -> None:
        self._handlers: dict[str, ActionHandler] = dict(handlers)

    @property
    def actions(self) -> tuple[str, ...]:
        return tuple(self._handlers)

    def __contains__(self, action: object) -> bool:
        return action in self._handlers

    async def dispatch(self, action: str, payload: Payload, *, credential: str = "") -> Any:
        handler = self._handlers.get(action)
        if handler is None:
            raise InvalidActionError(action)

        request = self._decode(handler, payload)
        try:
            return await handler(request, ActionContext(credential=credential))
        except BaseError:
            raise
        except Exception as exc:
            logger.error("backend_call_failed", action=action, error=str(exc))
            raise BackendError("backend operation failed", detail={"action": action}, cause=exc) from exc

    @staticmethod
    def _decode(handler: ActionHandler, payload: Payload) -> ActionRequest:
        model = handler.request_model
        try:
            if payload is None or payload in (b"", ""):
                request = model.model_validate({})
            elif isinstance(payload, (bytes, str)):
                request = model.model_validate_json(payload)
            else:
                request = model.model_validate(payload)
        except pydantic.ValidationError as exc:
            errors = exc.errors(include_url=False, include_context=False, include_input=False)
            raise MalformedPayloadError(
                "invalid payload",
                errors=[{"loc": list(e["loc"]), "msg": e["msg"]} for e in errors],
                detail={"action": handler.action},
            ) from exc

        if isinstance(request, OwnedRequest) and request.user_id < 1:
            raise MalformedPayloadError("user_id is required", detail={"action": handler.action})
        return request
