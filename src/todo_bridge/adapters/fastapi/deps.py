"""FastAPI adapter – dependency functions for the routes."""
from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, Header, Query, Request

from todo_bridge.application.pagination import PageRequest
from todo_bridge.kernel.errors import InvalidCredentialError


def get_container(request: Request) -> Any:
    return request.app.state.container


def current_user_id(x_user_id: Annotated[str | None, Header()] = None) -> int:
    """Caller identity from ``X-User-ID``; anything but a positive integer is 401."""
    try:
        user_id = int(x_user_id or "")
    except ValueError:
        user_id = 0
    if user_id < 1:
        raise InvalidCredentialError("missing or invalid X-User-ID header")
    return user_id


def credential(authorization: Annotated[str, Header()] = "") -> str:
    return authorization


def _as_int(raw: str | None) -> int | None:
    try:
        return int(raw) if raw is not None else None
    except ValueError:
        return None


def _as_bool(raw: str | None) -> bool | None:
    if raw is None or raw == "":
        return None
    return raw.lower() == "true"


def page_request(
    page: Annotated[str | None, Query()] = None,
    limit: Annotated[str | None, Query()] = None,
) -> PageRequest:
    """Lenient paging: unparsable or out-of-range values fall back to the defaults."""
    return PageRequest.clamped(_as_int(page), _as_int(limit))


def optional_flag(name: str) -> Any:
    def dependency(request: Request) -> bool | None:
        return _as_bool(request.query_params.get(name))

    return Depends(dependency)


def optional_int(name: str) -> Any:
    def dependency(request: Request) -> int | None:
        return _as_int(request.query_params.get(name))

    return Depends(dependency)


ContainerDep = Annotated[Any, Depends(get_container)]
UserIdDep = Annotated[int, Depends(current_user_id)]
CredentialDep = Annotated[str, Depends(credential)]
PageDep = Annotated[PageRequest, Depends(page_request)]

__all__ = [
    "ContainerDep",
    "CredentialDep",
    "PageDep",
    "UserIdDep",
    "credential",
    "current_user_id",
    "get_container",
    "optional_flag",
    "optional_int",
    "page_request",
]
