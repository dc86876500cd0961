"""Observability – RequestContext, CorrelationContext."""
from __future__ import annotations

import dataclasses
from contextvars import ContextVar
from uuid import uuid4


@dataclasses.dataclass(frozen=True)
class RequestContext:
    """Ambient context for one delivery or HTTP request."""
    correlation_id: str
    action: str | None = None
    user_id: str | None = None

    @classmethod
    def new(cls, action: str | None = None) -> "RequestContext":
        return cls(correlation_id=str(uuid4()), action=action)


_CTX_VAR: ContextVar[RequestContext | None] = ContextVar("_todo_bridge_request_ctx", default=None)


class CorrelationContext:
    """Ambient correlation context stored in a ``ContextVar``."""

    @staticmethod
    def set(ctx: RequestContext) -> None:
        _CTX_VAR.set(ctx)

    @staticmethod
    def get() -> RequestContext | None:
        return _CTX_VAR.get()

    @staticmethod
    def get_or_new() -> RequestContext:
        ctx = _CTX_VAR.get()
        if ctx is None:
            ctx = RequestContext.new()
            _CTX_VAR.set(ctx)
        return ctx

    @staticmethod
    def clear() -> None:
        _CTX_VAR.set(None)

    @staticmethod
    def set_from_headers(headers: dict[str, str]) -> RequestContext:
        """Store a context built from HTTP headers.

        Priority order for the correlation ID:
        ``X-Correlation-ID`` → ``X-Request-ID`` → generated UUID.
        Header names are matched case-insensitively.
        """
        norm = {k.lower(): v for k, v in headers.items()}
        correlation_id = (
            norm.get("x-correlation-id")
            or norm.get("x-request-id")
            or str(uuid4())
        )
        ctx = RequestContext(correlation_id=correlation_id, user_id=norm.get("x-user-id"))
        _CTX_VAR.set(ctx)
        return ctx


__all__ = ["CorrelationContext", "RequestContext"]
