"""FastAPI adapter – FastAPIExceptionMapper."""
from __future__ import annotations

from typing import Any, Callable


def _require_fastapi() -> None:
    try:
        import fastapi  # noqa: F401
    except ImportError as exc:
        raise ImportError("Install 'fastapi' to use the FastAPI adapter") from exc


class FastAPIExceptionMapper:
    """Register error → HTTP status-code mappings on a FastAPI app.

    Error body schema::

        {"code": "not_found", "message": "...", "detail": {...}, "correlation_id": "..."}

    Mappings
    --------
    ``ValidationError``         → 400
    ``MalformedPayloadError``   → 400
    ``InvalidActionError``      → 400
    ``InvalidCredentialError``  → 401
    ``NotFoundError``           → 404
    ``ConflictError``           → 409
    ``DomainError``             → 422
    ``BackendError``            → 503
    ``InfrastructureError``     → 503
    request body validation     → 400
    """

    def __init__(self) -> None:
        _require_fastapi()
        from todo_bridge.kernel.errors import (
            BackendError,
            ConflictError,
            DomainError,
            InfrastructureError,
            InvalidActionError,
            InvalidCredentialError,
            MalformedPayloadError,
            NotFoundError,
            ValidationError,
        )

        # more specific subtypes first
        self._map: list[tuple[type[Exception], int]] = [
            (ValidationError, 400),
            (MalformedPayloadError, 400),
            (InvalidActionError, 400),
            (InvalidCredentialError, 401),
            (NotFoundError, 404),
            (ConflictError, 409),
            (DomainError, 422),
            (BackendError, 503),
            (InfrastructureError, 503),
        ]

    @property
    def mappings(self) -> list[tuple[type[Exception], int]]:
        return list(self._map)

    def status_for(self, exc: BaseException) -> int:
        for exc_type, status in self._map:
            if isinstance(exc, exc_type):
                return status
        return 500

    def register(self, app: Any) -> None:
        """Register all error handlers on a ``FastAPI`` or ``Starlette`` app."""
        from fastapi.exceptions import RequestValidationError  # type: ignore[import-untyped]
        from fastapi.responses import JSONResponse  # type: ignore[import-untyped]

        from todo_bridge.kernel.errors.base import BaseError
        from todo_bridge.observability.correlation import CorrelationContext

        def body_for(code: str, message: str, detail: Any = None) -> dict[str, Any]:
            ctx = CorrelationContext.get()
            return {
                "code": code,
                "message": message,
                "detail": detail or {},
                "correlation_id": ctx.correlation_id if ctx is not None else None,
            }

        def make_handler(code: int) -> Callable[[Any, Any], Any]:
            def handler(request: Any, exc: Any) -> Any:  # noqa: ARG001
                if isinstance(exc, BaseError):
                    body = exc.to_dict(include_cause=False)
                    ctx = CorrelationContext.get()
                    body["correlation_id"] = ctx.correlation_id if ctx is not None else None
                else:
                    body = body_for("error", str(exc))
                return JSONResponse(status_code=code, content=body)

            return handler

        for exc_type, status in self._map:
            app.add_exception_handler(exc_type, make_handler(status))

        def request_validation_handler(request: Any, exc: Any) -> Any:  # noqa: ARG001
            errors = [{"loc": list(e["loc"]), "msg": e["msg"]} for e in exc.errors()]
            return JSONResponse(
                status_code=400,
                content=body_for("validation_error", "invalid input body", {"errors": errors}),
            )

        app.add_exception_handler(RequestValidationError, request_validation_handler)


__all__ = ["FastAPIExceptionMapper"]
