"""Kernel errors – BaseError, root of the todo_bridge hierarchy."""

from __future__ import annotations

from typing import Any, ClassVar


class BaseError(Exception):
    """Root of the error hierarchy.

    ``message`` is what callers see, in an error reply or an HTTP body;
    ``code`` is the stable slug logs and clients match on. ``retryable``
    tells the consumer whether redelivery could succeed.
    """

    default_code: ClassVar[str] = "base_error"
    retryable: ClassVar[bool] = False

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        extra = f", detail={self.detail!r}" if self.detail else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{extra})"

    def log_fields(self) -> dict[str, Any]:
        """Structured fields for a structlog event describing this error."""
        fields: dict[str, Any] = {"error_code": self.code, "error": self.message}
        if self.detail:
            fields["error_detail"] = self.detail
        if self.cause is not None:
            fields["error_cause"] = repr(self.cause)
        return fields

    def to_dict(self, *, include_cause: bool = True) -> dict[str, Any]:
        """Plain-dict form; HTTP bodies pass ``include_cause=False``."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if include_cause and self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


__all__ = ["BaseError"]
