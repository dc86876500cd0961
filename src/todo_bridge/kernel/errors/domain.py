"""Domain errors – business rule violations raised by the todo backend."""

from __future__ import annotations

from typing import Any

from todo_bridge.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a domain rule is violated."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Input data does not meet validation rules.

    ``errors`` is a list of field-level validation failures.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def to_dict(self, *, include_cause: bool = True) -> dict[str, Any]:
        base = super().to_dict(include_cause=include_cause)
        base["errors"] = self.errors
        return base


class NotFoundError(DomainError):
    """The requested resource does not exist (or is not owned by the caller)."""

    default_code = "not_found"

    def __init__(
        self,
        resource: str,
        resource_id: Any = None,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        msg = message or (
            f"{resource} '{resource_id}' not found" if resource_id is not None else f"{resource} not found"
        )
        super().__init__(msg, **kwargs)
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(DomainError):
    """The operation conflicts with the current state (e.g. duplicate username)."""

    default_code = "conflict"


__all__ = ["ConflictError", "DomainError", "NotFoundError", "ValidationError"]
