"""Application-layer errors – the bridge's dispatch-boundary taxonomy."""

from __future__ import annotations

from typing import Any

from todo_bridge.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class BridgeError(ApplicationError):
    """Error converted into an in-band error reply at the dispatch boundary."""

    default_code = "bridge_error"


class MalformedPayloadError(BridgeError):
    """Envelope or action payload could not be decoded. Never retried."""

    default_code = "malformed_payload"

    def __init__(
        self,
        message: str = "invalid message format",
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []


class InvalidCredentialError(BridgeError):
    """The opaque credential carried by the request was rejected."""

    default_code = "invalid_credential"

    def __init__(self, message: str = "invalid api key", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class InvalidActionError(BridgeError):
    """The action tag is not in the dispatch table."""

    default_code = "invalid_action"

    def __init__(self, action: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(message or "invalid action", detail={"action": action}, **kwargs)
        self.action = action


class BackendError(BridgeError):
    """The backend collaborator failed in an unexpected way."""

    default_code = "backend_error"
    retryable = True


class ReplyTimeoutError(ApplicationError):
    """The caller gave up waiting for a reply."""

    default_code = "reply_timeout"

    def __init__(self, correlation_id: str, timeout: float, **kwargs: Any) -> None:
        super().__init__(
            f"no reply for '{correlation_id}' within {timeout:g}s",
            **kwargs,
        )
        self.correlation_id = correlation_id
        self.timeout = timeout


__all__ = [
    "ApplicationError",
    "BackendError",
    "BridgeError",
    "InvalidActionError",
    "InvalidCredentialError",
    "MalformedPayloadError",
    "ReplyTimeoutError",
]
