"""Kernel messaging – request/response envelopes and per-delivery context.

Wire format of a request body::

    {"id": "t1", "version": "v1", "action": "create_user",
     "data": {"username": "u1", "password": "p1"}, "auth": "<credential>"}

and of a reply::

    {"correlation_id": "t1", "status": "ok", "data": {...},
     "error": null, "timestamp": "2026-01-01T12:00:00Z"}
"""
from __future__ import annotations

import dataclasses
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from todo_bridge.kernel.errors import MalformedPayloadError

CONTENT_TYPE_JSON = "application/json"


class ResponseStatus(str, Enum):
    """Reply status tag. ``ok`` is the only success tag emitted."""

    OK = "ok"
    ERROR = "error"


class RequestEnvelope(BaseModel):
    """Action-tagged request consumed from the request queue.

    ``data`` stays an untyped JSON value; the action handler decodes it into
    its own request model.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = ""
    version: str = "v1"
    action: str
    data: Any = None
    auth: str = ""

    @classmethod
    def decode(cls, body: bytes | str) -> "RequestEnvelope":
        """Parse a raw message body, raising :class:`MalformedPayloadError`."""
        try:
            return cls.model_validate_json(body)
        except ValidationError as exc:
            raise MalformedPayloadError(
                "invalid message format",
                errors=[{"loc": list(e["loc"]), "msg": e["msg"]} for e in exc.errors()],
                cause=exc,
            ) from exc

    def with_default_id(self, fallback: str) -> "RequestEnvelope":
        """Return a copy whose ``id`` falls back to *fallback* when empty."""
        if self.id or not fallback:
            return self
        return self.model_copy(update={"id": fallback})


class ResponseEnvelope(BaseModel):
    """Reply published for exactly one consumed request."""

    correlation_id: str
    status: ResponseStatus
    data: Any = None
    error: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @model_validator(mode="after")
    def _one_of_data_or_error(self) -> "ResponseEnvelope":
        if self.status is ResponseStatus.ERROR:
            if not self.error:
                raise ValueError("error replies must carry an error message")
            if self.data is not None:
                raise ValueError("error replies must not carry data")
        elif self.error is not None:
            raise ValueError("success replies must not carry an error")
        return self

    @classmethod
    def success(cls, correlation_id: str, data: Any) -> "ResponseEnvelope":
        return cls(correlation_id=correlation_id, status=ResponseStatus.OK, data=data)

    @classmethod
    def failure(cls, correlation_id: str, error: str) -> "ResponseEnvelope":
        return cls(correlation_id=correlation_id, status=ResponseStatus.ERROR, error=error)

    @property
    def ok(self) -> bool:
        return self.status is ResponseStatus.OK

    def to_bytes(self) -> bytes:
        return self.model_dump_json().encode()


@dataclasses.dataclass(frozen=True)
class ReplyRoute:
    """Resolved destination for a single reply."""

    destination: str
    durable: bool


@dataclasses.dataclass(frozen=True)
class DeliveryContext:
    """Transport metadata of one in-flight delivery. Never persisted."""

    correlation_id: str
    reply_to: str = ""
    redelivered: bool = False
    message_id: str = ""
    route: ReplyRoute | None = None

    def log_fields(self) -> dict[str, Any]:
        return {
            "correlation_id": self.correlation_id,
            "message_id": self.message_id,
            "reply_to": self.reply_to,
            "redelivered": self.redelivered,
        }


__all__ = [
    "CONTENT_TYPE_JSON",
    "DeliveryContext",
    "ReplyRoute",
    "RequestEnvelope",
    "ResponseEnvelope",
    "ResponseStatus",
]
