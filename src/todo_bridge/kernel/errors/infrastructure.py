"""Infrastructure errors – broker and serialisation failures."""

from __future__ import annotations

from typing import Any

from todo_bridge.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class TransportError(InfrastructureError):
    """Broker-level failure (connect, publish, ack). Retried once, then dead-lettered."""

    default_code = "transport_error"
    retryable = True

    def __init__(
        self,
        message: str,
        *,
        destination: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.destination = destination


class TopologyError(TransportError):
    """A queue, exchange or binding could not be declared at startup."""

    default_code = "topology_error"


class SerializationError(InfrastructureError):
    """Failed to serialize or deserialize a payload."""

    default_code = "serialization_error"

    def __init__(
        self,
        message: str,
        *,
        payload_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.payload_type = payload_type


__all__ = [
    "InfrastructureError",
    "SerializationError",
    "TopologyError",
    "TransportError",
]
