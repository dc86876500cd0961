"""Kernel messaging – envelopes, idempotency and inbox ports."""
from todo_bridge.kernel.messaging.envelope import (
    CONTENT_TYPE_JSON,
    DeliveryContext,
    ReplyRoute,
    RequestEnvelope,
    ResponseEnvelope,
    ResponseStatus,
)
from todo_bridge.kernel.messaging.idempotency import (
    IdempotencyCache,
    IdempotencyRecord,
    IdempotencyTTL,
    ttl_to_timedelta,
)
from todo_bridge.kernel.messaging.inbox import ProcessedRequestStore

__all__ = [
    "CONTENT_TYPE_JSON",
    "DeliveryContext",
    "IdempotencyCache",
    "IdempotencyRecord",
    "IdempotencyTTL",
    "ProcessedRequestStore",
    "ReplyRoute",
    "RequestEnvelope",
    "ResponseEnvelope",
    "ResponseStatus",
    "ttl_to_timedelta",
]
