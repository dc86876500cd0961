"""Testing fakes – InMemoryReplyPublisher, FakeIncomingMessage."""
from __future__ import annotations

import dataclasses
from typing import Any

from todo_bridge.kernel.messaging import RequestEnvelope, ResponseEnvelope


@dataclasses.dataclass(frozen=True)
class PublishedReply:
    destination: str
    envelope: ResponseEnvelope
    durable: bool


class InMemoryReplyPublisher:
    """Records replies instead of sending them; ``fail_with`` makes every publish raise."""

    def __init__(self, fail_with: BaseException | None = None) -> None:
        self._replies: list[PublishedReply] = []
        self.fail_with = fail_with
        self.attempts = 0

    async def publish(self, destination: str, envelope: ResponseEnvelope, *, durable: bool) -> None:
        self.attempts += 1
        if self.fail_with is not None:
            raise self.fail_with
        self._replies.append(PublishedReply(destination, envelope, durable))

    @property
    def published(self) -> list[PublishedReply]:
        return list(self._replies)

    @property
    def last(self) -> PublishedReply:
        return self._replies[-1]

    def to(self, destination: str) -> list[PublishedReply]:
        return [r for r in self._replies if r.destination == destination]

    def clear(self) -> None:
        self._replies.clear()
        self.attempts = 0


@dataclasses.dataclass
class FakeIncomingMessage:
    """Stand-in for ``aio_pika.IncomingMessage`` that records the settlement."""

    body: bytes
    correlation_id: str | None = None
    reply_to: str | None = None
    redelivered: bool | None = False
    message_id: str | None = None
    acked: bool = False
    rejected: bool = False
    requeued: bool | None = None

    @classmethod
    def for_request(
        cls,
        action: str,
        data: Any = None,
        *,
        auth: str = "",
        request_id: str = "",
        correlation_id: str | None = None,
        reply_to: str | None = None,
        redelivered: bool = False,
    ) -> "FakeIncomingMessage":
        envelope = RequestEnvelope(id=request_id, action=action, data=data, auth=auth)
        return cls(
            body=envelope.model_dump_json().encode(),
            correlation_id=correlation_id if correlation_id is not None else request_id or None,
            reply_to=reply_to,
            redelivered=redelivered,
        )

    @property
    def settled(self) -> bool:
        return self.acked or self.rejected

    async def ack(self, multiple: bool = False) -> None:
        if self.settled:
            raise RuntimeError("message already settled")
        self.acked = True

    async def reject(self, requeue: bool = False) -> None:
        if self.settled:
            raise RuntimeError("message already settled")
        self.rejected = True
        self.requeued = requeue


__all__ = ["FakeIncomingMessage", "InMemoryReplyPublisher", "PublishedReply"]
