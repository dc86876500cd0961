"""Application bridge – ReplyRouter."""
from __future__ import annotations

from todo_bridge.kernel.messaging import ReplyRoute

__all__ = ["ReplyRouter"]


class ReplyRouter:
    """Pick where the reply to one delivery goes.

    A caller-supplied ``reply_to`` queue gets a transient reply; everything
    else lands on the shared response queue as a persistent message.
    """

    def __init__(self, response_queue: str = "api.responses") -> None:
        if not response_queue:
            raise ValueError("response_queue must not be empty")
        self._response_queue = response_queue

    @property
    def response_queue(self) -> str:
        return self._response_queue

    def route(self, reply_to: str | None) -> ReplyRoute:
        if reply_to:
            return ReplyRoute(destination=reply_to, durable=False)
        return ReplyRoute(destination=self._response_queue, durable=True)
