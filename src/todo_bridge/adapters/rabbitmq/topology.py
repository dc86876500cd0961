"""RabbitMQ adapter – BrokerTopology."""
from __future__ import annotations

import dataclasses
from typing import Any

__all__ = ["BrokerTopology"]


@dataclasses.dataclass(frozen=True)
class BrokerTopology:
    """Fixed queue/exchange layout of the bridge.

    Rejected requests are dead-lettered through ``dead_letter_exchange`` into
    ``dead_letter_queue``; both the exchange and the routing key are set on the
    request queue so the message actually reaches the bound queue.
    """

    request_queue: str = "api.requests"
    response_queue: str = "api.responses"
    dead_letter_queue: str = "api.dlq"
    dead_letter_exchange: str = "dlx.exchange"

    @classmethod
    def from_settings(cls, settings: Any) -> "BrokerTopology":
        return cls(
            request_queue=settings.request_queue,
            response_queue=settings.response_queue,
            dead_letter_queue=settings.dead_letter_queue,
            dead_letter_exchange=settings.dead_letter_exchange,
        )

    @property
    def request_arguments(self) -> dict[str, str]:
        return {
            "x-dead-letter-exchange": self.dead_letter_exchange,
            "x-dead-letter-routing-key": self.dead_letter_queue,
        }

    async def declare(self, channel: Any, aio_pika: Any) -> None:
        """Declare exchange, queues and the DLQ binding on *channel*."""
        dlx = await channel.declare_exchange(
            self.dead_letter_exchange, aio_pika.ExchangeType.DIRECT, durable=True
        )
        dlq = await channel.declare_queue(self.dead_letter_queue, durable=True)
        await dlq.bind(dlx, routing_key=self.dead_letter_queue)
        await channel.declare_queue(self.response_queue, durable=True)
        await channel.declare_queue(self.request_queue, durable=True, arguments=self.request_arguments)

    def describe(self) -> dict[str, Any]:
        return {
            "request_queue": self.request_queue,
            "response_queue": self.response_queue,
            "dead_letter_queue": self.dead_letter_queue,
            "dead_letter_exchange": self.dead_letter_exchange,
            "request_arguments": self.request_arguments,
        }
