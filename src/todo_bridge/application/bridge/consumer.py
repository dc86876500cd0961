"""Application bridge – RequestConsumer.

Drives one delivery through
``RECEIVED → DECODED → AUTHENTICATED → DEDUP_CHECKED → DISPATCHED → REPLIED → ACKED``.

Acknowledgement rules:

* envelope could not be decoded, or the credential was refused:
  error reply, reject without requeue (``FAILED``), even when the reply
  itself cannot be published;
* payload, action or backend problems: error reply, ack (``ACKED``);
* transport failures and anything unexpected: reject with requeue on the
  first delivery (``REQUEUED``), without requeue once the broker marks the
  delivery as redelivered (``DEAD_LETTERED``).
"""
from __future__ import annotations

from typing import Any, Protocol

from todo_bridge.application.bridge.pipeline import ConsumerState, RequestPipeline
from todo_bridge.application.bridge.router import ReplyRouter
from todo_bridge.kernel.errors import InvalidCredentialError, MalformedPayloadError, TransportError
from todo_bridge.kernel.messaging import DeliveryContext, RequestEnvelope, ResponseEnvelope
from todo_bridge.observability.correlation import CorrelationContext, RequestContext
from todo_bridge.observability.logging import get_logger, mask_credential

__all__ = ["InboundMessage", "ReplyPublisher", "RequestConsumer"]

logger = get_logger(__name__)


class InboundMessage(Protocol):
    """The subset of ``aio_pika.abc.AbstractIncomingMessage`` the consumer uses."""

    body: bytes
    correlation_id: str | None
    reply_to: str | None
    redelivered: bool | None
    message_id: str | None

    async def ack(self, multiple: bool = False) -> None: ...
    async def reject(self, requeue: bool = False) -> None: ...


class ReplyPublisher(Protocol):
    async def publish(self, destination: str, envelope: ResponseEnvelope, *, durable: bool) -> None: ...


class RequestConsumer:
    def __init__(
        self,
        pipeline: RequestPipeline,
        publisher: ReplyPublisher,
        router: ReplyRouter,
    ) -> None:
        self._pipeline = pipeline
        self._publisher = publisher
        self._router = router

    async def __call__(self, message: InboundMessage) -> ConsumerState:
        return await self.handle(message)

    async def handle(self, message: InboundMessage) -> ConsumerState:
        """Process one delivery and return its terminal state."""
        ctx = self.delivery_context(message)
        CorrelationContext.set(RequestContext(correlation_id=ctx.correlation_id))
        log = logger.bind(**ctx.log_fields())
        log.debug("message_received", state=ConsumerState.RECEIVED.value)
        try:
            return await self._handle(message, ctx, log)
        except Exception as exc:  # noqa: BLE001
            requeue = not ctx.redelivered
            log.error(
                "delivery_failed",
                error_type=type(exc).__name__,
                error=str(exc),
                requeue=requeue,
            )
            await message.reject(requeue=requeue)
            return ConsumerState.REQUEUED if requeue else ConsumerState.DEAD_LETTERED
        finally:
            CorrelationContext.clear()

    def delivery_context(self, message: InboundMessage) -> DeliveryContext:
        reply_to = message.reply_to or ""
        return DeliveryContext(
            correlation_id=message.correlation_id or message.message_id or "",
            reply_to=reply_to,
            redelivered=bool(message.redelivered),
            message_id=message.message_id or "",
            route=self._router.route(reply_to),
        )

    async def _handle(self, message: InboundMessage, ctx: DeliveryContext, log: Any) -> ConsumerState:
        try:
            envelope = RequestEnvelope.decode(message.body)
        except MalformedPayloadError as exc:
            log.warning("envelope_rejected", error=exc.message)
            return await self._refuse(message, ctx, ResponseEnvelope.failure(ctx.correlation_id, exc.message), log)

        envelope = envelope.with_default_id(ctx.correlation_id)
        CorrelationContext.set(RequestContext(correlation_id=envelope.id or ctx.correlation_id, action=envelope.action))
        log = log.bind(request_id=envelope.id, action=envelope.action)
        log.debug("envelope_decoded", state=ConsumerState.DECODED.value)

        try:
            result = await self._pipeline.process(envelope)
        except InvalidCredentialError as exc:
            log.warning("credential_rejected", auth=mask_credential(envelope.auth))
            return await self._refuse(message, ctx, ResponseEnvelope.failure(envelope.id, exc.message), log)

        await self._reply(ctx, result.response, log)
        await self._pipeline.complete(envelope, result)
        await message.ack()
        log.info("message_acked", status=result.response.status.value, duplicate=result.duplicate)
        return ConsumerState.ACKED

    async def _reply(self, ctx: DeliveryContext, response: ResponseEnvelope, log: Any) -> None:
        route = ctx.route or self._router.route(ctx.reply_to)
        if not response.correlation_id and ctx.correlation_id:
            response = response.model_copy(update={"correlation_id": ctx.correlation_id})
        await self._publisher.publish(route.destination, response, durable=route.durable)
        log.debug(
            "reply_published",
            destination=route.destination,
            durable=route.durable,
            status=response.status.value,
            state=ConsumerState.REPLIED.value,
        )

    async def _refuse(
        self,
        message: InboundMessage,
        ctx: DeliveryContext,
        response: ResponseEnvelope,
        log: Any,
    ) -> ConsumerState:
        """Send the error reply and drop the delivery; it is never requeued."""
        try:
            await self._reply(ctx, response, log)
        except TransportError as exc:
            log.warning("error_reply_failed", **exc.log_fields())
        await message.reject(requeue=False)
        return ConsumerState.FAILED
