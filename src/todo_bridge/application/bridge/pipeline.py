"""Application bridge – RequestPipeline.

The transport-independent part of request handling: credential check,
delivery dedup, dispatch and reply building. Used by the queue consumer and
by the synchronous HTTP ``/rabbitmq/process`` endpoint.
"""
from __future__ import annotations

import dataclasses
from enum import Enum

from todo_bridge.application.bridge.credentials import CredentialPolicy
from todo_bridge.application.dispatch import ActionDispatcher
from todo_bridge.kernel.errors import BridgeError, DomainError
from todo_bridge.kernel.messaging import ProcessedRequestStore, RequestEnvelope, ResponseEnvelope
from todo_bridge.observability.logging import get_logger

__all__ = ["DUPLICATE_REQUEST_REPLY", "ConsumerState", "ProcessingResult", "RequestPipeline"]

logger = get_logger(__name__)

DUPLICATE_REQUEST_REPLY = {"message": "request already processed", "status": "duplicate"}


class ConsumerState(str, Enum):
    """Steps of the per-delivery state machine.

    ``ACKED``, ``FAILED``, ``REQUEUED`` and ``DEAD_LETTERED`` are terminal.
    """

    RECEIVED = "received"
    DECODED = "decoded"
    AUTHENTICATED = "authenticated"
    DEDUP_CHECKED = "dedup_checked"
    DISPATCHED = "dispatched"
    REPLIED = "replied"
    ACKED = "acked"
    FAILED = "failed"
    REQUEUED = "requeued"
    DEAD_LETTERED = "dead_lettered"


@dataclasses.dataclass(frozen=True)
class ProcessingResult:
    response: ResponseEnvelope
    duplicate: bool = False

    @property
    def should_record(self) -> bool:
        """Only successful first-time dispatches are remembered."""
        return self.response.ok and not self.duplicate


class RequestPipeline:
    def __init__(
        self,
        dispatcher: ActionDispatcher,
        credential_policy: CredentialPolicy,
        processed_requests: ProcessedRequestStore,
    ) -> None:
        self._dispatcher = dispatcher
        self._credentials = credential_policy
        self._processed = processed_requests

    @property
    def dispatcher(self) -> ActionDispatcher:
        return self._dispatcher

    def authenticate(self, envelope: RequestEnvelope) -> None:
        self._credentials.validate(envelope.auth)

    async def process(self, envelope: RequestEnvelope) -> ProcessingResult:
        """Authenticate, dedup and dispatch one decoded envelope.

        Raises:
            InvalidCredentialError: the credential was refused; the caller
                decides how to reject the request.
            TransportError: propagated untouched.
        """
        self.authenticate(envelope)
        logger.debug("credential_accepted", request_id=envelope.id, state=ConsumerState.AUTHENTICATED.value)

        seen = bool(envelope.id) and await self._processed.has_been_processed(envelope.id)
        logger.debug("dedup_checked", request_id=envelope.id, seen=seen, state=ConsumerState.DEDUP_CHECKED.value)
        if seen:
            logger.info("duplicate_request", request_id=envelope.id, action=envelope.action)
            return ProcessingResult(
                ResponseEnvelope.success(envelope.id, dict(DUPLICATE_REQUEST_REPLY)),
                duplicate=True,
            )

        try:
            data = await self._dispatcher.dispatch(envelope.action, envelope.data, credential=envelope.auth)
        except (BridgeError, DomainError) as exc:
            logger.warning(
                "dispatch_failed",
                request_id=envelope.id,
                action=envelope.action,
                **exc.log_fields(),
            )
            return ProcessingResult(ResponseEnvelope.failure(envelope.id, exc.message))

        logger.info(
            "request_dispatched",
            request_id=envelope.id,
            action=envelope.action,
            state=ConsumerState.DISPATCHED.value,
        )
        return ProcessingResult(ResponseEnvelope.success(envelope.id, data))

    async def complete(self, envelope: RequestEnvelope, result: ProcessingResult) -> None:
        if result.should_record and envelope.id:
            await self._processed.record(envelope.id)
