"""Application bridge – queue consumer, reply routing and the shared request pipeline."""
from todo_bridge.application.bridge.consumer import InboundMessage, ReplyPublisher, RequestConsumer
from todo_bridge.application.bridge.credentials import CredentialPolicy, MinimumLengthCredentialPolicy
from todo_bridge.application.bridge.pipeline import (
    DUPLICATE_REQUEST_REPLY,
    ConsumerState,
    ProcessingResult,
    RequestPipeline,
)
from todo_bridge.application.bridge.router import ReplyRouter

__all__ = [
    "DUPLICATE_REQUEST_REPLY",
    "ConsumerState",
    "CredentialPolicy",
    "InboundMessage",
    "MinimumLengthCredentialPolicy",
    "ProcessingResult",
    "ReplyPublisher",
    "ReplyRouter",
    "RequestConsumer",
    "RequestPipeline",
]
