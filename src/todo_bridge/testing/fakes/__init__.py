"""Testing fakes."""
from todo_bridge.testing.fakes.backend import (
    InMemoryTodoBackend,
    InMemoryTodoItemService,
    InMemoryTodoListService,
    InMemoryUserService,
)
from todo_bridge.testing.fakes.messaging import FakeIncomingMessage, InMemoryReplyPublisher, PublishedReply

__all__ = [
    "FakeIncomingMessage",
    "InMemoryReplyPublisher",
    "InMemoryTodoBackend",
    "InMemoryTodoItemService",
    "InMemoryTodoListService",
    "InMemoryUserService",
    "PublishedReply",
]
