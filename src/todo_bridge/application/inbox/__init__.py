"""Application inbox – delivery-level dedup by request id."""
from todo_bridge.application.inbox.store import InMemoryProcessedRequestStore

__all__ = ["InMemoryProcessedRequestStore"]
