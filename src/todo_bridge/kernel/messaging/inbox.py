"""Kernel messaging – delivery-level dedup port (request id → processed)."""
from __future__ import annotations

import abc


class ProcessedRequestStore(abc.ABC):
    """Tracks request ids whose reply has already been produced.

    Independent from :class:`~todo_bridge.kernel.messaging.IdempotencyCache`,
    which deduplicates resource creation by caller-supplied key.
    """

    @abc.abstractmethod
    async def record(self, request_id: str) -> None:
        """Persist *request_id* as processed."""
        ...

    @abc.abstractmethod
    async def has_been_processed(self, request_id: str) -> bool:
        """Return ``True`` if *request_id* was already recorded."""
        ...


__all__ = ["ProcessedRequestStore"]
