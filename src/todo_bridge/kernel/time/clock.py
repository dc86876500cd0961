"""Kernel time – Clock protocol + implementations."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Port: abstract clock for deterministic expiry tests."""

    def now(self) -> datetime: ...


class SystemClock:
    """Production clock that delegates to ``datetime.now(UTC)``."""

    def now(self) -> datetime:
        return datetime.now(UTC)


FROZEN_AT = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


class FrozenClock:
    """Clock that only moves when told to; starts at :data:`FROZEN_AT` by default.

    Expiry tests for the idempotency cache, the processed-request store and
    the in-memory backend run against it.
    """

    def __init__(self, fixed: datetime = FROZEN_AT) -> None:
        if fixed.tzinfo is None:
            raise ValueError("FrozenClock needs an aware datetime")
        self._fixed = fixed

    def now(self) -> datetime:
        return self._fixed

    def advance(self, **kwargs: int | float) -> datetime:
        """Move forward by ``timedelta(**kwargs)`` and return the new time."""
        self._fixed += timedelta(**kwargs)
        return self._fixed


def utc_now() -> datetime:
    """Shorthand for ``datetime.now(UTC)``."""
    return datetime.now(UTC)


__all__ = ["FROZEN_AT", "Clock", "FrozenClock", "SystemClock", "utc_now"]
