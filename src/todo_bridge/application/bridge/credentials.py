"""Application bridge – credential policies for the opaque ``auth`` field."""
from __future__ import annotations

from typing import Protocol

from todo_bridge.kernel.errors import InvalidCredentialError

__all__ = ["CredentialPolicy", "MinimumLengthCredentialPolicy"]


class CredentialPolicy(Protocol):
    def validate(self, credential: str) -> None:
        """Raise :class:`InvalidCredentialError` when *credential* is refused."""
        ...


class MinimumLengthCredentialPolicy:
    """Accept any non-empty credential of at least ``min_length`` characters."""

    def __init__(self, min_length: int = 16) -> None:
        if min_length < 1:
            raise ValueError("min_length must be >= 1")
        self._min_length = min_length

    @property
    def min_length(self) -> int:
        return self._min_length

    def validate(self, credential: str) -> None:
        if not credential or len(credential) < self._min_length:
            raise InvalidCredentialError()
