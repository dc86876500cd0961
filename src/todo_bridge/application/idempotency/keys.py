"""Application idempotency – dedup key derivation."""
from __future__ import annotations

import hashlib

__all__ = ["derive_idempotency_key"]


def derive_idempotency_key(credential: str, caller_key: str) -> str:
    """Hex SHA-256 of ``credential + caller_key``.

    Binding the caller's key to its credential keeps two callers that pick
    the same key from colliding before the owner check even runs.
    """
    return hashlib.sha256(f"{credential}{caller_key}".encode()).hexdigest()
