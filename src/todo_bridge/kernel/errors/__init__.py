"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   ├── ValidationError
    │   ├── NotFoundError
    │   └── ConflictError
    ├── ApplicationError         (application.py)
    │   ├── BridgeError
    │   │   ├── MalformedPayloadError
    │   │   ├── InvalidCredentialError
    │   │   ├── InvalidActionError
    │   │   └── BackendError
    │   └── ReplyTimeoutError
    └── InfrastructureError      (infrastructure.py)
        ├── TransportError
        │   └── TopologyError
        └── SerializationError
"""

from todo_bridge.kernel.errors.application import (
    ApplicationError,
    BackendError,
    BridgeError,
    InvalidActionError,
    InvalidCredentialError,
    MalformedPayloadError,
    ReplyTimeoutError,
)
from todo_bridge.kernel.errors.base import BaseError
from todo_bridge.kernel.errors.domain import (
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from todo_bridge.kernel.errors.infrastructure import (
    InfrastructureError,
    SerializationError,
    TopologyError,
    TransportError,
)

__all__ = [
    "ApplicationError",
    "BackendError",
    "BaseError",
    "BridgeError",
    "ConflictError",
    "DomainError",
    "InfrastructureError",
    "InvalidActionError",
    "InvalidCredentialError",
    "MalformedPayloadError",
    "NotFoundError",
    "ReplyTimeoutError",
    "SerializationError",
    "TopologyError",
    "TransportError",
    "ValidationError",
]
