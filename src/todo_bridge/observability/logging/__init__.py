"""Observability – structured logging helpers."""
from todo_bridge.observability.logging.factory import JsonLoggerFactory
from todo_bridge.observability.logging.processors import (
    CorrelationProcessor,
    get_logger,
    mask_credential,
)

__all__ = ["CorrelationProcessor", "JsonLoggerFactory", "get_logger", "mask_credential"]
