"""Observability – structlog processors and logging helpers.

``CorrelationProcessor`` injects correlation_id/action/user_id into log events.
``get_logger(name)`` returns a bound structlog logger.
"""
from __future__ import annotations

from typing import Any

import structlog

from todo_bridge.observability.correlation import CorrelationContext

_VISIBLE_PREFIX = 4


class CorrelationProcessor:
    """structlog processor that injects context from :class:`CorrelationContext`.

    Fields already present on the event win over the ambient context.
    """

    def __call__(
        self,
        logger: Any,           # noqa: ARG002
        method_name: str,      # noqa: ARG002
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        ctx = CorrelationContext.get()
        if ctx is not None:
            event_dict.setdefault("correlation_id", ctx.correlation_id)
            if ctx.action is not None:
                event_dict.setdefault("action", ctx.action)
            if ctx.user_id is not None:
                event_dict.setdefault("user_id", ctx.user_id)
        return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


def mask_credential(value: str | None) -> str:
    """Keep the first few characters of a credential, mask the rest."""
    if not value:
        return ""
    if len(value) <= _VISIBLE_PREFIX:
        return "*" * len(value)
    return value[:_VISIBLE_PREFIX] + "*" * (len(value) - _VISIBLE_PREFIX)


__all__ = ["CorrelationProcessor", "get_logger", "mask_credential"]
