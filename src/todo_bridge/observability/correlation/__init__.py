"""Observability – correlation context."""
from todo_bridge.observability.correlation.context import CorrelationContext, RequestContext

__all__ = ["CorrelationContext", "RequestContext"]
