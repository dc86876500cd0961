"""FastAPI adapter – HTTP surface of the todo service."""
from todo_bridge.adapters.fastapi.app import create_app
from todo_bridge.adapters.fastapi.exception_mapper import FastAPIExceptionMapper
from todo_bridge.adapters.fastapi.middleware import FastAPICorrelationIdMiddleware

__all__ = ["FastAPICorrelationIdMiddleware", "FastAPIExceptionMapper", "create_app"]
