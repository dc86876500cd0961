"""FastAPI adapter – application factory.

When the container carries a broker, the lifespan also connects it and
starts the request-queue consumers, so HTTP routes and queue handlers run
on one event loop against one backend and one idempotency cache.
"""
from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING, Any, AsyncIterator

from fastapi import FastAPI

from todo_bridge import __version__
from todo_bridge.adapters.fastapi.exception_mapper import FastAPIExceptionMapper
from todo_bridge.adapters.fastapi.middleware import FastAPICorrelationIdMiddleware
from todo_bridge.adapters.fastapi.routes import bridge_router, health_router, items_router, lists_router
from todo_bridge.observability.logging import get_logger

if TYPE_CHECKING:
    from todo_bridge.bootstrap import Container

logger = get_logger(__name__)


def create_app(container: "Container") -> FastAPI:
    """Build the HTTP app around an already-built :class:`Container`."""

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        subscriptions: list[Any] = []
        try:
            if container.broker is not None:
                subscriptions = await container.run_worker()
                logger.info(
                    "consumers_started",
                    consumers=len(subscriptions),
                    queue=container.topology.request_queue,
                )
            else:
                await container.start()
            app.state.subscriptions = subscriptions
            yield
        finally:
            await container.aclose()

    app = FastAPI(title="todo-bridge", version=__version__, lifespan=lifespan)
    app.state.container = container
    app.state.subscriptions = []
    app.add_middleware(FastAPICorrelationIdMiddleware)
    FastAPIExceptionMapper().register(app)
    for router in (health_router(), bridge_router(), lists_router(), items_router()):
        app.include_router(router)
    return app


__all__ = ["create_app"]
