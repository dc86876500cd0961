"""Composition root for the queue consumers and the HTTP app.

One idempotency cache, one processed-request store and one backend are
built here and handed to every consumer and route; nothing is module-global.
``todo-bridge serve`` runs both transports on a single container, so they
share that state in-process. ``todo-bridge worker`` runs the consumers alone;
separate processes only share state through ``database_url`` and the
``redis`` idempotency backend.
"""
from __future__ import annotations

import dataclasses
from typing import Any

from todo_bridge.adapters.rabbitmq import BrokerTopology, RabbitMQBroker
from todo_bridge.adapters.redis import RedisCache, RedisIdempotencyCache
from todo_bridge.adapters.sqlalchemy import SqlAlchemySessionFactory, SqlAlchemyTodoBackend
from todo_bridge.application.bridge import (
    MinimumLengthCredentialPolicy,
    ReplyPublisher,
    ReplyRouter,
    RequestConsumer,
    RequestPipeline,
)
from todo_bridge.application.dispatch import ActionDispatcher, TodoActionHandlers
from todo_bridge.application.idempotency import IdempotentCreator, InMemoryIdempotencyCache
from todo_bridge.application.inbox import InMemoryProcessedRequestStore
from todo_bridge.config import BridgeSettings
from todo_bridge.kernel.messaging import IdempotencyCache, ProcessedRequestStore
from todo_bridge.kernel.todo import TodoBackend
from todo_bridge.observability.logging import get_logger
from todo_bridge.testing.fakes import InMemoryTodoBackend

__all__ = ["Container", "build_container"]

logger = get_logger(__name__)


@dataclasses.dataclass
class Container:
    settings: BridgeSettings
    backend: TodoBackend
    idempotency_cache: IdempotencyCache
    creator: IdempotentCreator
    dispatcher: ActionDispatcher
    processed_requests: ProcessedRequestStore
    pipeline: RequestPipeline
    router: ReplyRouter
    topology: BrokerTopology
    broker: RabbitMQBroker | None = None
    sessions: SqlAlchemySessionFactory | None = None
    redis: RedisCache | None = None

    def consumer(self, publisher: ReplyPublisher | None = None) -> RequestConsumer:
        publisher = publisher or self.broker
        if publisher is None:
            raise RuntimeError("no reply publisher configured")
        return RequestConsumer(self.pipeline, publisher, self.router)

    async def start(self) -> None:
        if self.sessions is not None:
            await self.sessions.create_all()

    async def run_worker(self) -> list[Any]:
        """Connect the broker and start ``consumer_count`` consumers."""
        if self.broker is None:
            raise RuntimeError("no broker configured")
        await self.start()
        await self.broker.connect()
        consumer = self.consumer()
        return [
            await self.broker.consume(self.topology.request_queue, consumer)
            for _ in range(self.settings.consumer_count)
        ]

    async def dependencies(self) -> dict[str, str]:
        """Status of the external collaborators, for ``/health``."""
        status = {"broker": "disabled", "database": "in-memory"}
        if self.broker is not None:
            status["broker"] = "connected" if self.broker.is_connected else "disconnected"
        if self.sessions is not None:
            try:
                await self.sessions.ping()
                status["database"] = "healthy"
            except Exception as exc:  # noqa: BLE001
                logger.warning("database_ping_failed", error=str(exc))
                status["database"] = "unhealthy"
        return status

    async def aclose(self) -> None:
        if self.broker is not None:
            await self.broker.close()
        if self.redis is not None:
            await self.redis.close()
        if self.sessions is not None:
            await self.sessions.dispose()


def _idempotency_cache(settings: BridgeSettings) -> tuple[IdempotencyCache, RedisCache | None]:
    if settings.idempotency_backend == "redis":
        redis = RedisCache(settings.redis_url)
        return RedisIdempotencyCache(redis), redis
    return InMemoryIdempotencyCache(), None


def build_container(
    settings: BridgeSettings | None = None,
    *,
    backend: TodoBackend | None = None,
    with_broker: bool = True,
) -> Container:
    settings = settings or BridgeSettings()
    sessions: SqlAlchemySessionFactory | None = None
    if backend is None:
        if settings.database_url:
            sessions = SqlAlchemySessionFactory(settings.database_url)
            backend = SqlAlchemyTodoBackend(sessions)
        else:
            backend = InMemoryTodoBackend()

    cache, redis = _idempotency_cache(settings)
    creator = IdempotentCreator(backend, cache, ttl=settings.idempotency_ttl)
    dispatcher = ActionDispatcher(TodoActionHandlers(backend, creator).table())
    processed = InMemoryProcessedRequestStore(ttl=settings.processed_request_ttl)
    pipeline = RequestPipeline(
        dispatcher,
        MinimumLengthCredentialPolicy(settings.min_credential_length),
        processed,
    )
    topology = BrokerTopology.from_settings(settings)
    broker = None
    if with_broker:
        broker = RabbitMQBroker(
            settings.amqp_url,
            topology,
            prefetch_count=settings.prefetch_count,
            connect_attempts=settings.connect_attempts,
            connect_backoff_seconds=settings.connect_backoff_seconds,
            publish_timeout=settings.publish_timeout_seconds,
        )
    logger.info(
        "container_built",
        idempotency_backend=settings.idempotency_backend,
        database=sessions.dialect if sessions is not None else "in-memory",
        actions=len(dispatcher.actions),
    )
    return Container(
        settings=settings,
        backend=backend,
        idempotency_cache=cache,
        creator=creator,
        dispatcher=dispatcher,
        processed_requests=processed,
        pipeline=pipeline,
        router=ReplyRouter(settings.response_queue),
        topology=topology,
        broker=broker,
        sessions=sessions,
        redis=redis,
    )
