"""Integration tests for the request/response bridge against a real RabbitMQ.

Uses testcontainers to spawn the broker.
Run with: pytest tests/integration/test_rabbitmq_bridge.py -m integration -v
"""
from __future__ import annotations

import asyncio

import pytest
from testcontainers.rabbitmq import RabbitMqContainer

from todo_bridge.adapters.rabbitmq import BridgeClient
from todo_bridge.bootstrap import build_container
from todo_bridge.config import BridgeSettings
from todo_bridge.kernel.messaging import ResponseStatus

AUTH = "0123456789abcdef"


def _amqp_url(container: RabbitMqContainer) -> str:
    host = container.get_container_host_ip()
    port = container.get_exposed_port(5672)
    return f"amqp://guest:guest@{host}:{port}/"


@pytest.mark.integration
class TestRabbitMQBridgeIntegration:
    def test_create_user_round_trip(self) -> None:
        with RabbitMqContainer() as rabbit:
            url = _amqp_url(rabbit)

            async def run() -> None:
                container = build_container(BridgeSettings(amqp_url=url))
                await container.run_worker()
                try:
                    async with BridgeClient(url, timeout=10.0) as client:
                        reply = await client.call(
                            "create_user", {"username": "u1", "password": "p1"}, auth=AUTH, request_id="t1"
                        )
                        assert reply.correlation_id == "t1"
                        assert reply.status is ResponseStatus.OK
                        assert isinstance(reply.data["user_id"], int)

                        again = await client.call(
                            "create_user", {"username": "u1", "password": "p1"}, auth=AUTH, request_id="t1"
                        )
                        assert again.data["status"] == "duplicate"
                finally:
                    await container.aclose()

            asyncio.run(run())

    def test_rejected_credential_is_dead_lettered(self) -> None:
        with RabbitMqContainer() as rabbit:
            url = _amqp_url(rabbit)

            async def run() -> None:
                container = build_container(BridgeSettings(amqp_url=url))
                await container.run_worker()
                try:
                    async with BridgeClient(url, timeout=10.0) as client:
                        reply = await client.call("get_user", {"user_id": 1}, auth="k", request_id="bad")
                        assert reply.status is ResponseStatus.ERROR
                        assert reply.error == "invalid api key"

                    channel = await container.broker._connection.channel()
                    dlq = await channel.declare_queue("api.dlq", durable=True, passive=True)
                    for _ in range(50):
                        message = await dlq.get(fail=False)
                        if message is not None:
                            break
                        await asyncio.sleep(0.1)
                    assert message is not None
                    await message.ack()
                    await channel.close()
                finally:
                    await container.aclose()

            asyncio.run(run())
