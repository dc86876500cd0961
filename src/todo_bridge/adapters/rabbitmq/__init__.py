"""RabbitMQ adapter (aio-pika)."""
from todo_bridge.adapters.rabbitmq.broker import RabbitMQBroker, Subscription
from todo_bridge.adapters.rabbitmq.client import BridgeClient
from todo_bridge.adapters.rabbitmq.topology import BrokerTopology

__all__ = ["BridgeClient", "BrokerTopology", "RabbitMQBroker", "Subscription"]
