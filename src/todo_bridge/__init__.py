"""
todo_bridge – todo-list service with a RabbitMQ request/response bridge.

Import path convention::

    from todo_bridge.kernel.errors import NotFoundError
    from todo_bridge.kernel.messaging import RequestEnvelope, ResponseEnvelope
    from todo_bridge.application.dispatch import ActionDispatcher
    from todo_bridge.adapters.rabbitmq import RabbitMQBroker
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
