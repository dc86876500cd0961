"""Adapters – concrete implementations of the kernel ports (aio-pika, redis, SQLAlchemy, FastAPI)."""
