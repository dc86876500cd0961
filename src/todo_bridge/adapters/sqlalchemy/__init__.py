"""SQLAlchemy adapter (async engine, Postgres or SQLite)."""
from todo_bridge.adapters.sqlalchemy.backend import (
    SqlAlchemyTodoBackend,
    SqlAlchemyTodoItemService,
    SqlAlchemyTodoListService,
    SqlAlchemyUserService,
    hash_password,
)
from todo_bridge.adapters.sqlalchemy.session import SqlAlchemySessionFactory

__all__ = [
    "SqlAlchemySessionFactory",
    "SqlAlchemyTodoBackend",
    "SqlAlchemyTodoItemService",
    "SqlAlchemyTodoListService",
    "SqlAlchemyUserService",
    "hash_password",
]
