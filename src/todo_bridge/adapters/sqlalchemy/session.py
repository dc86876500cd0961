"""SQLAlchemy adapter – SqlAlchemySessionFactory."""
from __future__ import annotations

from typing import Any


def _require_sqlalchemy() -> None:
    try:
        import sqlalchemy  # noqa: F401
    except ImportError as exc:
        raise ImportError("Install 'sqlalchemy[asyncio]' to use the SQLAlchemy adapter") from exc


class SqlAlchemySessionFactory:
    """Owns the async engine of the todo schema and hands out sessions.

    Calling the factory returns a new ``AsyncSession``; ``create_all`` and
    ``ping`` serve container startup and ``/health``.
    """

    def __init__(self, database_url: str, **engine_kwargs: Any) -> None:
        _require_sqlalchemy()
        from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # type: ignore[import-untyped]
        self._engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(self._engine, class_=AsyncSession, expire_on_commit=False)

    @property
    def dialect(self) -> str:
        return self._engine.dialect.name

    def __call__(self) -> Any:
        return self._session_factory()

    async def create_all(self) -> None:
        """Create the todo tables when they do not exist yet."""
        from todo_bridge.adapters.sqlalchemy.models import Base

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        from sqlalchemy import text  # type: ignore[import-untyped]

        async with self._engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def dispose(self) -> None:
        await self._engine.dispose()


__all__ = ["SqlAlchemySessionFactory"]
