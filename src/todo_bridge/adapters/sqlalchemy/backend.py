"""SQLAlchemy adapter – todo backend services.

Every method runs in its own session and transaction. Ownership is part of
every query: a list or item that belongs to someone else is reported as
missing, never as forbidden.
"""
from __future__ import annotations

import hashlib
from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError

from todo_bridge.adapters.sqlalchemy.models import TodoItemRow, TodoListRow, UserRow
from todo_bridge.adapters.sqlalchemy.session import SqlAlchemySessionFactory
from todo_bridge.application.pagination import Page, PageRequest
from todo_bridge.kernel.errors import ConflictError, NotFoundError
from todo_bridge.kernel.time import utc_now
from todo_bridge.kernel.todo import (
    TodoBackend,
    TodoItem,
    TodoList,
    UpdateItemInput,
    UpdateListInput,
    User,
)


def hash_password(password: str, salt: str = "") -> str:
    return hashlib.sha256(f"{salt}{password}".encode()).hexdigest()


class SqlAlchemyUserService:
    def __init__(self, sessions: SqlAlchemySessionFactory, password_salt: str = "") -> None:
        self._sessions = sessions
        self._salt = password_salt

    async def create_user(self, user: User) -> int:
        row = UserRow(
            name=user.name,
            username=user.username,
            password_hash=hash_password(user.password, self._salt),
        )
        try:
            async with self._sessions() as session, session.begin():
                taken = await session.scalar(select(UserRow.id).where(UserRow.username == user.username))
                if taken is not None:
                    raise ConflictError(f"username '{user.username}' is already taken")
                session.add(row)
                await session.flush()
                return row.id
        except IntegrityError as exc:
            raise ConflictError(f"username '{user.username}' is already taken", cause=exc) from exc

    async def get_user(self, user_id: int) -> User:
        async with self._sessions() as session:
            row = await session.get(UserRow, user_id)
            if row is None:
                raise NotFoundError("user", user_id)
            return row.to_domain()


async def _owned_list(session: Any, user_id: int, list_id: int) -> TodoListRow:
    row = await session.scalar(
        select(TodoListRow).where(TodoListRow.id == list_id, TodoListRow.user_id == user_id)
    )
    if row is None:
        raise NotFoundError("list", list_id)
    return row


async def _owned_item(session: Any, user_id: int, item_id: int) -> TodoItemRow:
    row = await session.scalar(
        select(TodoItemRow)
        .join(TodoListRow, TodoListRow.id == TodoItemRow.list_id)
        .where(TodoItemRow.id == item_id, TodoListRow.user_id == user_id)
    )
    if row is None:
        raise NotFoundError("item", item_id)
    return row


class SqlAlchemyTodoListService:
    def __init__(self, sessions: SqlAlchemySessionFactory) -> None:
        self._sessions = sessions

    async def create(self, user_id: int, todo_list: TodoList) -> int:
        async with self._sessions() as session, session.begin():
            if await session.get(UserRow, user_id) is None:
                raise NotFoundError("user", user_id)
            row = TodoListRow(
                user_id=user_id,
                title=todo_list.title,
                description=todo_list.description,
                color=todo_list.color,
                priority=todo_list.priority,
                archived=False,
            )
            session.add(row)
            await session.flush()
            return row.id

    async def get_all(self, user_id: int) -> list[TodoList]:
        async with self._sessions() as session:
            rows = await session.scalars(
                select(TodoListRow)
                .where(TodoListRow.user_id == user_id, TodoListRow.archived.is_(False))
                .order_by(TodoListRow.id)
            )
            return [row.to_domain() for row in rows]

    async def get_by_id(self, user_id: int, list_id: int) -> TodoList:
        async with self._sessions() as session:
            return (await _owned_list(session, user_id, list_id)).to_domain()

    async def update(self, user_id: int, list_id: int, data: UpdateListInput) -> None:
        data.validate()
        async with self._sessions() as session, session.begin():
            row = await _owned_list(session, user_id, list_id)
            for name, value in data.changes().items():
                setattr(row, name, value)
            row.updated_at = utc_now()

    async def delete(self, user_id: int, list_id: int) -> None:
        async with self._sessions() as session, session.begin():
            await _owned_list(session, user_id, list_id)
            await session.execute(delete(TodoItemRow).where(TodoItemRow.list_id == list_id))
            await session.execute(delete(TodoListRow).where(TodoListRow.id == list_id))

    async def archive(self, user_id: int, list_id: int) -> None:
        await self.update(user_id, list_id, UpdateListInput(archived=True))

    async def get_all_paginated(
        self, user_id: int, request: PageRequest, archived: bool | None = None
    ) -> Page[TodoList]:
        where = (TodoListRow.user_id == user_id, TodoListRow.archived.is_(bool(archived)))
        async with self._sessions() as session:
            total = await session.scalar(select(func.count()).select_from(TodoListRow).where(*where))
            rows = await session.scalars(
                select(TodoListRow)
                .where(*where)
                .order_by(TodoListRow.id)
                .offset(request.offset)
                .limit(request.size)
            )
            return Page(
                items=[row.to_domain() for row in rows],
                total=total or 0,
                page=request.page,
                size=request.size,
            )

    async def get_item_count(self, user_id: int, list_id: int) -> int:
        async with self._sessions() as session:
            await _owned_list(session, user_id, list_id)
            count = await session.scalar(
                select(func.count())
                .select_from(TodoItemRow)
                .where(TodoItemRow.list_id == list_id, TodoItemRow.archived.is_(False))
            )
            return count or 0


class SqlAlchemyTodoItemService:
    def __init__(self, sessions: SqlAlchemySessionFactory) -> None:
        self._sessions = sessions

    async def create(self, user_id: int, list_id: int, item: TodoItem) -> int:
        async with self._sessions() as session, session.begin():
            await _owned_list(session, user_id, list_id)
            row = TodoItemRow(
                list_id=list_id,
                title=item.title,
                description=item.description,
                done=False,
                archived=False,
            )
            session.add(row)
            await session.flush()
            return row.id

    async def get_all(self, user_id: int, list_id: int) -> list[TodoItem]:
        async with self._sessions() as session:
            await _owned_list(session, user_id, list_id)
            rows = await session.scalars(
                select(TodoItemRow)
                .where(TodoItemRow.list_id == list_id, TodoItemRow.archived.is_(False))
                .order_by(TodoItemRow.id)
            )
            return [row.to_domain() for row in rows]

    async def get_by_id(self, user_id: int, item_id: int) -> TodoItem:
        async with self._sessions() as session:
            return (await _owned_item(session, user_id, item_id)).to_domain()

    async def update(self, user_id: int, item_id: int, data: UpdateItemInput) -> None:
        data.validate()
        async with self._sessions() as session, session.begin():
            await _owned_item(session, user_id, item_id)
            await session.execute(
                update(TodoItemRow)
                .where(TodoItemRow.id == item_id)
                .values(**data.changes(), updated_at=utc_now())
            )

    async def delete(self, user_id: int, item_id: int) -> None:
        async with self._sessions() as session, session.begin():
            await _owned_item(session, user_id, item_id)
            await session.execute(delete(TodoItemRow).where(TodoItemRow.id == item_id))

    async def archive(self, user_id: int, item_id: int) -> None:
        await self.update(user_id, item_id, UpdateItemInput(archived=True))

    async def complete(self, user_id: int, item_id: int) -> None:
        await self.update(user_id, item_id, UpdateItemInput(done=True))

    async def get_all_paginated(
        self,
        user_id: int,
        list_id: int | None,
        request: PageRequest,
        done: bool | None = None,
    ) -> Page[TodoItem]:
        where = [TodoListRow.user_id == user_id, TodoItemRow.archived.is_(False)]
        if list_id is not None:
            where.append(TodoItemRow.list_id == list_id)
        if done is not None:
            where.append(TodoItemRow.done.is_(done))
        joined = select(TodoItemRow).join(TodoListRow, TodoListRow.id == TodoItemRow.list_id).where(*where)
        async with self._sessions() as session:
            if list_id is not None:
                await _owned_list(session, user_id, list_id)
            total = await session.scalar(select(func.count()).select_from(joined.subquery()))
            rows = await session.scalars(
                joined.order_by(TodoItemRow.id).offset(request.offset).limit(request.size)
            )
            return Page(
                items=[row.to_domain() for row in rows],
                total=total or 0,
                page=request.page,
                size=request.size,
            )


def SqlAlchemyTodoBackend(sessions: SqlAlchemySessionFactory, password_salt: str = "") -> TodoBackend:
    """Return a :class:`TodoBackend` whose services share *sessions*."""
    return TodoBackend(
        users=SqlAlchemyUserService(sessions, password_salt),
        lists=SqlAlchemyTodoListService(sessions),
        items=SqlAlchemyTodoItemService(sessions),
    )


__all__ = [
    "SqlAlchemyTodoBackend",
    "SqlAlchemyTodoItemService",
    "SqlAlchemyTodoListService",
    "SqlAlchemyUserService",
    "hash_password",
]
