"""Unit tests for the SQLAlchemy todo backend on in-memory SQLite (aiosqlite)."""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

import pytest
from sqlalchemy import select
from sqlalchemy.pool import StaticPool

from todo_bridge.adapters.sqlalchemy import SqlAlchemySessionFactory, SqlAlchemyTodoBackend, hash_password
from todo_bridge.adapters.sqlalchemy.models import UserRow
from todo_bridge.application.pagination import PageRequest
from todo_bridge.kernel.errors import ConflictError, NotFoundError, ValidationError
from todo_bridge.kernel.todo import TodoBackend, TodoItem, TodoList, UpdateItemInput, UpdateListInput, User


def _run(scenario: Callable[[TodoBackend, SqlAlchemySessionFactory], Awaitable[Any]]) -> Any:
    async def run() -> Any:
        sessions = SqlAlchemySessionFactory("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
        await sessions.create_all()
        try:
            return await scenario(SqlAlchemyTodoBackend(sessions, password_salt="pepper"), sessions)
        finally:
            await sessions.dispose()

    return asyncio.run(run())


async def _user(backend: TodoBackend, username: str = "u1") -> int:
    return await backend.users.create_user(User(username=username, password="p1"))


class TestSqlAlchemyUsers:
    def test_create_and_get(self) -> None:
        async def scenario(backend: TodoBackend, _: Any) -> User:
            uid = await _user(backend)
            return await backend.users.get_user(uid)

        user = _run(scenario)
        assert user.username == "u1"
        assert user.id >= 1

    def test_session_factory_reports_dialect(self) -> None:
        async def scenario(_: TodoBackend, sessions: SqlAlchemySessionFactory) -> tuple[str, bool]:
            return sessions.dialect, await sessions.ping()

        assert _run(scenario) == ("sqlite", True)

    def test_password_is_hashed_with_salt(self) -> None:
        async def scenario(backend: TodoBackend, sessions: SqlAlchemySessionFactory) -> str:
            await _user(backend)
            async with sessions() as session:
                return await session.scalar(select(UserRow.password_hash))

        stored = _run(scenario)
        assert stored == hash_password("p1", "pepper")
        assert stored != "p1"

    def test_duplicate_username_conflicts(self) -> None:
        async def scenario(backend: TodoBackend, _: Any) -> None:
            await _user(backend)
            await _user(backend)

        with pytest.raises(ConflictError):
            _run(scenario)

    def test_missing_user(self) -> None:
        async def scenario(backend: TodoBackend, _: Any) -> None:
            await backend.users.get_user(99)

        with pytest.raises(NotFoundError):
            _run(scenario)

    def test_ping(self) -> None:
        async def scenario(_: TodoBackend, sessions: SqlAlchemySessionFactory) -> bool:
            return await sessions.ping()

        assert _run(scenario) is True


class TestSqlAlchemyLists:
    def test_create_requires_existing_user(self) -> None:
        async def scenario(backend: TodoBackend, _: Any) -> None:
            await backend.lists.create(42, TodoList(title="a"))

        with pytest.raises(NotFoundError):
            _run(scenario)

    def test_get_all_hides_archived(self) -> None:
        async def scenario(backend: TodoBackend, _: Any) -> tuple[list[TodoList], int]:
            uid = await _user(backend)
            first = await backend.lists.create(uid, TodoList(title="a"))
            await backend.lists.create(uid, TodoList(title="b"))
            await backend.lists.archive(uid, first)
            visible = await backend.lists.get_all(uid)
            archived = await backend.lists.get_all_paginated(uid, PageRequest.clamped(), archived=True)
            return visible, archived.total

        visible, archived_total = _run(scenario)
        assert [tl.title for tl in visible] == ["b"]
        assert archived_total == 1

    def test_foreign_list_is_not_found(self) -> None:
        async def scenario(backend: TodoBackend, _: Any) -> None:
            owner = await _user(backend, "owner")
            other = await _user(backend, "other")
            list_id = await backend.lists.create(owner, TodoList(title="a"))
            await backend.lists.get_by_id(other, list_id)

        with pytest.raises(NotFoundError):
            _run(scenario)

    def test_update_changes_only_given_fields(self) -> None:
        async def scenario(backend: TodoBackend, _: Any) -> TodoList:
            uid = await _user(backend)
            list_id = await backend.lists.create(uid, TodoList(title="a", description="keep"))
            await backend.lists.update(uid, list_id, UpdateListInput(title="renamed", priority=3))
            return await backend.lists.get_by_id(uid, list_id)

        updated = _run(scenario)
        assert updated.title == "renamed"
        assert updated.description == "keep"
        assert updated.priority == 3

    def test_empty_update_rejected(self) -> None:
        async def scenario(backend: TodoBackend, _: Any) -> None:
            uid = await _user(backend)
            list_id = await backend.lists.create(uid, TodoList(title="a"))
            await backend.lists.update(uid, list_id, UpdateListInput())

        with pytest.raises(ValidationError):
            _run(scenario)

    def test_delete_removes_list_and_items(self) -> None:
        async def scenario(backend: TodoBackend, _: Any) -> int:
            uid = await _user(backend)
            list_id = await backend.lists.create(uid, TodoList(title="a"))
            item_id = await backend.items.create(uid, list_id, TodoItem(title="x"))
            await backend.lists.delete(uid, list_id)
            with pytest.raises(NotFoundError):
                await backend.lists.get_by_id(uid, list_id)
            with pytest.raises(NotFoundError):
                await backend.items.get_by_id(uid, item_id)
            return len(await backend.lists.get_all(uid))

        assert _run(scenario) == 0

    def test_paginated(self) -> None:
        async def scenario(backend: TodoBackend, _: Any) -> Any:
            uid = await _user(backend)
            for title in ("a", "b", "c"):
                await backend.lists.create(uid, TodoList(title=title))
            return await backend.lists.get_all_paginated(uid, PageRequest.clamped(2, 2))

        page = _run(scenario)
        assert [tl.title for tl in page.items] == ["c"]
        assert page.total == 3

    def test_item_count_ignores_archived(self) -> None:
        async def scenario(backend: TodoBackend, _: Any) -> int:
            uid = await _user(backend)
            list_id = await backend.lists.create(uid, TodoList(title="a"))
            await backend.items.create(uid, list_id, TodoItem(title="x"))
            archived = await backend.items.create(uid, list_id, TodoItem(title="y"))
            await backend.items.archive(uid, archived)
            return await backend.lists.get_item_count(uid, list_id)

        assert _run(scenario) == 1


class TestSqlAlchemyItems:
    def test_create_in_foreign_list_is_not_found(self) -> None:
        async def scenario(backend: TodoBackend, _: Any) -> None:
            owner = await _user(backend, "owner")
            other = await _user(backend, "other")
            list_id = await backend.lists.create(owner, TodoList(title="a"))
            await backend.items.create(other, list_id, TodoItem(title="x"))

        with pytest.raises(NotFoundError):
            _run(scenario)

    def test_complete_and_filter_done(self) -> None:
        async def scenario(backend: TodoBackend, _: Any) -> tuple[TodoItem, int, int]:
            uid = await _user(backend)
            list_id = await backend.lists.create(uid, TodoList(title="a"))
            first = await backend.items.create(uid, list_id, TodoItem(title="x"))
            await backend.items.create(uid, list_id, TodoItem(title="y"))
            await backend.items.complete(uid, first)
            done = await backend.items.get_all_paginated(uid, list_id, PageRequest.clamped(), done=True)
            everything = await backend.items.get_all_paginated(uid, None, PageRequest.clamped())
            return await backend.items.get_by_id(uid, first), done.total, everything.total

        item, done_total, total = _run(scenario)
        assert item.done is True
        assert done_total == 1
        assert total == 2

    def test_update_item(self) -> None:
        async def scenario(backend: TodoBackend, _: Any) -> TodoItem:
            uid = await _user(backend)
            list_id = await backend.lists.create(uid, TodoList(title="a"))
            item_id = await backend.items.create(uid, list_id, TodoItem(title="x"))
            await backend.items.update(uid, item_id, UpdateItemInput(description="more"))
            return await backend.items.get_by_id(uid, item_id)

        item = _run(scenario)
        assert item.title == "x"
        assert item.description == "more"

    def test_archived_items_hidden(self) -> None:
        async def scenario(backend: TodoBackend, _: Any) -> list[TodoItem]:
            uid = await _user(backend)
            list_id = await backend.lists.create(uid, TodoList(title="a"))
            item_id = await backend.items.create(uid, list_id, TodoItem(title="x"))
            await backend.items.archive(uid, item_id)
            return await backend.items.get_all(uid, list_id)

        assert _run(scenario) == []

    def test_delete_item(self) -> None:
        async def scenario(backend: TodoBackend, _: Any) -> None:
            uid = await _user(backend)
            list_id = await backend.lists.create(uid, TodoList(title="a"))
            item_id = await backend.items.create(uid, list_id, TodoItem(title="x"))
            await backend.items.delete(uid, item_id)
            await backend.items.get_by_id(uid, item_id)

        with pytest.raises(NotFoundError):
            _run(scenario)
