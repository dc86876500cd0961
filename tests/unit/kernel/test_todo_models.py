"""Unit tests for the todo domain models."""

from __future__ import annotations

import pytest

from todo_bridge.kernel.errors import ValidationError
from todo_bridge.kernel.todo import TodoItem, TodoList, UpdateItemInput, UpdateListInput, User


class TestUser:
    def test_password_not_in_repr(self) -> None:
        assert "secret" not in repr(User(username="u1", password="secret"))

    def test_to_dict(self) -> None:
        assert User(username="u1", password="p", name="U", id=4).to_dict() == {
            "user_id": 4, "username": "u1", "name": "U",
        }


class TestTodoList:
    def test_defaults(self) -> None:
        tl = TodoList(title="groceries")
        assert tl.archived is False
        assert tl.priority == 0
        assert tl.created_at.tzinfo is not None

    def test_to_dict_keys(self) -> None:
        d = TodoList(title="t", id=2).to_dict()
        assert set(d) == {
            "id", "title", "description", "archived", "color", "priority", "created_at", "updated_at",
        }
        assert d["id"] == 2


class TestTodoItem:
    def test_to_dict_has_list_id(self) -> None:
        d = TodoItem(title="milk", list_id=3, id=9).to_dict()
        assert d["list_id"] == 3
        assert d["done"] is False


class TestUpdateInputs:
    def test_empty_list_update_is_invalid(self) -> None:
        with pytest.raises(ValidationError, match="update structure has no values"):
            UpdateListInput().validate()

    def test_empty_item_update_is_invalid(self) -> None:
        with pytest.raises(ValidationError):
            UpdateItemInput().validate()

    def test_changes_skip_none(self) -> None:
        data = UpdateListInput(title="new", archived=False)
        data.validate()
        assert data.changes() == {"title": "new", "archived": False}

    def test_item_changes(self) -> None:
        assert UpdateItemInput(done=True).changes() == {"done": True}
