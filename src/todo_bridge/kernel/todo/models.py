"""Kernel todo – users, lists, items and their partial-update inputs."""
from __future__ import annotations

import dataclasses
from datetime import UTC, datetime
from typing import Any

from todo_bridge.kernel.errors import ValidationError


def _now() -> datetime:
    return datetime.now(UTC)


@dataclasses.dataclass
class User:
    username: str
    password: str = dataclasses.field(repr=False)
    name: str = ""
    id: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"user_id": self.id, "username": self.username, "name": self.name}


@dataclasses.dataclass
class TodoList:
    title: str
    description: str = ""
    archived: bool = False
    color: str = ""
    priority: int = 0
    id: int = 0
    created_at: datetime = dataclasses.field(default_factory=_now)
    updated_at: datetime = dataclasses.field(default_factory=_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "archived": self.archived,
            "color": self.color,
            "priority": self.priority,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


@dataclasses.dataclass
class TodoItem:
    title: str
    description: str = ""
    done: bool = False
    archived: bool = False
    list_id: int = 0
    id: int = 0
    created_at: datetime = dataclasses.field(default_factory=_now)
    updated_at: datetime = dataclasses.field(default_factory=_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "list_id": self.list_id,
            "title": self.title,
            "description": self.description,
            "done": self.done,
            "archived": self.archived,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


@dataclasses.dataclass(frozen=True)
class UpdateListInput:
    """Partial update of a list; ``None`` means "leave unchanged"."""

    title: str | None = None
    description: str | None = None
    archived: bool | None = None
    color: str | None = None
    priority: int | None = None

    def validate(self) -> None:
        if all(getattr(self, f.name) is None for f in dataclasses.fields(self)):
            raise ValidationError("update structure has no values")

    def changes(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in dataclasses.fields(self)
            if getattr(self, f.name) is not None
        }


@dataclasses.dataclass(frozen=True)
class UpdateItemInput:
    """Partial update of an item; ``None`` means "leave unchanged"."""

    title: str | None = None
    description: str | None = None
    done: bool | None = None
    archived: bool | None = None

    def validate(self) -> None:
        if all(getattr(self, f.name) is None for f in dataclasses.fields(self)):
            raise ValidationError("update structure has no values")

    def changes(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in dataclasses.fields(self)
            if getattr(self, f.name) is not None
        }


__all__ = ["TodoItem", "TodoList", "UpdateItemInput", "UpdateListInput", "User"]
