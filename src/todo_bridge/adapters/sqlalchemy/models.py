"""SQLAlchemy adapter – ORM tables for users, lists and items."""
from __future__ import annotations

import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from todo_bridge.kernel.time import utc_now
from todo_bridge.kernel.todo import TodoItem, TodoList, User


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    """``created_at`` / ``updated_at`` set on the Python side in UTC."""

    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )


class UserRow(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)

    def to_domain(self) -> User:
        return User(username=self.username, password=self.password_hash, name=self.name, id=self.id)


class TodoListRow(TimestampMixin, Base):
    __tablename__ = "todo_lists"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    archived: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    color: Mapped[str] = mapped_column(String(32), default="", nullable=False)
    priority: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    def to_domain(self) -> TodoList:
        return TodoList(
            id=self.id,
            title=self.title,
            description=self.description,
            archived=self.archived,
            color=self.color,
            priority=self.priority,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class TodoItemRow(TimestampMixin, Base):
    __tablename__ = "todo_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    list_id: Mapped[int] = mapped_column(ForeignKey("todo_lists.id", ondelete="CASCADE"), index=True, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    done: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    archived: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def to_domain(self) -> TodoItem:
        return TodoItem(
            id=self.id,
            list_id=self.list_id,
            title=self.title,
            description=self.description,
            done=self.done,
            archived=self.archived,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


__all__ = ["Base", "TimestampMixin", "TodoItemRow", "TodoListRow", "UserRow"]
