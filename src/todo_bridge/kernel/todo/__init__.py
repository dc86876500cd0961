"""Kernel todo – domain models and backend collaborator ports."""
from todo_bridge.kernel.todo.models import TodoItem, TodoList, UpdateItemInput, UpdateListInput, User
from todo_bridge.kernel.todo.ports import TodoBackend, TodoItemService, TodoListService, UserService

__all__ = [
    "TodoBackend",
    "TodoItem",
    "TodoItemService",
    "TodoList",
    "TodoListService",
    "UpdateItemInput",
    "UpdateListInput",
    "User",
    "UserService",
]
