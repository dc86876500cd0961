"""Application dispatch – action tag → typed request → backend call."""
from todo_bridge.application.dispatch.dispatcher import ActionDispatcher
from todo_bridge.application.dispatch.handlers import ActionContext, ActionHandler, TodoActionHandlers
from todo_bridge.application.dispatch.requests import (
    ActionRequest,
    CreateItemRequest,
    CreateListRequest,
    CreateUserRequest,
    GetAllItemsRequest,
    GetAllListsRequest,
    GetUserRequest,
    ItemRef,
    ListRef,
    OwnedRequest,
    UpdateItemRequest,
    UpdateListRequest,
)

__all__ = [
    "ActionContext",
    "ActionDispatcher",
    "ActionHandler",
    "ActionRequest",
    "CreateItemRequest",
    "CreateListRequest",
    "CreateUserRequest",
    "GetAllItemsRequest",
    "GetAllListsRequest",
    "GetUserRequest",
    "ItemRef",
    "ListRef",
    "OwnedRequest",
    "TodoActionHandlers",
    "UpdateItemRequest",
    "UpdateListRequest",
]
