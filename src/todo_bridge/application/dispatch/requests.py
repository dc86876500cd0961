"""Application dispatch – typed payloads of the recognised actions."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from todo_bridge.kernel.todo import UpdateItemInput, UpdateListInput


class ActionRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")


class OwnedRequest(ActionRequest):
    """Payload scoped to the user named inside it (not the transport)."""

    user_id: int = 0


class CreateUserRequest(ActionRequest):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    name: str = ""


class GetUserRequest(OwnedRequest):
    pass


class CreateListRequest(OwnedRequest):
    title: str = Field(min_length=1)
    description: str = ""
    color: str = ""
    priority: int = 0
    idempotency_key: str | None = None


class CreateItemRequest(OwnedRequest):
    list_id: int = Field(ge=1)
    title: str = Field(min_length=1)
    description: str = ""
    idempotency_key: str | None = None


class ListRef(OwnedRequest):
    list_id: int = Field(ge=1)


class ItemRef(OwnedRequest):
    item_id: int = Field(ge=1)


class GetAllListsRequest(OwnedRequest):
    page: int | None = None
    limit: int | None = None
    archived: bool | None = None

    @property
    def paginated(self) -> bool:
        return self.page is not None or self.limit is not None or self.archived is not None


class GetAllItemsRequest(OwnedRequest):
    list_id: int = Field(ge=1)
    page: int | None = None
    limit: int | None = None
    done: bool | None = None

    @property
    def paginated(self) -> bool:
        return self.page is not None or self.limit is not None or self.done is not None


class UpdateListRequest(ListRef):
    title: str | None = None
    description: str | None = None
    archived: bool | None = None
    color: str | None = None
    priority: int | None = None

    def to_input(self) -> UpdateListInput:
        return UpdateListInput(
            title=self.title,
            description=self.description,
            archived=self.archived,
            color=self.color,
            priority=self.priority,
        )


class UpdateItemRequest(ItemRef):
    title: str | None = None
    description: str | None = None
    done: bool | None = None

    def to_input(self) -> UpdateItemInput:
        return UpdateItemInput(title=self.title, description=self.description, done=self.done)


__all__ = [
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
    "UpdateItemRequest",
    "UpdateListRequest",
]
