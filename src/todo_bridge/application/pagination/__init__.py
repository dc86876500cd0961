"""Application pagination – page primitives."""
from todo_bridge.application.pagination.page_request import DEFAULT_LIMIT, MAX_LIMIT, PageRequest
from todo_bridge.application.pagination.page import Page

__all__ = ["DEFAULT_LIMIT", "MAX_LIMIT", "Page", "PageRequest"]
