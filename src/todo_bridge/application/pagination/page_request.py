"""Application pagination – PageRequest."""
from __future__ import annotations

import dataclasses

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclasses.dataclass(frozen=True)
class PageRequest:
    """Offset-based pagination parameters."""
    page: int = 1
    size: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.size < 1 or self.size > MAX_LIMIT:
            raise ValueError(f"size must be between 1 and {MAX_LIMIT}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size

    @classmethod
    def clamped(cls, page: int | None = None, limit: int | None = None) -> "PageRequest":
        """Lenient constructor for user input: bad page → 1, bad limit → 10."""
        page = page if page is not None and page >= 1 else 1
        limit = limit if limit is not None and 1 <= limit <= MAX_LIMIT else DEFAULT_LIMIT
        return cls(page=page, size=limit)


__all__ = ["DEFAULT_LIMIT", "MAX_LIMIT", "PageRequest"]
