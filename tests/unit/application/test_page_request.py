"""Unit tests for PageRequest / Page."""

from __future__ import annotations

import pytest

from todo_bridge.application.pagination import DEFAULT_LIMIT, MAX_LIMIT, Page, PageRequest


class TestPageRequest:
    def test_defaults(self) -> None:
        req = PageRequest()
        assert req.page == 1
        assert req.size == DEFAULT_LIMIT
        assert req.offset == 0

    def test_offset(self) -> None:
        assert PageRequest(page=3, size=20).offset == 40

    def test_invalid_page(self) -> None:
        with pytest.raises(ValueError):
            PageRequest(page=0)

    def test_invalid_size(self) -> None:
        with pytest.raises(ValueError):
            PageRequest(size=MAX_LIMIT + 1)

    @pytest.mark.parametrize(
        "page,limit,expected",
        [
            (None, None, (1, 10)),
            (0, 5, (1, 5)),
            (-3, 100, (1, 100)),
            (2, 0, (2, 10)),
            (2, 101, (2, 10)),
            (4, 25, (4, 25)),
        ],
    )
    def test_clamped(self, page: int | None, limit: int | None, expected: tuple[int, int]) -> None:
        req = PageRequest.clamped(page, limit)
        assert (req.page, req.size) == expected


class TestPage:
    def test_of_slices(self) -> None:
        page = Page.of(list(range(25)), PageRequest(page=3, size=10))
        assert page.items == [20, 21, 22, 23, 24]
        assert page.total == 25
        assert page.total_pages == 3
        assert not page.has_next

    def test_meta(self) -> None:
        page = Page.of(list(range(11)), PageRequest(page=1, size=10))
        assert page.meta() == {"page": 1, "limit": 10, "total": 11, "pages": 2}

    def test_empty(self) -> None:
        page = Page.of([], PageRequest())
        assert page.total_pages == 0
        assert page.meta()["pages"] == 0

    def test_map(self) -> None:
        page = Page.of([1, 2], PageRequest()).map(lambda x: x * 10)
        assert page.items == [10, 20]
        assert page.total == 2
