"""페이지네이션 유틸리티 테스트.

Pagination utility tests — sort parsing, page request validation,
page metadata, and count short-circuit rules.
"""

import pytest

from app.config import settings
from app.utils.exceptions import BadRequestError
from app.utils.pagination import Page, PageRequest, SortOrder, resolve_total


class CountSupplier:
    """호출 횟수를 기록하는 COUNT 대역 — Count stand-in recording its calls."""

    def __init__(self, total: int) -> None:
        self.total = total
        self.calls = 0

    async def __call__(self) -> int:
        self.calls += 1
        return self.total


class TestSortOrder:
    """정렬 파라미터 파싱 테스트."""

    def test_parse_property_only(self):
        assert SortOrder.parse("username") == SortOrder(property="username", direction="asc")

    def test_parse_direction_case_insensitive(self):
        assert SortOrder.parse("age,DESC").direction == "desc"

    def test_parse_strips_spaces(self):
        assert SortOrder.parse(" age , desc ") == SortOrder(property="age", direction="desc")

    @pytest.mark.parametrize("raw", ["", ",desc", "age,down", "age,asc,extra"])
    def test_parse_invalid(self, raw):
        with pytest.raises(BadRequestError):
            SortOrder.parse(raw)


class TestPageRequest:
    """페이지 요청 검증 테스트."""

    def test_defaults(self):
        page_request = PageRequest.of()
        assert page_request.page == 0
        assert page_request.size == settings.DEFAULT_PAGE_SIZE
        assert page_request.sort == ()

    def test_offset(self):
        assert PageRequest.of(page=3, size=10).offset == 30

    def test_sort_strings_parsed_in_order(self):
        page_request = PageRequest.of(sort=["teamName,desc", "age"])
        assert [s.property for s in page_request.sort] == ["teamName", "age"]
        assert page_request.sort[0].direction == "desc"

    def test_negative_page_rejected(self):
        with pytest.raises(BadRequestError):
            PageRequest.of(page=-1, size=10)

    def test_zero_size_rejected(self):
        with pytest.raises(BadRequestError):
            PageRequest.of(page=0, size=0)

    def test_size_above_max_rejected(self):
        with pytest.raises(BadRequestError):
            PageRequest.of(size=settings.MAX_PAGE_SIZE + 1)


class TestPage:
    """페이지 메타데이터 테스트."""

    def test_metadata(self):
        page = Page[int].of([1, 2], PageRequest.of(page=1, size=2), total=5)
        assert page.total_pages == 3
        assert page.number_of_elements == 2
        assert page.first is False
        assert page.last is False

    def test_last_page(self):
        page = Page[int].of([5], PageRequest.of(page=2, size=2), total=5)
        assert page.last is True

    def test_empty_page(self):
        page = Page[int].of([], PageRequest.of(page=0, size=10), total=0)
        assert page.total_pages == 0
        assert page.first is True
        assert page.last is True

    def test_serialized_with_camel_case(self):
        page = Page[int].of([1], PageRequest.of(page=0, size=10), total=1)
        data = page.model_dump(by_alias=True)
        assert data["content"] == [1]
        assert data["totalElements"] == 1
        assert data["pageNumber"] == 0
        assert data["pageSize"] == 10
        assert data["totalPages"] == 1


class TestResolveTotal:
    """COUNT 생략 규칙 테스트."""

    async def test_first_page_short_content_skips_count(self):
        supplier = CountSupplier(99)
        total, counted = await resolve_total(3, PageRequest.of(page=0, size=10), supplier)
        assert (total, counted) == (3, False)
        assert supplier.calls == 0

    async def test_first_page_full_content_counts(self):
        supplier = CountSupplier(25)
        total, counted = await resolve_total(10, PageRequest.of(page=0, size=10), supplier)
        assert (total, counted) == (25, True)
        assert supplier.calls == 1

    async def test_last_page_short_content_skips_count(self):
        supplier = CountSupplier(99)
        total, counted = await resolve_total(4, PageRequest.of(page=2, size=10), supplier)
        assert (total, counted) == (24, False)
        assert supplier.calls == 0

    async def test_later_full_page_counts(self):
        supplier = CountSupplier(30)
        total, counted = await resolve_total(10, PageRequest.of(page=2, size=10), supplier)
        assert (total, counted) == (30, True)

    async def test_empty_page_past_end_counts(self):
        """빈 이후 페이지는 전체 개수를 증명하지 못함."""
        supplier = CountSupplier(4)
        total, counted = await resolve_total(0, PageRequest.of(page=5, size=2), supplier)
        assert (total, counted) == (4, True)

    async def test_empty_first_page_skips_count(self):
        supplier = CountSupplier(99)
        total, counted = await resolve_total(0, PageRequest.of(page=0, size=10), supplier)
        assert (total, counted) == (0, False)
