"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides the page request / page response models and the three ways a page
total can be obtained:

    - fetch_results: 콘텐츠 쿼리 + 같은 쿼리에서 파생한 COUNT (content, then a
      count derived from the same query; always two statements)
    - count_total: 별도로 작성한 최소 COUNT 쿼리 실행 (run a hand-built count query)
    - resolve_total: 콘텐츠 크기로 전체 개수를 증명할 수 있으면 COUNT 생략
      (skip the count when the content size alone proves the total)

Page numbers are 0-based.
"""

from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any, Generic, Literal, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, computed_field
from pydantic.alias_generators import to_camel
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.utils.exceptions import BadRequestError

T = TypeVar("T")


class PagingStrategy(str, Enum):
    """페이지 전체 개수를 구하는 방식 — How a page total is obtained.

    - simple: 콘텐츠 + 같은 쿼리의 COUNT를 항상 함께 실행 (fetch_results)
    - complex: 콘텐츠 + 별도 최소 COUNT 쿼리를 항상 실행
    - optimized: 콘텐츠 먼저, 증명 불가할 때만 최소 COUNT 실행 (resolve_total)
    """

    SIMPLE = "simple"
    COMPLEX = "complex"
    OPTIMIZED = "optimized"


class SortOrder(BaseModel):
    """정렬 기준 하나 — 속성명과 방향.

    A single sort key: a property name and a direction.
    Parsed from ``sort=property[,direction]`` query parameters.
    """

    model_config = ConfigDict(frozen=True)

    property: str
    direction: Literal["asc", "desc"] = "asc"

    @classmethod
    def parse(cls, raw: str) -> "SortOrder":
        """``username,desc`` 형식의 문자열을 파싱합니다.

        Parse a ``property[,direction]`` string. Direction is case-insensitive
        and defaults to ascending.

        Raises:
            BadRequestError: 속성명이 비었거나 방향이 잘못된 경우
                             (Empty property or unknown direction)
        """
        parts: list[str] = [p.strip() for p in raw.split(",")]
        prop: str = parts[0]
        direction: str = parts[1].lower() if len(parts) > 1 and parts[1] else "asc"
        if not prop or len(parts) > 2 or direction not in ("asc", "desc"):
            raise BadRequestError(f"Invalid sort parameter: {raw}")
        return cls(property=prop, direction=direction)


class PageRequest(BaseModel):
    """페이지 요청 — 페이지 번호, 크기, 정렬.

    Normalized page request. ``page`` is 0-based; ``offset = page * size``.

    Attributes:
        page: 페이지 번호, 0부터 시작 (Page index, 0-based)
        size: 페이지 크기 (Page size)
        sort: 정렬 기준 목록 (Sort keys, applied in order)
    """

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=0, ge=0)
    size: int = Field(default=20, ge=1)
    sort: tuple[SortOrder, ...] = ()

    @property
    def offset(self) -> int:
        """조회 시작 위치 — Row offset of the first element of this page."""
        return self.page * self.size

    @classmethod
    def of(
        cls,
        page: int = 0,
        size: int | None = None,
        sort: Sequence[str] | None = None,
    ) -> "PageRequest":
        """쿼리 파라미터로부터 페이지 요청을 생성하고 검증합니다.

        Build and validate a page request from raw query parameters.

        Args:
            page: 페이지 번호, 0부터 시작 (Page index, 0-based)
            size: 페이지 크기, None이면 기본값 (Page size, None = DEFAULT_PAGE_SIZE)
            sort: ``property[,direction]`` 문자열 목록 (Sort strings)

        Returns:
            PageRequest: 검증된 페이지 요청 (Validated page request)

        Raises:
            BadRequestError: 음수 페이지, 범위를 벗어난 크기, 잘못된 정렬
                             (Negative page, out-of-range size, bad sort)
        """
        if size is None:
            size = settings.DEFAULT_PAGE_SIZE
        if size > settings.MAX_PAGE_SIZE:
            raise BadRequestError(f"Page size must not exceed {settings.MAX_PAGE_SIZE}")
        orders: tuple[SortOrder, ...] = tuple(SortOrder.parse(s) for s in sort or [])
        try:
            return cls(page=page, size=size, sort=orders)
        except ValidationError as exc:
            raise BadRequestError("Page index must be >= 0 and size must be >= 1") from exc


class Page(BaseModel, Generic[T]):
    """페이지 결과 모델.

    A bounded slice of an ordered result set plus total-count metadata.
    Serialized with camelCase keys (``content``, ``totalElements`` ...).

    Attributes:
        content: 현재 페이지 항목 목록 (Items for the current page)
        total_elements: 전체 항목 수 (Total count across all pages)
        page_number: 현재 페이지 번호, 0부터 시작 (Current page, 0-based)
        page_size: 페이지 크기 (Requested page size)
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    content: list[T]
    total_elements: int
    page_number: int
    page_size: int

    @computed_field(alias="totalPages")  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        """전체 페이지 수 — ceil(total_elements / page_size)."""
        return -(-self.total_elements // self.page_size)

    @computed_field(alias="numberOfElements")  # type: ignore[prop-decorator]
    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @computed_field(alias="first")  # type: ignore[prop-decorator]
    @property
    def first(self) -> bool:
        return self.page_number == 0

    @computed_field(alias="last")  # type: ignore[prop-decorator]
    @property
    def last(self) -> bool:
        return self.page_number + 1 >= self.total_pages

    @classmethod
    def of(cls, content: list[T], page_request: PageRequest, total: int) -> "Page[T]":
        """콘텐츠와 전체 개수로 페이지를 생성합니다.

        Build a page from its content, the request that produced it and the total.
        """
        return cls(
            content=content,
            total_elements=total,
            page_number=page_request.page,
            page_size=page_request.size,
        )


async def fetch_content(
    db: AsyncSession,
    query: Select[Any],
    offset: int,
    limit: int,
) -> Sequence[Any]:
    """OFFSET/LIMIT을 적용하여 콘텐츠 행을 조회합니다.

    Execute the content query with offset/limit and return its rows.
    The caller is responsible for giving the query a total order.
    """
    result = await db.execute(query.offset(offset).limit(limit))
    return result.all()


async def count_total(db: AsyncSession, count_query: Select[Any]) -> int:
    """COUNT 쿼리를 실행합니다 — Execute a scalar count query."""
    return (await db.execute(count_query)).scalar() or 0


async def fetch_results(
    db: AsyncSession,
    query: Select[Any],
    offset: int,
    limit: int,
) -> tuple[Sequence[Any], int]:
    """콘텐츠와 전체 개수를 함께 조회합니다.

    Fetch one slice of ``query`` and its total in a single call.
    Two statements are issued back to back, content first: the slice, then a
    COUNT over the same query wrapped in a subquery with its ORDER BY removed.

    Args:
        db: 비동기 DB 세션 (Async database session)
        query: 정렬이 적용된 콘텐츠 쿼리 (Ordered content query)
        offset: 시작 위치 (Row offset)
        limit: 최대 행 수 (Maximum rows)

    Returns:
        tuple[Sequence[Any], int]: (행 목록, 전체 개수) (Rows and total count)
    """
    rows: Sequence[Any] = await fetch_content(db, query, offset, limit)

    # 정렬은 개수에 영향 없음 — ORDER BY is irrelevant to a count
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total: int = await count_total(db, count_query)
    return rows, total


async def resolve_total(
    content_size: int,
    page_request: PageRequest,
    count_supplier: Callable[[], Awaitable[int]],
) -> tuple[int, bool]:
    """콘텐츠 크기로 전체 개수를 결정하고, 불가능할 때만 COUNT를 실행합니다.

    Resolve the page total, calling ``count_supplier`` only when the content
    size alone cannot prove it:

        - 첫 페이지이고 콘텐츠가 페이지 크기보다 작으면 total = 콘텐츠 크기
          (first page, short content: total = content size)
        - 이후 페이지이고 콘텐츠가 비어있지 않으면서 페이지 크기보다 작으면
          total = offset + 콘텐츠 크기
          (later page, non-empty short content: total = offset + content size)
        - 그 외에는 COUNT 실행 (otherwise count; a full page or an empty
          later page proves nothing)

    Returns:
        tuple[int, bool]: (전체 개수, COUNT 실행 여부) (Total and whether the count ran)
    """
    offset: int = page_request.offset
    size: int = page_request.size

    if offset == 0:
        if content_size < size:
            return content_size, False
        return await count_supplier(), True

    if 0 < content_size < size:
        return offset + content_size, False
    return await count_supplier(), True
