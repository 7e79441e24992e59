"""FastAPI 의존성 주입 모듈 — 검색 조건 및 페이지 요청 파싱.

FastAPI dependency injection module — Search condition and page request parsing.
Malformed numbers and out-of-range paging values are rejected here by
FastAPI's query validation (422) before any query is composed.

Query parameters:
    - 검색 조건 (Search condition): username, teamName, ageGoe, ageLoe
    - 페이지 요청 (Page request): page (0-based), size, sort=property[,asc|desc] (repeatable)
"""

from typing import Annotated

from fastapi import Query

from app.config import settings
from app.schemas.member import MemberSearchCondition
from app.utils.pagination import PageRequest


def get_search_condition(
    username: Annotated[str | None, Query()] = None,
    team_name: Annotated[str | None, Query(alias="teamName")] = None,
    age_goe: Annotated[int | None, Query(alias="ageGoe")] = None,
    age_loe: Annotated[int | None, Query(alias="ageLoe")] = None,
) -> MemberSearchCondition:
    """쿼리 파라미터에서 회원 검색 조건을 생성합니다.

    Build a MemberSearchCondition from query parameters.
    Blank strings are kept as-is; the repository treats them as absent.

    Returns:
        MemberSearchCondition: 불변 검색 조건 (Immutable search condition)
    """
    return MemberSearchCondition(
        username=username,
        team_name=team_name,
        age_goe=age_goe,
        age_loe=age_loe,
    )


def get_page_request(
    page: Annotated[int, Query(ge=0)] = 0,
    size: Annotated[int | None, Query(ge=1, le=settings.MAX_PAGE_SIZE)] = None,
    sort: Annotated[list[str] | None, Query()] = None,
) -> PageRequest:
    """쿼리 파라미터에서 페이지 요청을 생성합니다.

    Build a PageRequest from query parameters.

    Raises:
        BadRequestError: 잘못된 정렬 파라미터 (Malformed sort parameter)
    """
    return PageRequest.of(page=page, size=size, sort=sort)
