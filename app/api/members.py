"""회원 검색 라우터 — 조건 검색 및 페이지 조회 엔드포인트.

Member Search Router — Conditional search endpoints, one per paging strategy.

Endpoints:
    - GET /v1/members: 페이지 없이 조건 검색 (Unpaged search)
    - GET /v2/members: 콘텐츠+COUNT 동시 조회 (Content and derived count, always both)
    - GET /v3/members: 콘텐츠 먼저, 필요 시에만 COUNT (Count only when needed)
    - GET /v4/members: 콘텐츠+최소 COUNT 항상 실행 (Content and minimal count, always both)
    - GET /members/{member_id}: 회원 단건 조회 (Single member)
    - GET /members/by-username/{username}: 회원명 조회 (Members by username)
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_page_request, get_search_condition
from app.database import get_db
from app.schemas.member import (
    MemberSearchCondition,
    MemberSummaryResponse,
    MemberTeamResponse,
)
from app.services.member_service import member_service
from app.utils.pagination import Page, PageRequest, PagingStrategy

router: APIRouter = APIRouter()


@router.get("/v1/members", response_model=list[MemberTeamResponse])
async def search_members_v1(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(get_search_condition)],
) -> list[MemberTeamResponse]:
    """조건에 맞는 모든 회원을 조회합니다.

    Search members without paging, ordered by member id.
    """
    return await member_service.search_members(db, condition)


@router.get("/v2/members", response_model=Page[MemberTeamResponse])
async def search_members_v2(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(get_search_condition)],
    page_request: Annotated[PageRequest, Depends(get_page_request)],
) -> Page[MemberTeamResponse]:
    """콘텐츠와 전체 개수를 한 번에 조회합니다.

    Paged search; the total is counted from the content query every time.
    """
    return await member_service.search_members_page(
        db, condition, page_request, PagingStrategy.SIMPLE
    )


@router.get("/v3/members", response_model=Page[MemberTeamResponse])
async def search_members_v3(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(get_search_condition)],
    page_request: Annotated[PageRequest, Depends(get_page_request)],
) -> Page[MemberTeamResponse]:
    """첫/마지막 페이지에서는 COUNT 쿼리를 생략합니다.

    Paged search that skips the count query when the page content proves the total.
    """
    return await member_service.search_members_page(
        db, condition, page_request, PagingStrategy.OPTIMIZED
    )


@router.get("/v4/members", response_model=Page[MemberTeamResponse])
async def search_members_v4(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(get_search_condition)],
    page_request: Annotated[PageRequest, Depends(get_page_request)],
) -> Page[MemberTeamResponse]:
    """콘텐츠 쿼리와 최소 COUNT 쿼리를 항상 함께 실행합니다.

    Paged search with a separate minimal count query, always executed.
    """
    return await member_service.search_members_page(
        db, condition, page_request, PagingStrategy.COMPLEX
    )


@router.get("/members/by-username/{username}", response_model=list[MemberSummaryResponse])
async def find_members_by_username(
    username: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[MemberSummaryResponse]:
    """회원명이 일치하는 회원의 이름과 나이를 조회합니다.

    List username and age of members with exactly this username.
    """
    return await member_service.find_by_username(db, username)


@router.get("/members/{member_id}", response_model=MemberTeamResponse)
async def get_member(
    member_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberTeamResponse:
    """회원 한 명을 팀 정보와 함께 조회합니다.

    Retrieve a single member with its team. 404 when missing.
    """
    return await member_service.get_member(db, member_id)
