"""회원 검색 서비스 — 검색 조건/페이지 요청을 레포지토리 호출로 연결.

Member Search Service — Business logic between the member routers and
the member repository: strategy selection, not-found handling, and
conversion of entities to response schemas.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.member import Member
from app.repositories.member_repository import member_repository
from app.schemas.member import (
    MemberSearchCondition,
    MemberSummaryResponse,
    MemberTeamResponse,
)
from app.utils.exceptions import NotFoundError
from app.utils.pagination import Page, PageRequest, PagingStrategy


class MemberService:
    """회원 검색 관련 비즈니스 로직을 처리하는 서비스.

    Service handling member search. Read-only and stateless; data-access
    errors from the repository propagate unchanged.
    """

    async def search_members(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition | None,
    ) -> list[MemberTeamResponse]:
        """페이지 없이 조건 검색 — Unpaged conditional search."""
        return await member_repository.search(db, condition)

    async def search_members_page(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition | None,
        page_request: PageRequest,
        strategy: PagingStrategy,
    ) -> Page[MemberTeamResponse]:
        """페이지 조건 검색.

        Paged conditional search using the given paging strategy.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition)
            page_request: 검증된 페이지 요청 (Validated page request)
            strategy: 전체 개수 계산 방식 (How the total is obtained)

        Returns:
            Page[MemberTeamResponse]: 페이지 결과 (Page of projections)
        """
        return await member_repository.search_page(db, condition, page_request, strategy)

    async def get_member(self, db: AsyncSession, member_id: int) -> MemberTeamResponse:
        """회원 단건 조회.

        Retrieve one member with its team.

        Raises:
            NotFoundError: 회원을 찾을 수 없을 때 (Member not found)
        """
        member: MemberTeamResponse | None = await member_repository.get_member_team(db, member_id)
        if member is None:
            raise NotFoundError("Member not found")
        return member

    async def find_by_username(
        self,
        db: AsyncSession,
        username: str,
    ) -> list[MemberSummaryResponse]:
        """회원명으로 조회하여 회원명/나이만 반환합니다.

        Members with exactly this username, projected to username and age.
        """
        members: list[Member] = await member_repository.find_by_username(db, username)
        return [MemberSummaryResponse(username=m.username, age=m.age) for m in members]


# 싱글턴 인스턴스 — Singleton instance
member_service: MemberService = MemberService()
