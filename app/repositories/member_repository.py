"""회원 레포지토리 — 동적 검색 조건 조합 및 페이지 조회.

Member Repository — Dynamic predicate composition and paginated search.
Turns a sparse MemberSearchCondition into a conjunctive set of optional
predicates over ``member LEFT JOIN team`` and executes it unpaged or with
one of three paging strategies (see app.utils.pagination.PagingStrategy).

Predicate factories (None when the field is absent):
    - username_eq: member.username = ?   (blank string = absent)
    - team_name_eq: team.name = ?        (blank string = absent)
    - age_goe: member.age >= ?
    - age_loe: member.age <= ?
"""

from typing import Any, Sequence

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.member import Member, Team
from app.repositories.base import BaseRepository
from app.schemas.member import MemberSearchCondition, MemberTeamResponse
from app.utils.exceptions import BadRequestError
from app.utils.pagination import (
    Page,
    PageRequest,
    PagingStrategy,
    SortOrder,
    count_total,
    fetch_content,
    fetch_results,
    resolve_total,
)

# 정렬 가능한 속성 — Sortable properties exposed through ?sort=
SORTABLE_COLUMNS: dict[str, Any] = {
    "id": Member.id,
    "username": Member.username,
    "age": Member.age,
    "teamName": Team.name,
}


# 공백으로 보지 않는 문자 (줄바꿈 없는 공백, NEL)
# Characters that do not count as whitespace: no-break spaces and NEL
_NOT_BLANK = "\u00a0\u2007\u202f\u0085"


def has_text(value: str | None) -> bool:
    """None, 빈 문자열, 공백만 있는 문자열이면 False.

    No-break spaces (U+00A0, U+2007, U+202F) and NEL (U+0085) are text.
    """
    return value is not None and any(
        not ch.isspace() or ch in _NOT_BLANK for ch in value
    )


def username_eq(username: str | None) -> ColumnElement[bool] | None:
    return Member.username == username if has_text(username) else None


def team_name_eq(team_name: str | None) -> ColumnElement[bool] | None:
    return Team.name == team_name if has_text(team_name) else None


def age_goe(age: int | None) -> ColumnElement[bool] | None:
    return Member.age >= age if age is not None else None


def age_loe(age: int | None) -> ColumnElement[bool] | None:
    return Member.age <= age if age is not None else None


def build_predicates(condition: MemberSearchCondition | None) -> list[ColumnElement[bool]]:
    """검색 조건을 WHERE 절 목록으로 변환합니다.

    Translate a search condition into its predicate list. Each present field
    yields exactly one clause, in field order; absent fields yield nothing.
    The caller ANDs the list (``Select.where(*predicates)``), so an empty list
    means an unfiltered scan. A None condition behaves like an empty one.

    Args:
        condition: 검색 조건, None 허용 (Search condition, may be None)

    Returns:
        list[ColumnElement[bool]]: 존재하는 조건 목록 (Present predicates)
    """
    if condition is None:
        condition = MemberSearchCondition()

    candidates: list[ColumnElement[bool] | None] = [
        username_eq(condition.username),
        team_name_eq(condition.team_name),
        age_goe(condition.age_goe),
        age_loe(condition.age_loe),
    ]
    return [clause for clause in candidates if clause is not None]


def build_order_by(sort: Sequence[SortOrder]) -> list[ColumnElement[Any]]:
    """정렬 기준을 ORDER BY 절로 변환하고 ID로 동점을 정리합니다.

    Translate sort orders into ORDER BY clauses. ``member.id ASC`` is appended
    unless ``id`` is already a key, so offset/limit paging is deterministic.

    Raises:
        BadRequestError: 정렬할 수 없는 속성 (Unknown sort property)
    """
    clauses: list[ColumnElement[Any]] = []
    for order in sort:
        column = SORTABLE_COLUMNS.get(order.property)
        if column is None:
            raise BadRequestError(f"Invalid sort property: {order.property}")
        clauses.append(column.desc() if order.direction == "desc" else column.asc())

    if all(order.property != "id" for order in sort):
        clauses.append(Member.id.asc())
    return clauses


class MemberRepository(BaseRepository[Member]):
    """회원 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the member table.
    Stateless; every call runs on the caller's session.
    """

    def __init__(self) -> None:
        super().__init__(Member)

    # ------------------------------------------------------------------
    # 쿼리 빌더 — Query builders
    # ------------------------------------------------------------------
    def _content_query(self, predicates: list[ColumnElement[bool]]) -> Select:
        """회원+팀 프로젝션 쿼리 (정렬 없음) — Unordered member/team projection."""
        return (
            select(
                Member.id.label("member_id"),
                Member.username.label("username"),
                Member.age.label("age"),
                Team.id.label("team_id"),
                Team.name.label("team_name"),
            )
            .select_from(Member)
            .outerjoin(Team, Member.team_id == Team.id)
            .where(*predicates)
        )

    def _count_query(self, predicates: list[ColumnElement[bool]]) -> Select:
        """최소 COUNT 쿼리 — count(member.id) only, no ORDER BY.

        팀명 조건이 팀 컬럼을 참조하므로 조인은 유지 (The join stays: team_name_eq
        references team columns).
        """
        return (
            select(func.count(Member.id))
            .select_from(Member)
            .outerjoin(Team, Member.team_id == Team.id)
            .where(*predicates)
        )

    # ------------------------------------------------------------------
    # 단건/목록 조회 — Plain lookups
    # ------------------------------------------------------------------
    async def find_by_username(self, db: AsyncSession, username: str) -> list[Member]:
        """회원명으로 회원 목록을 조회합니다 — Members with exactly this username."""
        return list(await self.get_all(db, filters={"username": username}))

    async def get_member_team(
        self,
        db: AsyncSession,
        member_id: int,
    ) -> MemberTeamResponse | None:
        """회원 한 명을 팀 정보와 함께 프로젝션으로 조회합니다.

        Retrieve one member as a member/team projection.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            member_id: 회원 ID (Member identifier)

        Returns:
            MemberTeamResponse | None: 프로젝션 또는 None (Projection or None)
        """
        query: Select = self._content_query([Member.id == member_id])
        row = (await db.execute(query)).one_or_none()
        return MemberTeamResponse.from_row(row) if row is not None else None

    # ------------------------------------------------------------------
    # 검색 — Search
    # ------------------------------------------------------------------
    async def search(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition | None,
    ) -> list[MemberTeamResponse]:
        """조건에 맞는 모든 회원을 회원 ID 순으로 조회합니다 (페이지 없음).

        Unpaged search, ordered by member id ascending.
        """
        query: Select = self._content_query(build_predicates(condition)).order_by(Member.id.asc())
        result = await db.execute(query)
        return [MemberTeamResponse.from_row(row) for row in result.all()]

    async def search_page_simple(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition | None,
        page_request: PageRequest,
    ) -> Page[MemberTeamResponse]:
        """콘텐츠와 전체 개수를 한 번에 조회합니다.

        Paged search where the total is derived from the content query itself;
        content and count are always both executed, content first.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition)
            page_request: 페이지 요청 (Page request)

        Returns:
            Page[MemberTeamResponse]: 페이지 결과 (Page of projections)
        """
        query: Select = self._content_query(build_predicates(condition)).order_by(
            *build_order_by(page_request.sort)
        )
        rows, total = await fetch_results(db, query, page_request.offset, page_request.size)
        content: list[MemberTeamResponse] = [MemberTeamResponse.from_row(row) for row in rows]
        return Page[MemberTeamResponse].of(content, page_request, total)

    async def search_page_complex(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition | None,
        page_request: PageRequest,
    ) -> Page[MemberTeamResponse]:
        """콘텐츠 쿼리와 최소 COUNT 쿼리를 각각 항상 실행합니다.

        Paged search with a content query and a separately built minimal
        count query; both always run.
        """
        predicates: list[ColumnElement[bool]] = build_predicates(condition)
        content: list[MemberTeamResponse] = await self._fetch_page_content(
            db, predicates, page_request
        )
        total: int = await count_total(db, self._count_query(predicates))
        return Page[MemberTeamResponse].of(content, page_request, total)

    async def search_page_optimized(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition | None,
        page_request: PageRequest,
    ) -> Page[MemberTeamResponse]:
        """콘텐츠를 먼저 조회하고, 필요할 때만 COUNT 쿼리를 실행합니다.

        Paged search that skips the count query whenever the content size
        proves the total (first or last page). Content and total always equal
        those of search_page_complex.
        """
        predicates: list[ColumnElement[bool]] = build_predicates(condition)
        content: list[MemberTeamResponse] = await self._fetch_page_content(
            db, predicates, page_request
        )

        async def _count() -> int:
            return await count_total(db, self._count_query(predicates))

        total, _ = await resolve_total(len(content), page_request, _count)
        return Page[MemberTeamResponse].of(content, page_request, total)

    async def search_page(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition | None,
        page_request: PageRequest,
        strategy: PagingStrategy = PagingStrategy.OPTIMIZED,
    ) -> Page[MemberTeamResponse]:
        """페이징 전략에 따라 검색합니다 — Dispatch on the paging strategy."""
        if strategy is PagingStrategy.SIMPLE:
            return await self.search_page_simple(db, condition, page_request)
        if strategy is PagingStrategy.COMPLEX:
            return await self.search_page_complex(db, condition, page_request)
        return await self.search_page_optimized(db, condition, page_request)

    async def slice_members(
        self,
        db: AsyncSession,
        offset: int,
        limit: int,
        sort: Sequence[SortOrder] = (),
    ) -> tuple[list[Member], int]:
        """임의의 OFFSET/LIMIT으로 회원 엔티티를 조회합니다.

        Fetch a raw offset/limit slice of member entities plus the total,
        for offsets that are not page aligned. Not exposed over HTTP; the
        endpoints only take page-aligned requests (repository-level API for
        batch or internal callers).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            offset: 시작 위치 (Row offset)
            limit: 최대 행 수 (Maximum rows)
            sort: 정렬 기준 (Sort orders)

        Returns:
            tuple[list[Member], int]: (회원 목록, 전체 개수) (Members and total)
        """
        query: Select = (
            select(Member)
            .outerjoin(Team, Member.team_id == Team.id)
            .order_by(*build_order_by(sort))
        )
        rows, total = await fetch_results(db, query, offset, limit)
        return [row.Member for row in rows], total

    async def _fetch_page_content(
        self,
        db: AsyncSession,
        predicates: list[ColumnElement[bool]],
        page_request: PageRequest,
    ) -> list[MemberTeamResponse]:
        query: Select = self._content_query(predicates).order_by(
            *build_order_by(page_request.sort)
        )
        rows = await fetch_content(db, query, page_request.offset, page_request.size)
        return [MemberTeamResponse.from_row(row) for row in rows]


# 싱글턴 인스턴스 — Singleton instance
member_repository: MemberRepository = MemberRepository()
