"""회원 검색 관련 Pydantic 스키마 정의.

Member search Pydantic schema definitions.
Covers the sparse search condition and the flat projections returned
by the search endpoints. JSON keys are camelCase (memberId, teamName ...).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# === 검색 조건 (Search condition) 스키마 ===

class MemberSearchCondition(BaseModel):
    """회원 검색 조건 — 회원명, 팀명, 나이 범위.

    Sparse member search condition. Every field is optional; an absent
    field means "no constraint on this dimension".

    Attributes:
        username: 회원명 일치 (Exact username, blank = absent)
        team_name: 팀명 일치 (Exact team name, blank = absent)
        age_goe: 나이 이상 (Age greater than or equal)
        age_loe: 나이 이하 (Age less than or equal)
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    username: str | None = None  # 회원명 (Username)
    team_name: str | None = None  # 팀명 (Team name)
    age_goe: int | None = None  # 나이 >= (Age lower bound, inclusive)
    age_loe: int | None = None  # 나이 <= (Age upper bound, inclusive)


# === 조회 결과 (Projection) 스키마 ===

class MemberTeamResponse(BaseModel):
    """회원+팀 조인 프로젝션.

    Flattened ``Member LEFT JOIN Team`` projection. Team fields are None
    for members without a team.

    Attributes:
        member_id: 회원 ID (Member identifier)
        username: 회원명 (Username)
        age: 나이 (Age)
        team_id: 팀 ID, 선택 (Team identifier, nullable)
        team_name: 팀명, 선택 (Team name, nullable)
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    member_id: int
    username: str
    age: int
    team_id: int | None = None
    team_name: str | None = None

    @classmethod
    def from_row(cls, row: Any) -> "MemberTeamResponse":
        """조인 결과 행을 프로젝션으로 변환합니다.

        Map a joined row, labelled member_id/username/age/team_id/team_name,
        onto the projection by name.
        """
        return cls(
            member_id=row.member_id,
            username=row.username,
            age=row.age,
            team_id=row.team_id,
            team_name=row.team_name,
        )


class MemberSummaryResponse(BaseModel):
    """회원명/나이 프로젝션 — Username and age only."""

    username: str
    age: int
