"""팀 레포지토리 — 팀 생성 및 이름 조회.

Team Repository — Team creation and lookup by name.
"""

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.member import Team
from app.repositories.base import BaseRepository


class TeamRepository(BaseRepository[Team]):
    """팀 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the team table.
    """

    def __init__(self) -> None:
        super().__init__(Team)

    async def get_by_name(self, db: AsyncSession, name: str) -> Team | None:
        """이름으로 첫 번째 팀을 조회합니다 — First team with this name, or None."""
        query: Select = select(Team).where(Team.name == name).order_by(Team.id).limit(1)
        result = await db.execute(query)
        return result.scalar_one_or_none()


# 싱글턴 인스턴스 — Singleton instance
team_repository: TeamRepository = TeamRepository()
