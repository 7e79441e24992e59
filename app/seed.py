"""초기 데이터 시드 스크립트 — 팀과 샘플 회원 생성.

Seed script — Creates sample teams and members for local use.
Run this script once to bootstrap the database with searchable data.

Usage:
    python -m app.seed

Creates:
    - 2개 팀: teamA, teamB (2 teams)
    - SEED_MEMBER_COUNT명 회원: member0..member{n-1}, 나이 = i, 짝수는 teamA, 홀수는 teamB
      (n members aged i, even indexes in teamA, odd in teamB)
"""

import asyncio

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import async_session, engine, Base
from app.models import Member, Team
from app.repositories.team_repository import team_repository


async def seed_members(db: AsyncSession, member_count: int) -> bool:
    """팀과 회원을 생성합니다.

    Insert teamA, teamB and ``member_count`` members. Idempotent: does
    nothing when teamA already exists.

    Returns:
        bool: 데이터를 생성했으면 True (True when data was inserted)
    """
    if await team_repository.get_by_name(db, "teamA") is not None:
        return False

    team_a: Team = await team_repository.create(db, {"name": "teamA"})
    team_b: Team = await team_repository.create(db, {"name": "teamB"})

    for i in range(member_count):
        member: Member = Member(username=f"member{i}", age=i)
        member.change_team(team_a if i % 2 == 0 else team_b)
        db.add(member)

    await db.flush()
    return True


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Seed the database with initial data.
    Creates tables if they don't exist, then inserts the sample data.
    """
    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        if not await seed_members(db, settings.SEED_MEMBER_COUNT):
            print("Already seeded. Skipping.")
            return
        await db.commit()
        print(f"Seeded: teams=teamA,teamB members={settings.SEED_MEMBER_COUNT}")


if __name__ == "__main__":
    asyncio.run(seed())
