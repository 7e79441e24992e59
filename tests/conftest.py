"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, and httpx client fixtures.
Each test gets a fresh database (aiosqlite + StaticPool keeps the single
in-memory connection alive for the engine's lifetime).
"""

import os

# 앱 모듈 임포트 전에 테스트 설정 주입 — Configure before app modules are imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("DEBUG", "false")

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.database import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Member, Team  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite://"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 매 테스트마다 스키마를 새로 생성합니다."""
    eng = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def statements(engine: AsyncEngine):
    """실행된 SQL 문을 기록합니다 — Record every SQL statement sent to the database."""
    captured: list[str] = []

    def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        captured.append(statement)

    event.listen(engine.sync_engine, "before_cursor_execute", _before_cursor_execute)
    yield captured
    event.remove(engine.sync_engine, "before_cursor_execute", _before_cursor_execute)


def count_queries(statements: list[str]) -> int:
    """기록된 SQL 중 COUNT 쿼리 수 — Number of recorded COUNT statements."""
    return sum(1 for s in statements if "count(" in s.lower())


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def teams(db: AsyncSession) -> dict[str, Team]:
    """teamA, teamB를 생성합니다."""
    result: dict[str, Team] = {}
    for name in ("teamA", "teamB"):
        team = Team(name=name)
        db.add(team)
        result[name] = team
    await db.flush()
    return result


@pytest_asyncio.fixture
async def members(db: AsyncSession, teams: dict[str, Team]) -> list[Member]:
    """회원 4명: member1(10, teamA), member2(20, teamA), member3(30, teamB), member4(40, teamB)."""
    rows = [
        ("member1", 10, "teamA"),
        ("member2", 20, "teamA"),
        ("member3", 30, "teamB"),
        ("member4", 40, "teamB"),
    ]
    result: list[Member] = []
    for username, age, team_name in rows:
        member = Member(username=username, age=age)
        member.change_team(teams[team_name])
        db.add(member)
        result.append(member)
    await db.flush()
    return result


@pytest_asyncio.fixture
async def teamless_member(db: AsyncSession, members: list[Member]) -> Member:
    """팀이 없는 회원 member5(50)를 추가합니다."""
    member = Member(username="member5", age=50)
    db.add(member)
    await db.flush()
    return member
