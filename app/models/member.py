"""회원/팀 SQLAlchemy ORM 모델 정의.

Member and Team SQLAlchemy ORM model definitions.
A member optionally belongs to one team; a team has many members.

Tables:
    - team: 팀 (Team)
    - member: 회원, team_id는 nullable (Member, nullable team foreign key)
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Team(Base):
    """팀 모델.

    Team model — groups members under a name.

    Attributes:
        id: 고유 식별자 (Auto-increment primary key)
        name: 팀 이름 (Team name)

    Relationships:
        members: 소속 회원 목록 (Members of this team)
    """

    __tablename__ = "team"

    # 팀 고유 식별자 — Team primary key (auto-increment)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 팀 이름 — Team display name
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    members = relationship("Member", back_populates="team")

    def __repr__(self) -> str:
        return f"Team(id={self.id}, name={self.name})"


class Member(Base):
    """회원 모델.

    Member model — a person with a username and age, optionally on a team.
    Members without a team are kept by the search's left join.

    Attributes:
        id: 고유 식별자 (Auto-increment primary key)
        username: 회원명 (Username)
        age: 나이 (Age)
        team_id: 소속 팀 FK, 선택 (Optional team foreign key)

    Relationships:
        team: 소속 팀 (Owning team, nullable)
    """

    __tablename__ = "member"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # 팀 삭제 시 회원은 팀 없이 남음 — Member survives team deletion with no team
    team_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("team.id", ondelete="SET NULL"), nullable=True, index=True
    )

    team = relationship("Team", back_populates="members")

    def change_team(self, team: Team) -> None:
        """소속 팀을 변경하고 양방향 관계를 맞춥니다.

        Move the member to another team. back_populates appends the member
        to ``team.members`` in memory, so both sides stay in sync before flush.
        """
        self.team = team

    def __repr__(self) -> str:
        return f"Member(id={self.id}, username={self.username}, age={self.age})"
