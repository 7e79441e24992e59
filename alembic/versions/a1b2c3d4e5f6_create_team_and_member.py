"""create_team_and_member

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-18 09:00:00.000000

회원 검색용 테이블 생성: team, member.
Create the team and member tables used by the member search API.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1b2c3d4e5f6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # team — 팀 (Teams)
    op.create_table(
        'team',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
    )

    # member — 회원, 팀 삭제 시 team_id는 NULL (Members; team_id set NULL on team delete)
    op.create_table(
        'member',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(255), nullable=False),
        sa.Column('age', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('team_id', sa.Integer(), sa.ForeignKey('team.id', ondelete='SET NULL'), nullable=True),
    )

    # 검색 인덱스 — Search indexes (username equality, team join)
    op.create_index('ix_member_username', 'member', ['username'])
    op.create_index('ix_member_team_id', 'member', ['team_id'])


def downgrade() -> None:
    op.drop_index('ix_member_team_id', table_name='member')
    op.drop_index('ix_member_username', table_name='member')
    op.drop_table('member')
    op.drop_table('team')
