"""add_session_tables

Revision ID: 4c1d7e2a9f03
Revises:
Create Date: 2026-10-18 10:02:11.417305

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '4c1d7e2a9f03'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create groups, group_sessions, session_votes and votes tables."""
    op.create_table('groups',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_by', sa.String(length=128), nullable=False),
        sa.Column('members', postgresql.JSONB(), nullable=False, server_default='[]'),
        sa.Column('invite_code', sa.String(length=16), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('current_session_id', sa.UUID(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('invite_code'),
    )

    op.create_table('group_sessions',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('group_id', sa.UUID(), nullable=False),
        sa.Column('created_by', sa.String(length=128), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('candidates', postgresql.JSONB(), nullable=False),
        sa.Column('filters', postgresql.JSONB(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.ForeignKeyConstraint(['group_id'], ['groups.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_group_sessions_group_active',
        'group_sessions',
        ['group_id', 'is_active', 'created_at'],
        unique=False,
    )
    op.create_index(
        'uq_group_sessions_one_active',
        'group_sessions',
        ['group_id'],
        unique=True,
        postgresql_where=sa.text('is_active'),
    )

    op.create_table('session_votes',
        sa.Column('session_id', sa.UUID(), nullable=False),
        sa.Column('member_id', sa.String(length=128), nullable=False),
        sa.Column('candidate_id', sa.String(length=255), nullable=False),
        sa.Column('value', sa.String(length=10), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint("value IN ('approve', 'reject')", name='ck_session_votes_value'),
        sa.ForeignKeyConstraint(['session_id'], ['group_sessions.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('session_id', 'member_id', 'candidate_id'),
    )

    op.create_table('votes',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('group_id', sa.UUID(), nullable=False),
        sa.Column('session_id', sa.UUID(), nullable=True),
        sa.Column('member_id', sa.String(length=128), nullable=False),
        sa.Column('candidate_id', sa.String(length=255), nullable=False),
        sa.Column('value', sa.String(length=10), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint("value IN ('approve', 'reject')", name='ck_votes_value'),
        sa.ForeignKeyConstraint(['group_id'], ['groups.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['session_id'], ['group_sessions.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_votes_group_id', 'votes', ['group_id'], unique=False)
    op.create_index('ix_votes_session_id', 'votes', ['session_id'], unique=False)


def downgrade() -> None:
    """Drop session tables."""
    op.drop_index('ix_votes_session_id', table_name='votes')
    op.drop_index('ix_votes_group_id', table_name='votes')
    op.drop_table('votes')
    op.drop_table('session_votes')
    op.drop_index('uq_group_sessions_one_active', table_name='group_sessions')
    op.drop_index('ix_group_sessions_group_active', table_name='group_sessions')
    op.drop_table('group_sessions')
    op.drop_table('groups')
