"""create_tournaments_and_games

Revision ID: c3d4e5f6a7b8
Revises:
Create Date: 2026-10-18 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'c3d4e5f6a7b8'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create tournaments and their games."""
    op.create_table(
        'tournaments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('start_date', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('title', 'start_date', name='uq_tournaments_title_start_date'),
    )
    op.create_index('ix_tournaments_id', 'tournaments', ['id'])
    op.create_index('ix_tournaments_title', 'tournaments', ['title'])

    op.create_table(
        'games',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('time', sa.DateTime(), nullable=False),
        sa.Column('tournament_id', sa.Integer(), sa.ForeignKey('tournaments.id', ondelete='CASCADE'), nullable=False),
        sa.UniqueConstraint('tournament_id', 'title', name='uq_games_tournament_title'),
    )
    op.create_index('ix_games_id', 'games', ['id'])
    op.create_index('ix_games_title', 'games', ['title'])
    op.create_index('ix_games_tournament_id', 'games', ['tournament_id'])


def downgrade() -> None:
    """Drop games and tournaments."""
    op.drop_index('ix_games_tournament_id', table_name='games')
    op.drop_index('ix_games_title', table_name='games')
    op.drop_index('ix_games_id', table_name='games')
    op.drop_table('games')
    op.drop_index('ix_tournaments_title', table_name='tournaments')
    op.drop_index('ix_tournaments_id', table_name='tournaments')
    op.drop_table('tournaments')
