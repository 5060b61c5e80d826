"""create cache and favorites tables

Revision ID: 7c1e9a04b2d3
Revises:
Create Date: 2026-10-17 10:12:44.318204
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '7c1e9a04b2d3'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _catalog_columns() -> list[sa.Column]:
    return [
        sa.Column('id', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('overview', sa.Text(), nullable=False),
        sa.Column('poster_path', sa.String(length=255), nullable=True),
        sa.Column('backdrop_path', sa.String(length=255), nullable=True),
        sa.Column('release_date', sa.String(length=20), nullable=True),
        sa.Column('vote_average', sa.Float(), nullable=False),
        sa.Column('vote_count', sa.Integer(), nullable=False),
        sa.Column('popularity', sa.Float(), nullable=False),
        sa.Column('adult', sa.Boolean(), nullable=False),
        sa.Column('video', sa.Boolean(), nullable=False),
        sa.Column('original_language', sa.String(length=10), nullable=False),
        sa.Column('original_title', sa.String(length=500), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'cached_movies',
        *_catalog_columns(),
        sa.Column('genre_ids', sa.JSON(), nullable=False),
        sa.Column('cached_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_cached_movies_popularity', 'cached_movies', ['popularity'])
    op.create_index('ix_cached_movies_cached_at', 'cached_movies', ['cached_at'])

    op.create_table(
        'cached_movie_details',
        *_catalog_columns(),
        sa.Column('runtime', sa.Integer(), nullable=True),
        sa.Column('budget', sa.BigInteger(), nullable=False),
        sa.Column('revenue', sa.BigInteger(), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=False),
        sa.Column('tagline', sa.Text(), nullable=True),
        sa.Column('homepage', sa.String(length=500), nullable=True),
        sa.Column('genres', sa.JSON(), nullable=False),
        sa.Column('production_companies', sa.JSON(), nullable=False),
        sa.Column('cached_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_cached_movie_details_cached_at', 'cached_movie_details', ['cached_at'])

    op.create_table(
        'favorite_movies',
        sa.Column('id', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('overview', sa.Text(), nullable=False),
        sa.Column('poster_path', sa.String(length=255), nullable=True),
        sa.Column('backdrop_path', sa.String(length=255), nullable=True),
        sa.Column('release_date', sa.String(length=20), nullable=True),
        sa.Column('vote_average', sa.Float(), nullable=False),
        sa.Column('vote_count', sa.Integer(), nullable=False),
        sa.Column('added_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_favorite_movies_added_at', 'favorite_movies', ['added_at'])


def downgrade() -> None:
    op.drop_index('ix_favorite_movies_added_at', table_name='favorite_movies')
    op.drop_table('favorite_movies')
    op.drop_index('ix_cached_movie_details_cached_at', table_name='cached_movie_details')
    op.drop_table('cached_movie_details')
    op.drop_index('ix_cached_movies_cached_at', table_name='cached_movies')
    op.drop_index('ix_cached_movies_popularity', table_name='cached_movies')
    op.drop_table('cached_movies')
