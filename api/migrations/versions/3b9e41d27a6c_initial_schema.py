"""initial_schema

Revision ID: 3b9e41d27a6c
Revises: 
Create Date: 2026-10-19 18:02:11.204518

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3b9e41d27a6c'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('feeds',
        sa.Column('id', sa.BigInteger(), sa.Identity(always=False), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('rss_link', sa.Text(), nullable=False),
        sa.Column('site_link', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('last_updated', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('rss_link', name='feeds_rss_link_key')
    )

    op.create_table('articles',
        sa.Column('id', sa.BigInteger(), sa.Identity(always=False), nullable=False),
        sa.Column('feed_id', sa.BigInteger(), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('author', sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column('description', sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column('link', sa.Text(), nullable=False),
        sa.Column('published', sa.BigInteger(), nullable=False),
        sa.Column('read', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('read_date', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column('favorited', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.ForeignKeyConstraint(['feed_id'], ['feeds.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('link', name='articles_link_key')
    )

    # Keyset pagination reads (published, id) in both directions
    op.create_index('articles_published_id', 'articles', ['published', 'id'], unique=False)
    op.create_index('articles_feed_id', 'articles', ['feed_id'], unique=False)


def downgrade() -> None:
    op.drop_index('articles_feed_id', table_name='articles')
    op.drop_index('articles_published_id', table_name='articles')

    # Drop tables in reverse order due to foreign key constraints
    op.drop_table('articles')
    op.drop_table('feeds')
