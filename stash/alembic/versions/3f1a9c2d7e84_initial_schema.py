"""initial_schema

Revision ID: 3f1a9c2d7e84
Revises:
Create Date: 2026-10-19 10:12:41.218530

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2d7e84'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create links, snippets and resumes."""
    op.create_table(
        'links',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('label', sa.String(100), nullable=False),
        sa.Column('url', sa.Text, nullable=False),
        sa.Column('category', sa.String(50), nullable=False, server_default='general'),
        sa.Column('icon', sa.String(10), nullable=True),
        sa.Column('created_at', sa.DateTime, nullable=False),
    )
    op.create_index('ix_links_user_id', 'links', ['user_id'])

    op.create_table(
        'snippets',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('body', sa.Text, nullable=False),
        sa.Column('tags', sa.JSON, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False),
    )
    op.create_index('ix_snippets_user_id', 'snippets', ['user_id'])

    op.create_table(
        'resumes',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('label', sa.String(100), nullable=False),
        sa.Column('role_type', sa.String(100), nullable=True),
        sa.Column('storage_path', sa.Text, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False),
    )
    op.create_index('ix_resumes_user_id', 'resumes', ['user_id'])


def downgrade() -> None:
    """Drop all application tables."""
    op.drop_index('ix_resumes_user_id', table_name='resumes')
    op.drop_table('resumes')
    op.drop_index('ix_snippets_user_id', table_name='snippets')
    op.drop_table('snippets')
    op.drop_index('ix_links_user_id', table_name='links')
    op.drop_table('links')
