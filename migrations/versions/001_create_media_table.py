"""Create media table

Revision ID: 001_create_media_table
Revises: 
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_create_media_table'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the media table and its lookup indexes."""
    op.create_table(
        'media',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('file_name', sa.String(255), nullable=False),
        sa.Column('collection', sa.String(255), nullable=False,
                  server_default='default'),
        sa.Column('disk', sa.String(255), nullable=False),
        sa.Column('mime_type', sa.String(255), nullable=False),
        sa.Column('size_bytes', sa.BigInteger(), nullable=False),
        sa.Column('custom_properties', sa.JSON(), nullable=False),
        sa.Column('order_column', sa.Integer(), nullable=True),
        sa.Column('curator_id', sa.String(255), nullable=True),
        sa.Column('curator_type', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False,
                  server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False,
                  server_default=sa.func.now()),
        sa.CheckConstraint(
            "(curator_id IS NULL AND curator_type IS NULL) OR "
            "(curator_id IS NOT NULL AND curator_type IS NOT NULL)",
            name='media_curator_pair_check'),
        sa.CheckConstraint('size_bytes >= 0', name='media_size_check'),
        sqlite_autoincrement=True,
    )
    op.create_index('idx_media_collection_curator', 'media',
                    ['collection', 'curator_type', 'curator_id'])
    op.create_index('idx_media_disk', 'media', ['disk'])


def downgrade() -> None:
    """Drop the media table."""
    op.drop_index('idx_media_disk', table_name='media')
    op.drop_index('idx_media_collection_curator', table_name='media')
    op.drop_table('media')
