"""Create translation history tables

Revision ID: create_translation_history
Revises:
Create Date: 2025-10-20 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'create_translation_history'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create translation_cache table
    op.create_table(
        'translation_cache',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('original_message', sa.Text(), nullable=False, comment='Message text as first submitted'),
        sa.Column('fingerprint', sa.String(length=64), nullable=False, comment='SHA256 of the trimmed, lower-cased message'),
        sa.Column('target_language', sa.String(length=50), nullable=False, comment='Lower-cased target language'),
        sa.Column('detected_language', sa.String(length=50), nullable=True, comment='Source language reported by the model'),
        sa.Column('translated_message', sa.Text(), nullable=False, comment='Latest translation for this key'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('use_count', sa.Integer(), nullable=False, comment='Hits plus re-translations'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('fingerprint', 'target_language', name='uq_translation_cache_fingerprint_lang'),
    )
    op.create_index('ix_translation_cache_created_at', 'translation_cache', ['created_at'], unique=False)

    # Create user_profile table
    op.create_table(
        'user_profile',
        sa.Column('id', sa.String(length=64), nullable=False, comment='Discord user ID'),
        sa.Column('display_name', sa.String(length=100), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )

    # Create usage_link table
    op.create_table(
        'usage_link',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('cache_entry_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user_profile.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['cache_entry_id'], ['translation_cache.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'cache_entry_id', name='uq_usage_link_user_entry'),
    )
    op.create_index('ix_usage_link_user_id', 'usage_link', ['user_id'], unique=False)
    op.create_index('ix_usage_link_cache_entry_id', 'usage_link', ['cache_entry_id'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_usage_link_cache_entry_id', table_name='usage_link')
    op.drop_index('ix_usage_link_user_id', table_name='usage_link')
    op.drop_table('usage_link')

    op.drop_table('user_profile')

    op.drop_index('ix_translation_cache_created_at', table_name='translation_cache')
    op.drop_table('translation_cache')
