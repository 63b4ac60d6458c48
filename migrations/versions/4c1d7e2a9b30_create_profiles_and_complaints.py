"""create_profiles_and_complaints

Revision ID: 4c1d7e2a9b30
Revises:
Create Date: 2026-03-02 09:14:52.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1d7e2a9b30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create profiles and complaints tables."""
    op.create_table('profiles',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='citizen'),
        sa.Column('department', sa.String(length=255), nullable=True),
        sa.Column('last_seen', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.CheckConstraint("role IN ('citizen', 'officer', 'worker')", name='ck_profiles_role'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )
    # Presence roster scans by last_seen
    op.create_index('ix_profiles_last_seen', 'profiles', ['last_seen'], unique=False)

    op.create_table('complaints',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.String(length=20), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('urgency_score', sa.Float(), nullable=False, server_default='0.5'),
        sa.Column('score_origin', sa.String(length=20), nullable=False, server_default='assessed'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.CheckConstraint(
            "category IN ('water', 'electricity', 'roads', 'sanitation', 'other')",
            name='ck_complaints_category',
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'endorsed', 'ongoing', 'closed')",
            name='ck_complaints_status',
        ),
        sa.CheckConstraint(
            'urgency_score >= 0 AND urgency_score <= 1',
            name='ck_complaints_urgency_score',
        ),
        sa.CheckConstraint(
            "score_origin IN ('assessed', 'fallback')",
            name='ck_complaints_score_origin',
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_complaints_user_id', 'complaints', ['user_id'], unique=False)
    op.create_index('ix_complaints_created_at', 'complaints', ['created_at'], unique=False)
    # Worker queue: one status, ranked by urgency
    op.create_index('ix_complaints_status_urgency', 'complaints', ['status', 'urgency_score'], unique=False)


def downgrade() -> None:
    """Drop complaints and profiles tables."""
    op.drop_index('ix_complaints_status_urgency', table_name='complaints')
    op.drop_index('ix_complaints_created_at', table_name='complaints')
    op.drop_index('ix_complaints_user_id', table_name='complaints')
    op.drop_table('complaints')
    op.drop_index('ix_profiles_last_seen', table_name='profiles')
    op.drop_table('profiles')
