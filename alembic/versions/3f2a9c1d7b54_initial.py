"""initial: users, kid profiles, parent settings, learning progress, badges

Revision ID: 3f2a9c1d7b54
Revises:
Create Date: 2026-10-19 10:12:41.508213
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7b54'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.Enum('parent', 'educator', 'admin', name='userrole'), nullable=False),
        sa.Column('display_name', sa.String(length=100), nullable=False),
        sa.Column('email_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'kid_profiles',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('parent_id', sa.String(length=36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('display_name', sa.String(length=50), nullable=False),
        sa.Column('age', sa.Integer(), nullable=False),
        sa.Column('avatar_color', sa.String(length=7), nullable=False),
        sa.Column(
            'learning_level',
            sa.Enum('beginner', 'intermediate', 'advanced', name='learninglevel'),
            nullable=False,
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_kid_profiles_parent_id', 'kid_profiles', ['parent_id'])

    op.create_table(
        'parent_settings',
        sa.Column('parent_id', sa.String(length=36), sa.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('daily_learning_minutes', sa.Integer(), nullable=False, server_default='30'),
        sa.Column('fun_unlock_minutes', sa.Integer(), nullable=False, server_default='15'),
        sa.Column('content_filters', sa.JSON(), nullable=False),
        sa.Column('screen_time_limits', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        'learning_progress',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('child_id', sa.String(length=36), sa.ForeignKey('kid_profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('date', sa.String(length=10), nullable=False),
        sa.Column('learning_minutes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('completed_items', sa.JSON(), nullable=False),
        sa.Column('quiz_scores', sa.JSON(), nullable=False),
        sa.Column('streak_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('badges_earned', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('child_id', 'date', name='uq_learning_progress_child_date'),
    )
    op.create_index('ix_learning_progress_child_id', 'learning_progress', ['child_id'])

    op.create_table(
        'badges',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('name', sa.String(length=50), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('icon_url', sa.String(length=255), nullable=True),
        sa.Column('criteria', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('badges')
    op.drop_index('ix_learning_progress_child_id', table_name='learning_progress')
    op.drop_table('learning_progress')
    op.drop_table('parent_settings')
    op.drop_index('ix_kid_profiles_parent_id', table_name='kid_profiles')
    op.drop_table('kid_profiles')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
    sa.Enum(name='learninglevel').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='userrole').drop(op.get_bind(), checkfirst=True)
