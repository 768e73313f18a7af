"""add email verification and password reset tokens to users

Revision ID: 8b61e0f4c2d9
Revises: 3f2a9c1d7b54
Create Date: 2026-10-20 09:41:17.220914
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '8b61e0f4c2d9'
down_revision: Union[str, None] = '3f2a9c1d7b54'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    with op.batch_alter_table('users') as batch_op:
        batch_op.add_column(sa.Column('email_verification_token', sa.String(length=64), nullable=True))
        batch_op.add_column(sa.Column('email_verification_expires', sa.DateTime(timezone=True), nullable=True))
        batch_op.add_column(sa.Column('password_reset_token', sa.String(length=64), nullable=True))
        batch_op.add_column(sa.Column('password_reset_expires', sa.DateTime(timezone=True), nullable=True))
        batch_op.create_index('ix_users_email_verification_token', ['email_verification_token'])
        batch_op.create_index('ix_users_password_reset_token', ['password_reset_token'])


def downgrade() -> None:
    """Downgrade schema."""
    with op.batch_alter_table('users') as batch_op:
        batch_op.drop_index('ix_users_password_reset_token')
        batch_op.drop_index('ix_users_email_verification_token')
        batch_op.drop_column('password_reset_expires')
        batch_op.drop_column('password_reset_token')
        batch_op.drop_column('email_verification_expires')
        batch_op.drop_column('email_verification_token')
