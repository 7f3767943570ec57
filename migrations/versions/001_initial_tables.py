"""Create realms and user profiles tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create realms and user profiles tables"""

    # 1. Create realms table
    op.create_table('realms',
        sa.Column('realm_id', sa.String(64), nullable=False, comment='Unique realm identifier'),
        sa.Column('name', sa.String(255), nullable=False, comment='Realm name, e.g. EXAMPLE.COM'),
        sa.Column('description', sa.String(1000), nullable=True, comment='Free text description'),
        sa.Column('version', sa.Integer(), nullable=False, comment='Optimistic concurrency token'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),

        sa.PrimaryKeyConstraint('realm_id', name='pk_realms'),
        sa.UniqueConstraint('name', name='uq_realms_name'),
    )

    # 2. Create user_profiles table
    op.create_table('user_profiles',
        sa.Column('user_id', sa.String(64), nullable=False, comment='Unique user identifier'),
        sa.Column('realm_id', sa.String(64), nullable=False, comment='Owning realm'),
        sa.Column('username', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('first_name', sa.String(255), nullable=False),
        sa.Column('last_name', sa.String(255), nullable=False),
        sa.Column('birthday', sa.Date(), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False, comment='Optimistic concurrency token'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),

        sa.PrimaryKeyConstraint('user_id', name='pk_user_profiles'),
        sa.ForeignKeyConstraint(
            ['realm_id'], ['realms.realm_id'],
            name='fk_user_profiles_realm_id_realms',
        ),
        sa.UniqueConstraint('realm_id', 'username', name='uq_user_profiles_realm_username'),
    )

    op.create_index('ix_user_profiles_realm_id', 'user_profiles', ['realm_id'])


def downgrade() -> None:
    """Drop realms and user profiles tables"""
    op.drop_index('ix_user_profiles_realm_id', table_name='user_profiles')
    op.drop_table('user_profiles')
    op.drop_table('realms')
