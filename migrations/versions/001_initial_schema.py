"""Initial schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2025-01-06

Adds:
- schedules table with inline weekly hours and a single-active partial index
- date_overrides table for holidays, closures and special hours
- products and batch_options for the menu
- admins and token_blacklist for dashboard access
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'schedules',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('weekly_hours', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )

    # At most one active schedule
    op.create_index(
        'uq_schedules_single_active',
        'schedules',
        ['is_active'],
        unique=True,
        postgresql_where=sa.text('is_active'),
        sqlite_where=sa.text('is_active'),
    )

    op.create_table(
        'date_overrides',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('date', sa.String(10), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('is_open', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('open_time', sa.String(5), nullable=True),
        sa.Column('close_time', sa.String(5), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_date_overrides_date', 'date_overrides', ['date'])

    op.create_table(
        'products',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('category', sa.String(20), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('available', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('image_url', sa.String(500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_products_category', 'products', ['category'])

    op.create_table(
        'batch_options',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('size', sa.Integer(), nullable=False),
        sa.Column('discount', sa.Numeric(5, 2), nullable=False),
        sa.Column('name', sa.String(50), nullable=False),
    )

    op.create_table(
        'admins',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='admin'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_admins_email', 'admins', ['email'], unique=True)

    op.create_table(
        'token_blacklist',
        sa.Column('token_hash', sa.String(64), primary_key=True),
        sa.Column('blacklisted_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('idx_token_blacklist_expires', 'token_blacklist', ['expires_at'])


def downgrade() -> None:
    op.drop_index('idx_token_blacklist_expires', table_name='token_blacklist')
    op.drop_table('token_blacklist')
    op.drop_index('ix_admins_email', table_name='admins')
    op.drop_table('admins')
    op.drop_table('batch_options')
    op.drop_index('ix_products_category', table_name='products')
    op.drop_table('products')
    op.drop_index('ix_date_overrides_date', table_name='date_overrides')
    op.drop_table('date_overrides')
    op.drop_index('uq_schedules_single_active', table_name='schedules')
    op.drop_table('schedules')
