"""initial schema: users, services, design presets, nail techs, appointments

Revision ID: 001
Revises:
Create Date: 2026-10-18 09:00:00.000000
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
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('external_id', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False, server_default=''),
        sa.Column('name', sa.String(), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_users_external_id', 'users', ['external_id'], unique=True)

    op.create_table(
        'services',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(), nullable=False, unique=True),
        sa.Column('price_cents', sa.Integer(), nullable=False),
        sa.Column('duration_min', sa.Integer(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('design_mode', sa.Enum('none', 'fixed', 'custom', name='designmode'), nullable=False, server_default='none'),
        sa.Column('design_price_cents', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "(design_mode = 'fixed' AND design_price_cents > 0) OR "
            "(design_mode <> 'fixed' AND design_price_cents IS NULL)",
            name='ck_services_design_price',
        ),
    )

    op.create_table(
        'design_price_options',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('service_id', sa.Integer(), sa.ForeignKey('services.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('label', sa.String(length=40), nullable=True),
        sa.Column('price_cents', sa.Integer(), nullable=False),
        sa.CheckConstraint('price_cents > 0', name='ck_design_price_options_positive'),
    )

    op.create_table(
        'nail_techs',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=100), nullable=False, unique=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        'appointments',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('scheduled_at', sa.DateTime(timezone=True), nullable=False, index=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('status', sa.Enum('confirmed', 'cancelled', 'done', name='appointmentstatus'), nullable=False, index=True),
        sa.Column('customer_name', sa.String(), nullable=False),
        sa.Column('phone_number', sa.String(), nullable=False),
        sa.Column('nail_tech_id', sa.Integer(), sa.ForeignKey('nail_techs.id'), nullable=True, index=True),
        sa.Column('service_id', sa.Integer(), sa.ForeignKey('services.id'), nullable=False, index=True),
        sa.Column('service_name', sa.String(), nullable=False),
        sa.Column('price_cents', sa.Integer(), nullable=False),
        sa.Column('has_design', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('design_price_cents', sa.Integer(), nullable=True),
        sa.Column('design_notes', sa.String(length=200), nullable=True),
        sa.Column('finished_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('total_cents', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('nail_tech_id', 'scheduled_at', name='uq_appointments_tech_slot'),
    )


def downgrade() -> None:
    op.drop_table('appointments')
    op.drop_table('nail_techs')
    op.drop_table('design_price_options')
    op.drop_table('services')
    op.drop_index('ix_users_external_id', table_name='users')
    op.drop_table('users')
    if op.get_bind().dialect.name == 'postgresql':
        op.execute('DROP TYPE appointmentstatus')
        op.execute('DROP TYPE designmode')
