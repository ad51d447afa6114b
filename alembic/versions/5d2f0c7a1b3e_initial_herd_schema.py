"""initial herd schema: farms, users, animals, health, production, genealogy

Revision ID: 5d2f0c7a1b3e
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5d2f0c7a1b3e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]
    if updated:
        columns.append(
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)
        )
    return columns


def upgrade() -> None:
    op.create_table(
        'farms',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('size', sa.Float(), nullable=False, server_default='0'),
        sa.Column('units', sa.String(length=16), nullable=False, server_default='hectares'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_farms')),
    )

    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('display_name', sa.String(length=255), nullable=True),
        sa.Column(
            'role',
            sa.Enum('ADMIN', 'MANAGER', 'WORKER', name='role', native_enum=False),
            nullable=False,
        ),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_users')),
        sa.UniqueConstraint('email', name='ux_users_email'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=False)

    op.create_table(
        'farm_memberships',
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['farm_id'], ['farms.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('user_id', 'farm_id', name=op.f('pk_farm_memberships')),
    )

    op.create_table(
        'animals',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('tag', sa.String(length=128), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('type', sa.String(length=16), nullable=False),
        sa.Column('breed', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('birth_date', sa.Date(), nullable=False),
        sa.Column('gender', sa.String(length=8), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('weight', sa.Float(), nullable=False, server_default='0'),
        sa.Column('purchase_date', sa.Date(), nullable=True),
        sa.Column('purchase_price', sa.Float(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(length=1024), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_animals')),
        sa.UniqueConstraint('farm_id', 'tag', name='ux_animals_farm_tag'),
        sa.UniqueConstraint('farm_id', 'id', name='ux_animals_farm_id'),
    )
    op.create_index(op.f('ix_animals_farm_id'), 'animals', ['farm_id'], unique=False)

    op.create_table(
        'health_records',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('animal_id', sa.Uuid(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('category', sa.String(length=16), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('medicine', sa.String(length=255), nullable=True),
        sa.Column('dosage', sa.String(length=255), nullable=True),
        sa.Column('veterinarian', sa.String(length=255), nullable=True),
        sa.Column('cost', sa.Float(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('next_dose_date', sa.Date(), nullable=True),
        sa.Column('repeat_every_days', sa.Integer(), nullable=True),
        sa.Column('reminder_advance_days', sa.Integer(), nullable=True),
        sa.Column('reminder_enabled', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_health_records')),
        sa.ForeignKeyConstraint(
            ['farm_id', 'animal_id'],
            ['animals.farm_id', 'animals.id'],
            name='fk_health_records_animal',
        ),
    )
    op.create_index('ix_health_records_farm_animal', 'health_records', ['farm_id', 'animal_id'])
    op.create_index('ix_health_records_farm_next_dose', 'health_records', ['farm_id', 'next_dose_date'])

    op.create_table(
        'production_records',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('animal_id', sa.Uuid(), nullable=False),
        sa.Column('recorded_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('category', sa.String(length=8), nullable=False),
        sa.Column('quantity', sa.Float(), nullable=False),
        sa.Column('quality', sa.String(length=64), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('shift', sa.String(length=16), nullable=True),
        sa.Column('milking_location', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_production_records')),
        sa.ForeignKeyConstraint(
            ['farm_id', 'animal_id'],
            ['animals.farm_id', 'animals.id'],
            name='fk_production_records_animal',
        ),
    )
    op.create_index('ix_production_records_farm_date', 'production_records', ['farm_id', 'date'])
    op.create_index('ix_production_records_farm_animal', 'production_records', ['farm_id', 'animal_id'])

    # Parent ids are weak references: no foreign keys
    op.create_table(
        'genealogy',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('animal_id', sa.Uuid(), nullable=False),
        sa.Column('father_id', sa.Uuid(), nullable=True),
        sa.Column('mother_id', sa.Uuid(), nullable=True),
        sa.Column('paternal_grandfather_id', sa.Uuid(), nullable=True),
        sa.Column('paternal_grandmother_id', sa.Uuid(), nullable=True),
        sa.Column('maternal_grandfather_id', sa.Uuid(), nullable=True),
        sa.Column('maternal_grandmother_id', sa.Uuid(), nullable=True),
        sa.Column('updated_by', sa.String(length=255), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_genealogy')),
        sa.UniqueConstraint('farm_id', 'animal_id', name='ux_genealogy_farm_animal'),
    )
    op.create_index(op.f('ix_genealogy_farm_id'), 'genealogy', ['farm_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_genealogy_farm_id'), table_name='genealogy')
    op.drop_table('genealogy')
    op.drop_index('ix_production_records_farm_animal', table_name='production_records')
    op.drop_index('ix_production_records_farm_date', table_name='production_records')
    op.drop_table('production_records')
    op.drop_index('ix_health_records_farm_next_dose', table_name='health_records')
    op.drop_index('ix_health_records_farm_animal', table_name='health_records')
    op.drop_table('health_records')
    op.drop_index(op.f('ix_animals_farm_id'), table_name='animals')
    op.drop_table('animals')
    op.drop_table('farm_memberships')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
    op.drop_table('farms')
