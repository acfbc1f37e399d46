"""Initial travel admin schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _document_columns() -> list[sa.Column]:
    return [
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade database schema."""
    # Create packages table
    op.create_table('packages',
        *_document_columns(),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('price', sa.Float(), nullable=True),
        sa.Column('days', sa.String(length=64), nullable=True),
        sa.Column('short_description', sa.Text(), nullable=True),
        sa.Column('thumbnail', sa.String(length=1024), nullable=True),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('highlights', sa.JSON(), nullable=False),
        sa.Column('inclusions', sa.JSON(), nullable=False),
        sa.Column('exclusions', sa.JSON(), nullable=False),
        sa.Column('itinerary', sa.JSON(), nullable=False),
        sa.Column('hotels', sa.JSON(), nullable=False),
        sa.Column('available_dates', sa.JSON(), nullable=False),
        sa.Column('transportation', sa.JSON(), nullable=False),
        sa.Column('terms_conditions', sa.JSON(), nullable=False),
        sa.Column('pricing', sa.JSON(), nullable=False),
        sa.Column('policies', sa.JSON(), nullable=False),
        sa.Column('location', sa.JSON(), nullable=False),
        sa.Column('activities', sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_packages_title'), 'packages', ['title'], unique=False)
    op.create_index(op.f('ix_packages_price'), 'packages', ['price'], unique=False)

    # Create hotels table
    op.create_table('hotels',
        *_document_columns(),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('price', sa.String(length=64), nullable=True),
        sa.Column('per_person', sa.String(length=64), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('reviews', sa.Float(), nullable=True),
        sa.Column('overview', sa.Text(), nullable=True),
        sa.Column('popular_amenities', sa.JSON(), nullable=False),
        sa.Column('highlights', sa.JSON(), nullable=False),
        sa.Column('type', sa.String(length=128), nullable=True),
        sa.Column('room_type', sa.String(length=128), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_hotels_title'), 'hotels', ['title'], unique=False)

    # Create visas table
    op.create_table('visas',
        *_document_columns(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('image', sa.String(length=1024), nullable=True),
        sa.Column('visa_type', sa.String(length=128), nullable=True),
        sa.Column('validity', sa.String(length=128), nullable=True),
        sa.Column('processing_time', sa.String(length=128), nullable=True),
        sa.Column('visa_mode', sa.String(length=128), nullable=True),
        sa.Column('country', sa.String(length=128), nullable=True),
        sa.Column('overview', sa.Text(), nullable=True),
        sa.Column('required_documents', sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_visas_name'), 'visas', ['name'], unique=False)

    # Create flights table
    op.create_table('flights',
        *_document_columns(),
        sa.Column('flight_number', sa.String(length=32), nullable=False),
        sa.Column('airline', sa.String(length=255), nullable=False),
        sa.Column('logo', sa.String(length=1024), nullable=True),
        sa.Column('departure', sa.JSON(), nullable=False),
        sa.Column('arrival', sa.JSON(), nullable=False),
        sa.Column('origin_code', sa.String(length=8), nullable=True),
        sa.Column('destination_code', sa.String(length=8), nullable=True),
        sa.Column('departure_date', sa.String(length=32), nullable=True),
        sa.Column('duration', sa.String(length=64), nullable=True),
        sa.Column('services', sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_flights_flight_number'), 'flights', ['flight_number'], unique=False)
    op.create_index(op.f('ix_flights_origin_code'), 'flights', ['origin_code'], unique=False)
    op.create_index(op.f('ix_flights_destination_code'), 'flights', ['destination_code'], unique=False)

    # Create enquiries table
    op.create_table('enquiries',
        *_document_columns(),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=64), nullable=True),
        sa.Column('adults', sa.Integer(), nullable=True),
        sa.Column('children', sa.Integer(), nullable=True),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_enquiries_date'), 'enquiries', ['date'], unique=False)

    # Create admins table
    op.create_table('admins',
        *_document_columns(),
        sa.Column('username', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_admins_username'), 'admins', ['username'], unique=True)


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_index(op.f('ix_admins_username'), table_name='admins')
    op.drop_table('admins')
    op.drop_index(op.f('ix_enquiries_date'), table_name='enquiries')
    op.drop_table('enquiries')
    op.drop_index(op.f('ix_flights_destination_code'), table_name='flights')
    op.drop_index(op.f('ix_flights_origin_code'), table_name='flights')
    op.drop_index(op.f('ix_flights_flight_number'), table_name='flights')
    op.drop_table('flights')
    op.drop_index(op.f('ix_visas_name'), table_name='visas')
    op.drop_table('visas')
    op.drop_index(op.f('ix_hotels_title'), table_name='hotels')
    op.drop_table('hotels')
    op.drop_index(op.f('ix_packages_price'), table_name='packages')
    op.drop_index(op.f('ix_packages_title'), table_name='packages')
    op.drop_table('packages')
