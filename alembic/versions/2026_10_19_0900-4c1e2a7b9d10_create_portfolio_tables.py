"""create portfolio and market data tables

Revision ID: 4c1e2a7b9d10
Revises:
Create Date: 2026-10-19 09:00:00.000000+00:00

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '4c1e2a7b9d10'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    ]


def upgrade() -> None:
    # Market data
    op.create_table(
        'instruments',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('short_code', sa.String(length=12), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('market', sa.String(length=20), nullable=True),
        sa.Column('last_synced_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_instruments'),
    )
    op.create_index('ix_instruments_id', 'instruments', ['id'])
    op.create_index('ix_instruments_short_code', 'instruments', ['short_code'], unique=True)

    op.create_table(
        'instrument_prices',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('instrument_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('price_date', sa.Date(), nullable=False),
        sa.Column('price', sa.Numeric(precision=18, scale=2), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_instrument_prices'),
        sa.ForeignKeyConstraint(
            ['instrument_id'], ['instruments.id'],
            name='fk_instrument_prices_instrument_id_instruments',
            ondelete='CASCADE',
        ),
        sa.UniqueConstraint('instrument_id', 'price_date', name='uq_instrument_price_date'),
    )
    op.create_index('ix_instrument_prices_id', 'instrument_prices', ['id'])
    op.create_index('ix_instrument_prices_instrument_id', 'instrument_prices', ['instrument_id'])
    op.create_index('idx_instrument_price_date', 'instrument_prices', ['instrument_id', 'price_date'])

    # Portfolio
    op.create_table(
        'sections',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('owner', sa.String(length=50), nullable=False),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('create_date', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_sections'),
    )
    op.create_index('ix_sections_id', 'sections', ['id'])
    op.create_index('ix_sections_owner', 'sections', ['owner'])

    op.create_table(
        'holdings',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('section_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('instrument_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('buy_avg_price', sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column('buy_total_amount', sa.Numeric(precision=20, scale=2), nullable=False),
        sa.Column('buy_date', sa.Date(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_holdings'),
        sa.ForeignKeyConstraint(
            ['section_id'], ['sections.id'], name='fk_holdings_section_id_sections'
        ),
        sa.ForeignKeyConstraint(
            ['instrument_id'], ['instruments.id'],
            name='fk_holdings_instrument_id_instruments',
            ondelete='RESTRICT',
        ),
    )
    op.create_index('ix_holdings_id', 'holdings', ['id'])
    op.create_index('ix_holdings_section_id', 'holdings', ['section_id'])
    op.create_index('ix_holdings_instrument_id', 'holdings', ['instrument_id'])

    op.create_table(
        'evaluations',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('holding_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('evaluation_rate', sa.Numeric(precision=12, scale=4), nullable=False),
        sa.Column('evaluation_amount', sa.Numeric(precision=20, scale=2), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_evaluations'),
        sa.ForeignKeyConstraint(
            ['holding_id'], ['holdings.id'], name='fk_evaluations_holding_id_holdings'
        ),
    )
    op.create_index('ix_evaluations_id', 'evaluations', ['id'])
    op.create_index('ix_evaluations_holding_id', 'evaluations', ['holding_id'], unique=True)

    op.create_table(
        'total_ratings',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('section_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('total_buy_amount', sa.Numeric(precision=20, scale=2), nullable=False),
        sa.Column('total_evaluation_amount', sa.Numeric(precision=20, scale=2), nullable=False),
        sa.Column('total_evaluation_rate', sa.Numeric(precision=12, scale=4), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_total_ratings'),
        sa.ForeignKeyConstraint(
            ['section_id'], ['sections.id'], name='fk_total_ratings_section_id_sections'
        ),
    )
    op.create_index('ix_total_ratings_id', 'total_ratings', ['id'])
    op.create_index('ix_total_ratings_section_id', 'total_ratings', ['section_id'], unique=True)


def downgrade() -> None:
    # Children before parents
    for table in ('total_ratings', 'evaluations', 'holdings', 'sections'):
        op.drop_table(table)

    op.drop_index('idx_instrument_price_date', 'instrument_prices')
    op.drop_table('instrument_prices')
    op.drop_table('instruments')
