"""create products table

Revision ID: 0001_create_products
Revises: 
Create Date: 2026-10-18 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

revision = '0001_create_products'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('availability', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.CheckConstraint('price > 0', name='ck_products_price_pos'),
        sa.CheckConstraint("name <> ''", name='ck_products_name_not_empty'),
    )
    op.create_index('ix_products_id', 'products', ['id'])


def downgrade():
    op.drop_index('ix_products_id', table_name='products')
    op.drop_table('products')
