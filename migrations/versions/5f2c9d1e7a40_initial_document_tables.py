"""initial products, variants and students tables

Revision ID: 5f2c9d1e7a40
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5f2c9d1e7a40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'products',
        sa.Column('id', sa.String(length=24), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_products_category', 'products', ['category'])
    op.create_index('ix_products_created_at', 'products', ['created_at'])

    op.create_table(
        'variants',
        sa.Column('id', sa.String(length=24), nullable=False),
        sa.Column('product_id', sa.String(length=24), nullable=False),
        sa.Column('color', sa.String(length=50), nullable=False),
        sa.Column('size', sa.String(length=20), nullable=False),
        sa.Column('stock', sa.Integer(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_variants_product_id', 'variants', ['product_id'])

    op.create_table(
        'students',
        sa.Column('id', sa.String(length=24), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('age', sa.Integer(), nullable=False),
        sa.Column('course', sa.String(length=100), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_students_created_at', 'students', ['created_at'])


def downgrade():
    op.drop_index('ix_students_created_at', table_name='students')
    op.drop_table('students')
    op.drop_index('ix_variants_product_id', table_name='variants')
    op.drop_table('variants')
    op.drop_index('ix_products_created_at', table_name='products')
    op.drop_index('ix_products_category', table_name='products')
    op.drop_table('products')
