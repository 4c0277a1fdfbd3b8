"""storefront schema: catalog, orders, settings and accounts

Revision ID: 5b1e2c7d9a40
Revises:
Create Date: 2026-10-19 09:30:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '5b1e2c7d9a40'
down_revision = None
branch_labels = None
depends_on = None

BIGINT = sa.BigInteger().with_variant(sa.Integer(), 'sqlite')


def upgrade():
    op.create_table(
        'user_account',
        sa.Column('id', BIGINT, primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20)),
        sa.Column('name', sa.String(100)),
        sa.Column('phone', sa.String(15)),
        sa.Column('address', sa.Text()),
        sa.Column('created_at', sa.DateTime()),
        sa.Column('updated_at', sa.DateTime()),
    )
    op.create_table(
        'category',
        sa.Column('id', BIGINT, primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('name_ta', sa.String(100)),
        sa.Column('icon', sa.String(20)),
        sa.Column('created_at', sa.DateTime()),
    )
    op.create_table(
        'product',
        sa.Column('id', BIGINT, primary_key=True),
        sa.Column('category_id', BIGINT, sa.ForeignKey('category.id', ondelete='SET NULL')),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('name_ta', sa.String(100)),
        sa.Column('description', sa.Text()),
        sa.Column('description_ta', sa.Text()),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('offer_price', sa.Numeric(10, 2)),
        sa.Column('unit', sa.String(20)),
        sa.Column('weights', sa.JSON()),
        sa.Column('image_url', sa.String(255)),
        sa.Column('in_stock', sa.Boolean()),
        sa.Column('is_offer', sa.Boolean()),
        sa.Column('is_best_seller', sa.Boolean()),
        sa.Column('is_fresh', sa.Boolean()),
        sa.Column('created_at', sa.DateTime()),
        sa.Column('updated_at', sa.DateTime()),
    )
    op.create_index('ix_product_stock_category', 'product', ['in_stock', 'category_id'])
    op.create_table(
        'order',
        sa.Column('id', BIGINT, primary_key=True),
        sa.Column('order_id', sa.String(20), nullable=False, unique=True),
        sa.Column('user_id', BIGINT, sa.ForeignKey('user_account.id')),
        sa.Column('customer_name', sa.String(100), nullable=False),
        sa.Column('phone', sa.String(15), nullable=False),
        sa.Column('email', sa.String(255)),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('items', sa.JSON(), nullable=False),
        sa.Column('total_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('delivery_option', sa.String(20), nullable=False),
        sa.Column('payment_method', sa.String(10), nullable=False),
        sa.Column('order_status', sa.String(20), nullable=False),
        sa.Column('payment_status', sa.String(20), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_order_status_created', 'order', ['order_status', 'created_at'])
    op.create_table(
        'setting',
        sa.Column('key', sa.String(64), primary_key=True),
        sa.Column('value', sa.Text()),
        sa.Column('updated_at', sa.DateTime()),
    )


def downgrade():
    op.drop_table('setting')
    op.drop_index('ix_order_status_created', table_name='order')
    op.drop_table('order')
    op.drop_index('ix_product_stock_category', table_name='product')
    op.drop_table('product')
    op.drop_table('category')
    op.drop_table('user_account')
