"""Create menu, orders, loyalty, timers and admin tables

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-03-01 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    ]


def _create_timer_table(name):
    op.create_table(
        name,
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('time', sa.String(length=5), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(f'ix_{name}_id', name, ['id'])
    op.create_index(f'ix_{name}_day_of_week', name, ['day_of_week'])


def upgrade():
    # Admin accounts
    op.create_table(
        'admin_users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_admin_users_id', 'admin_users', ['id'])
    op.create_index('ix_admin_users_username', 'admin_users', ['username'], unique=True)

    # Catalog
    for table in ('breads', 'toppings'):
        columns = [
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(length=200), nullable=False),
            sa.Column('price', sa.Numeric(10, 3), nullable=False),
            sa.Column('image_url', sa.String(length=500), nullable=True),
        ]
        if table == 'toppings':
            columns.append(
                sa.Column('category', sa.String(length=20), nullable=False, server_default='extra')
            )
        singular = table[:-1]
        op.create_table(
            table,
            *columns,
            *_timestamps(),
            sa.PrimaryKeyConstraint('id'),
            sa.CheckConstraint('price >= 0', name=f'{singular}_price_non_negative'),
        )
        op.create_index(f'ix_{table}_id', table, ['id'])
        op.create_index(f'ix_{table}_name', table, ['name'])
    op.create_index('ix_toppings_category', 'toppings', ['category'])

    # Orders, one row per sandwich
    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('customer_name', sa.String(length=200), nullable=False),
        sa.Column('phone_number', sa.String(length=8), nullable=False),
        sa.Column('bread_id', sa.Integer(), nullable=True),
        sa.Column('is_double_bread', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('toppings', sa.JSON(), nullable=False),
        sa.Column('total_price', sa.Numeric(10, 3), nullable=False),
        sa.Column('status', sa.String(length=30), nullable=False, server_default='awaiting_confirmation'),
        sa.Column('payment_method', sa.String(length=10), nullable=False, server_default='cash'),
        sa.Column('note', sa.String(length=50), nullable=True),
        sa.Column('delivery_method', sa.String(length=10), nullable=False, server_default='pickup'),
        sa.Column('pickup_time', sa.DateTime(), nullable=True),
        sa.Column('shipping_time', sa.DateTime(), nullable=True),
        sa.Column('delivered_at', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['bread_id'], ['breads.id'], ondelete='SET NULL'),
        sa.CheckConstraint('total_price >= 0', name='order_total_price_non_negative'),
    )
    op.create_index('ix_orders_id', 'orders', ['id'])
    op.create_index('ix_orders_phone_number', 'orders', ['phone_number'])
    op.create_index('ix_orders_bread_id', 'orders', ['bread_id'])
    op.create_index('ix_orders_status', 'orders', ['status'])
    op.create_index('ix_orders_phone_created', 'orders', ['phone_number', 'created_at'])

    # Loyalty
    op.create_table(
        'loyalty_points',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('phone_number', sa.String(length=8), nullable=False),
        sa.Column('customer_name', sa.String(length=200), nullable=False),
        sa.Column('total_points', sa.Numeric(12, 3), nullable=False, server_default='0'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('total_points >= 0', name='loyalty_points_non_negative'),
    )
    op.create_index('ix_loyalty_points_id', 'loyalty_points', ['id'])
    op.create_index('ix_loyalty_points_phone_number', 'loyalty_points', ['phone_number'], unique=True)

    op.create_table(
        'points_transactions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('phone_number', sa.String(length=8), nullable=False),
        sa.Column('amount', sa.Numeric(12, 3), nullable=False),
        sa.Column('type', sa.String(length=30), nullable=False),
        sa.Column('reason', sa.String(length=200), nullable=True),
        sa.Column('related_order_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['related_order_id'], ['orders.id'], ondelete='SET NULL'),
    )
    op.create_index('ix_points_transactions_id', 'points_transactions', ['id'])
    op.create_index('ix_points_transactions_phone_number', 'points_transactions', ['phone_number'])
    op.create_index('ix_points_transactions_type', 'points_transactions', ['type'])
    op.create_index('ix_points_transactions_related_order_id', 'points_transactions', ['related_order_id'])
    op.create_index('ix_points_transactions_created_at', 'points_transactions', ['created_at'])
    op.create_index(
        'ix_points_transactions_phone_created', 'points_transactions', ['phone_number', 'created_at']
    )

    # Weekly slots. Table names are kept from the deployed schema:
    # shipping_timers holds pickup slots.
    _create_timer_table('shipping_timers')
    _create_timer_table('shipping_timers_delivery')


def downgrade():
    op.drop_table('shipping_timers_delivery')
    op.drop_table('shipping_timers')
    op.drop_table('points_transactions')
    op.drop_table('loyalty_points')
    op.drop_table('orders')
    op.drop_table('toppings')
    op.drop_table('breads')
    op.drop_table('admin_users')
