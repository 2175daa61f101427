"""Initial inventory schema

Revision ID: 3f1c9a2b7d10
Revises:
Create Date: 2026-10-17 09:12:31.402118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# Revision identifiers used by Alembic
revision: str = '3f1c9a2b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'warehouse',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('location', sa.String(length=500), nullable=False),
        sa.Column('max_capacity', sa.Integer(), sa.CheckConstraint('max_capacity > 0'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )
    op.create_index(op.f('ix_warehouse_id'), 'warehouse', ['id'], unique=False)

    op.create_table(
        'category',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )
    op.create_index(op.f('ix_category_id'), 'category', ['id'], unique=False)

    op.create_table(
        'activity_log',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('entity_id', sa.Integer(), nullable=False),
        sa.Column('entity_type', sa.Enum('WAREHOUSE', 'INVENTORY', 'PRODUCT', 'ALERT', name='entitytype'), nullable=False),
        sa.Column('action', sa.Enum('CREATE', 'UPDATE', 'DELETE', name='auditaction'), nullable=False),
        sa.Column('details', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_activity_log_id'), 'activity_log', ['id'], unique=False)
    op.create_index(op.f('ix_activity_log_entity_id'), 'activity_log', ['entity_id'], unique=False)
    op.create_index(op.f('ix_activity_log_entity_type'), 'activity_log', ['entity_type'], unique=False)
    op.create_index(op.f('ix_activity_log_action'), 'activity_log', ['action'], unique=False)
    op.create_index(op.f('ix_activity_log_created_at'), 'activity_log', ['created_at'], unique=False)

    op.create_table(
        'warehouse_shelf',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('code', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('warehouse_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['warehouse_id'], ['warehouse.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('warehouse_id', 'code', name='uq_location_per_warehouse'),
    )
    op.create_index(op.f('ix_warehouse_shelf_id'), 'warehouse_shelf', ['id'], unique=False)
    op.create_index(op.f('ix_warehouse_shelf_warehouse_id'), 'warehouse_shelf', ['warehouse_id'], unique=False)

    op.create_table(
        'warehouse_capacity_snapshot',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('snapshot_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('capacity_used_units', sa.Integer(), nullable=False),
        sa.Column('capacity_percent', sa.Integer(), nullable=False),
        sa.Column('total_items', sa.Integer(), nullable=False),
        sa.Column('warehouse_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['warehouse_id'], ['warehouse.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_warehouse_capacity_snapshot_id'), 'warehouse_capacity_snapshot', ['id'], unique=False)
    op.create_index(op.f('ix_warehouse_capacity_snapshot_snapshot_at'), 'warehouse_capacity_snapshot', ['snapshot_at'], unique=False)
    op.create_index(op.f('ix_warehouse_capacity_snapshot_warehouse_id'), 'warehouse_capacity_snapshot', ['warehouse_id'], unique=False)

    op.create_table(
        'product',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('sku', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('category_id', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['category_id'], ['category.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_product_id'), 'product', ['id'], unique=False)
    op.create_index(op.f('ix_product_name'), 'product', ['name'], unique=False)
    op.create_index(op.f('ix_product_sku'), 'product', ['sku'], unique=True)
    op.create_index(op.f('ix_product_category_id'), 'product', ['category_id'], unique=False)

    op.create_table(
        'inventory',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('quantity_on_hand', sa.Integer(), sa.CheckConstraint('quantity_on_hand >= 0'), nullable=False),
        sa.Column('expiration_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('warehouse_id', sa.Integer(), nullable=False),
        sa.Column('warehouse_shelf_id', sa.Integer(), nullable=True),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['warehouse_id'], ['warehouse.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['warehouse_shelf_id'], ['warehouse_shelf.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['product_id'], ['product.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint(
            'warehouse_id', 'warehouse_shelf_id', 'product_id', 'expiration_date',
            name='uq_inventory_line',
        ),
    )
    op.create_index(op.f('ix_inventory_id'), 'inventory', ['id'], unique=False)
    op.create_index(op.f('ix_inventory_expiration_date'), 'inventory', ['expiration_date'], unique=False)
    op.create_index(op.f('ix_inventory_warehouse_id'), 'inventory', ['warehouse_id'], unique=False)
    op.create_index(op.f('ix_inventory_product_id'), 'inventory', ['product_id'], unique=False)

    op.create_table(
        'inventory_unit',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('serial_number', sa.String(), nullable=False),
        sa.Column('status', sa.Enum('AVAILABLE', 'RESERVED', 'SHIPPED', name='unitstatus'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('inventory_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['inventory_id'], ['inventory.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('serial_number'),
    )
    op.create_index(op.f('ix_inventory_unit_id'), 'inventory_unit', ['id'], unique=False)
    op.create_index(op.f('ix_inventory_unit_status'), 'inventory_unit', ['status'], unique=False)
    op.create_index(op.f('ix_inventory_unit_inventory_id'), 'inventory_unit', ['inventory_id'], unique=False)

    op.create_table(
        'inventory_transaction',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('transaction_type', sa.Enum('INBOUND', 'OUTBOUND', 'TRANSFER', 'ADJUSTMENT', name='transactiontype'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('from_warehouse_id', sa.Integer(), nullable=True),
        sa.Column('to_warehouse_id', sa.Integer(), nullable=True),
        sa.Column('from_shelf_id', sa.Integer(), nullable=True),
        sa.Column('to_shelf_id', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['product_id'], ['product.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['from_warehouse_id'], ['warehouse.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['to_warehouse_id'], ['warehouse.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['from_shelf_id'], ['warehouse_shelf.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['to_shelf_id'], ['warehouse_shelf.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_inventory_transaction_id'), 'inventory_transaction', ['id'], unique=False)
    op.create_index(op.f('ix_inventory_transaction_transaction_type'), 'inventory_transaction', ['transaction_type'], unique=False)
    op.create_index(op.f('ix_inventory_transaction_created_at'), 'inventory_transaction', ['created_at'], unique=False)
    op.create_index(op.f('ix_inventory_transaction_product_id'), 'inventory_transaction', ['product_id'], unique=False)

    op.create_table(
        'inventory_transfer',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Integer(), sa.CheckConstraint('quantity > 0'), nullable=False),
        sa.Column('status', sa.Enum('PENDING', 'IN_TRANSIT', 'COMPLETED', 'CANCELLED', name='transferstatus'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('source_warehouse_id', sa.Integer(), nullable=False),
        sa.Column('destination_warehouse_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['product_id'], ['product.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['source_warehouse_id'], ['warehouse.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['destination_warehouse_id'], ['warehouse.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_inventory_transfer_id'), 'inventory_transfer', ['id'], unique=False)
    op.create_index(op.f('ix_inventory_transfer_status'), 'inventory_transfer', ['status'], unique=False)
    op.create_index(op.f('ix_inventory_transfer_product_id'), 'inventory_transfer', ['product_id'], unique=False)
    op.create_index(op.f('ix_inventory_transfer_source_warehouse_id'), 'inventory_transfer', ['source_warehouse_id'], unique=False)
    op.create_index(op.f('ix_inventory_transfer_destination_warehouse_id'), 'inventory_transfer', ['destination_warehouse_id'], unique=False)

    op.create_table(
        'alert',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('type', sa.Enum('CAPACITY_NEAR_LIMIT', 'CAPACITY_EXCEEDED', 'OBSOLETE', 'LOSS_RISK', name='alerttype'), nullable=False),
        sa.Column('severity', sa.Enum('INFO', 'WARNING', 'CRITICAL', name='alertseverity'), nullable=False),
        sa.Column('is_resolved', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('resolved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('warehouse_id', sa.Integer(), nullable=True),
        sa.Column('inventory_id', sa.Integer(), nullable=True),
        sa.CheckConstraint('warehouse_id IS NOT NULL OR inventory_id IS NOT NULL', name='chk_alert_has_reference'),
        sa.ForeignKeyConstraint(['warehouse_id'], ['warehouse.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['inventory_id'], ['inventory.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_alert_id'), 'alert', ['id'], unique=False)
    op.create_index(op.f('ix_alert_type'), 'alert', ['type'], unique=False)
    op.create_index(op.f('ix_alert_created_at'), 'alert', ['created_at'], unique=False)
    op.create_index(op.f('ix_alert_warehouse_id'), 'alert', ['warehouse_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('alert')
    op.drop_table('inventory_transfer')
    op.drop_table('inventory_transaction')
    op.drop_table('inventory_unit')
    op.drop_table('inventory')
    op.drop_table('product')
    op.drop_table('warehouse_capacity_snapshot')
    op.drop_table('warehouse_shelf')
    op.drop_table('activity_log')
    op.drop_table('category')
    op.drop_table('warehouse')
