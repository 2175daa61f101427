# backend/models/inventory.py
import enum
from sqlalchemy import (
    Column, Integer, String, Date, DateTime, ForeignKey, Enum,
    CheckConstraint, UniqueConstraint, func,
)
from sqlalchemy.orm import relationship
from database import Base


# Batch of one product at one (warehouse, shelf, expiration) combination
class Inventory(Base):
    __tablename__ = "inventory"

    id = Column(Integer, primary_key=True, index=True)
    quantity_on_hand = Column(Integer, CheckConstraint("quantity_on_hand >= 0"), nullable=False, default=0)
    expiration_date = Column(Date, nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    warehouse_id = Column(Integer, ForeignKey("warehouse.id", ondelete="RESTRICT"), nullable=False, index=True)
    warehouse_shelf_id = Column(Integer, ForeignKey("warehouse_shelf.id", ondelete="SET NULL"), nullable=True)
    product_id = Column(Integer, ForeignKey("product.id", ondelete="RESTRICT"), nullable=False, index=True)

    # Bumped on every UPDATE; a stale version aborts the flush
    version = Column(Integer, nullable=False)

    warehouse = relationship("Warehouse", back_populates="inventory_items")
    warehouse_shelf = relationship("WarehouseShelf")
    product = relationship("Product")
    units = relationship(
        "InventoryUnit", back_populates="inventory",
        cascade="all, delete-orphan", passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint(
            "warehouse_id", "warehouse_shelf_id", "product_id", "expiration_date",
            name="uq_inventory_line",
        ),
    )
    __mapper_args__ = {"version_id_col": version}


class UnitStatus(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    RESERVED = "RESERVED"
    SHIPPED = "SHIPPED"


# Serialized unit tracked inside a batch (high-value parts)
class InventoryUnit(Base):
    __tablename__ = "inventory_unit"

    id = Column(Integer, primary_key=True, index=True)
    serial_number = Column(String, unique=True, nullable=False)
    status = Column(Enum(UnitStatus), nullable=False, default=UnitStatus.AVAILABLE, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    inventory_id = Column(Integer, ForeignKey("inventory.id", ondelete="CASCADE"), nullable=False, index=True)

    inventory = relationship("Inventory", back_populates="units")


# Movement classification for the ledger
class TransactionType(str, enum.Enum):
    INBOUND = "INBOUND"
    OUTBOUND = "OUTBOUND"
    TRANSFER = "TRANSFER"
    ADJUSTMENT = "ADJUSTMENT"


# Ledger row describing one quantity movement
class InventoryTransaction(Base):
    __tablename__ = "inventory_transaction"

    id = Column(Integer, primary_key=True, index=True)
    # Signed for ADJUSTMENT, positive otherwise
    quantity = Column(Integer, nullable=False)
    transaction_type = Column(Enum(TransactionType), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    product_id = Column(Integer, ForeignKey("product.id", ondelete="RESTRICT"), nullable=False, index=True)
    from_warehouse_id = Column(Integer, ForeignKey("warehouse.id", ondelete="SET NULL"), nullable=True)
    to_warehouse_id = Column(Integer, ForeignKey("warehouse.id", ondelete="SET NULL"), nullable=True)
    from_shelf_id = Column(Integer, ForeignKey("warehouse_shelf.id", ondelete="SET NULL"), nullable=True)
    to_shelf_id = Column(Integer, ForeignKey("warehouse_shelf.id", ondelete="SET NULL"), nullable=True)

    product = relationship("Product")
