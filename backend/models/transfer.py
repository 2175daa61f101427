# backend/models/transfer.py
import enum
from sqlalchemy import Column, Integer, DateTime, ForeignKey, Enum, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base

# Workflow states of a warehouse-to-warehouse transfer
class TransferStatus(str, enum.Enum):
    PENDING = "PENDING"
    IN_TRANSIT = "IN_TRANSIT"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

# Record of quantity moved between two warehouses
class InventoryTransfer(Base):
    __tablename__ = "inventory_transfer"

    id = Column(Integer, primary_key=True, index=True)
    quantity = Column(Integer, CheckConstraint("quantity > 0"), nullable=False)
    status = Column(Enum(TransferStatus), nullable=False, default=TransferStatus.PENDING, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    completed_at = Column(DateTime(timezone=True), nullable=True)
    product_id = Column(Integer, ForeignKey("product.id", ondelete="RESTRICT"), nullable=False, index=True)
    source_warehouse_id = Column(Integer, ForeignKey("warehouse.id", ondelete="RESTRICT"), nullable=False, index=True)
    destination_warehouse_id = Column(Integer, ForeignKey("warehouse.id", ondelete="RESTRICT"), nullable=False, index=True)

    product = relationship("Product")
    source_warehouse = relationship("Warehouse", foreign_keys=[source_warehouse_id])
    destination_warehouse = relationship("Warehouse", foreign_keys=[destination_warehouse_id])
