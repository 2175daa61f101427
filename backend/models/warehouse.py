# backend/models/warehouse.py
from sqlalchemy import (
    Column, Integer, String, Text, Boolean, ForeignKey, DateTime,
    CheckConstraint, UniqueConstraint, func,
)
from sqlalchemy.orm import relationship
from database import Base

# Physical site holding inventory batches. Capacity is a scalar unit count.
class Warehouse(Base):
    __tablename__ = "warehouse"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    location = Column(String(500), nullable=False)
    max_capacity = Column(Integer, CheckConstraint("max_capacity > 0"), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    # Bumped on every UPDATE; transfers touch the destination row
    version = Column(Integer, nullable=False)

    shelves = relationship(
        "WarehouseShelf", back_populates="warehouse",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    inventory_items = relationship("Inventory", back_populates="warehouse")
    alerts = relationship(
        "Alert", back_populates="warehouse",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    snapshots = relationship(
        "WarehouseCapacitySnapshot", back_populates="warehouse",
        cascade="all, delete-orphan", passive_deletes=True,
    )

    __mapper_args__ = {"version_id_col": version}


# Internal location (rack / bin / cage) inside a warehouse
class WarehouseShelf(Base):
    __tablename__ = "warehouse_shelf"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    warehouse_id = Column(Integer, ForeignKey("warehouse.id", ondelete="CASCADE"), nullable=False, index=True)

    warehouse = relationship("Warehouse", back_populates="shelves")

    __table_args__ = (
        UniqueConstraint("warehouse_id", "code", name="uq_location_per_warehouse"),
    )


# Point-in-time copy of the capacity dashboard figures
class WarehouseCapacitySnapshot(Base):
    __tablename__ = "warehouse_capacity_snapshot"

    id = Column(Integer, primary_key=True, index=True)
    snapshot_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    capacity_used_units = Column(Integer, nullable=False)
    capacity_percent = Column(Integer, nullable=False)
    total_items = Column(Integer, nullable=False)
    warehouse_id = Column(Integer, ForeignKey("warehouse.id", ondelete="CASCADE"), nullable=False, index=True)

    warehouse = relationship("Warehouse", back_populates="snapshots")
