# backend/schemas/warehouse.py
from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime


class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Request body for creating a warehouse; content rules are checked by the service
class WarehouseCreate(BaseModel):
    name: Optional[str] = None
    location: Optional[str] = None
    max_capacity: Optional[int] = None


# Schema for partial warehouse updates (PATCH), absent fields stay unchanged
class WarehouseUpdate(BaseModel):
    name: Optional[str] = None
    location: Optional[str] = None
    max_capacity: Optional[int] = None
    is_active: Optional[bool] = None


class WarehouseOut(ORMBase):
    id: int
    name: str
    location: str
    max_capacity: int
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Warehouse with freshly computed capacity figures
class WarehouseDashboard(BaseModel):
    id: int
    name: str
    location: str
    max_capacity: int
    current_capacity_used: int
    capacity_percentage: float
    total_items_count: int
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class WarehouseDeletionCheck(BaseModel):
    can_delete: bool
    warehouse_id: int
    warehouse_name: str
    reason: Optional[str] = None


class ShelfCreate(BaseModel):
    code: Optional[str] = None
    description: Optional[str] = None


class ShelfOut(ORMBase):
    id: int
    code: str
    description: Optional[str] = None
    warehouse_id: int
    created_at: Optional[datetime] = None


class CapacitySnapshotOut(ORMBase):
    id: int
    warehouse_id: int
    snapshot_at: Optional[datetime] = None
    capacity_used_units: int
    capacity_percent: int
    total_items: int
