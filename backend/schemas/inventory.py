# backend/schemas/inventory.py
from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import date, datetime

from models.inventory import TransactionType, UnitStatus
from models.transfer import TransferStatus


class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Stock receipt; the product is created on the fly when the SKU is unknown
class InventoryCreate(BaseModel):
    product_sku: Optional[str] = None
    product_name: Optional[str] = None
    product_description: Optional[str] = None
    category_id: Optional[int] = None
    quantity: Optional[int] = None
    warehouse_id: Optional[int] = None
    warehouse_shelf_code: Optional[str] = None
    expiration_date: Optional[date] = None


class InventoryUpdate(BaseModel):
    quantity_on_hand: Optional[int] = None
    expiration_date: Optional[date] = None
    warehouse_shelf_id: Optional[int] = None


class InventoryDelete(BaseModel):
    reason: Optional[str] = None


# Flattened batch row used by every inventory listing
class InventoryView(BaseModel):
    inventory_id: int
    quantity_on_hand: int
    expiration_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    product_id: Optional[int] = None
    product_name: Optional[str] = None
    product_sku: Optional[str] = None
    product_description: Optional[str] = None
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    warehouse_id: Optional[int] = None
    warehouse_name: Optional[str] = None
    warehouse_location: Optional[str] = None
    warehouse_shelf_id: Optional[int] = None
    warehouse_shelf_code: Optional[str] = None


class InventoryDeletionCheck(BaseModel):
    inventory_id: int
    quantity: int
    expiration_date: Optional[date] = None
    warehouse_name: str
    warehouse_shelf_code: Optional[str] = None
    product_name: str
    product_sku: str
    can_delete: bool
    reason: Optional[str] = None


class TransferRequest(BaseModel):
    product_id: int
    quantity: int
    source_warehouse_id: int
    destination_warehouse_id: int


class TransferResponse(BaseModel):
    transfer_id: int
    product_id: int
    product_name: Optional[str] = None
    quantity: int
    source_warehouse_id: int
    source_warehouse_name: Optional[str] = None
    destination_warehouse_id: int
    destination_warehouse_name: Optional[str] = None
    status: TransferStatus
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class TransferPage(BaseModel):
    items: List[TransferResponse]
    total: int
    page: int
    page_size: int


class UnitCreate(BaseModel):
    serial_number: Optional[str] = None
    status: UnitStatus = UnitStatus.AVAILABLE


class UnitOut(ORMBase):
    id: int
    serial_number: str
    status: UnitStatus
    inventory_id: int
    created_at: Optional[datetime] = None


class TransactionOut(ORMBase):
    id: int
    quantity: int
    transaction_type: TransactionType
    product_id: int
    from_warehouse_id: Optional[int] = None
    to_warehouse_id: Optional[int] = None
    from_shelf_id: Optional[int] = None
    to_shelf_id: Optional[int] = None
    created_at: Optional[datetime] = None


class TransactionPage(BaseModel):
    items: List[TransactionOut]
    total: int
    page: int
    page_size: int
