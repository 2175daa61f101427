# repositories/warehouses.py
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from models.warehouse import Warehouse, WarehouseShelf, WarehouseCapacitySnapshot
from models.inventory import Inventory
from models.transfer import InventoryTransfer


def get_by_id(db: Session, warehouse_id: int) -> Optional[Warehouse]:
    return db.query(Warehouse).filter(Warehouse.id == warehouse_id).first()


def list_all(db: Session) -> List[Warehouse]:
    return db.query(Warehouse).order_by(Warehouse.id.asc()).all()


def list_by_active(db: Session, is_active: bool) -> List[Warehouse]:
    return (
        db.query(Warehouse)
        .filter(Warehouse.is_active == is_active)
        .order_by(Warehouse.id.asc())
        .all()
    )


def exists_by_name(db: Session, name: str) -> bool:
    return db.query(Warehouse.id).filter(Warehouse.name == name).first() is not None


def exists_by_name_excluding_id(db: Session, name: str, warehouse_id: int) -> bool:
    return (
        db.query(Warehouse.id)
        .filter(Warehouse.name == name, Warehouse.id != warehouse_id)
        .first()
        is not None
    )


def total_quantity(db: Session, warehouse_id: int) -> int:
    """Sum of quantity_on_hand over every batch in the warehouse."""
    total = (
        db.query(func.sum(Inventory.quantity_on_hand))
        .filter(Inventory.warehouse_id == warehouse_id)
        .scalar()
    )
    return int(total or 0)


def count_items(db: Session, warehouse_id: int) -> int:
    return db.query(Inventory).filter(Inventory.warehouse_id == warehouse_id).count()


def count_transfers(db: Session, warehouse_id: int) -> int:
    return (
        db.query(InventoryTransfer)
        .filter(or_(
            InventoryTransfer.source_warehouse_id == warehouse_id,
            InventoryTransfer.destination_warehouse_id == warehouse_id,
        ))
        .count()
    )


# --- shelves ---

def get_shelf(db: Session, shelf_id: int) -> Optional[WarehouseShelf]:
    return db.query(WarehouseShelf).filter(WarehouseShelf.id == shelf_id).first()


def get_shelf_by_code(db: Session, warehouse_id: int, code: str) -> Optional[WarehouseShelf]:
    return (
        db.query(WarehouseShelf)
        .filter(WarehouseShelf.warehouse_id == warehouse_id, WarehouseShelf.code == code)
        .first()
    )


def list_shelves(db: Session, warehouse_id: int) -> List[WarehouseShelf]:
    return (
        db.query(WarehouseShelf)
        .filter(WarehouseShelf.warehouse_id == warehouse_id)
        .order_by(WarehouseShelf.code.asc())
        .all()
    )


# --- capacity snapshots ---

def list_snapshots(db: Session, warehouse_id: int, limit: int = 100) -> List[WarehouseCapacitySnapshot]:
    return (
        db.query(WarehouseCapacitySnapshot)
        .filter(WarehouseCapacitySnapshot.warehouse_id == warehouse_id)
        .order_by(WarehouseCapacitySnapshot.snapshot_at.desc(), WarehouseCapacitySnapshot.id.desc())
        .limit(limit)
        .all()
    )
