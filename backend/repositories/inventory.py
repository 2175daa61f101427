# repositories/inventory.py
from datetime import date
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, Query, joinedload

from models.inventory import Inventory, InventoryUnit, InventoryTransaction, TransactionType
from models.product import Product


def _with_relations(query: Query) -> Query:
    return query.options(
        joinedload(Inventory.product).joinedload(Product.category),
        joinedload(Inventory.warehouse),
        joinedload(Inventory.warehouse_shelf),
    )


def get_by_id(db: Session, inventory_id: int) -> Optional[Inventory]:
    return _with_relations(db.query(Inventory)).filter(Inventory.id == inventory_id).first()


def find_batch(
    db: Session,
    warehouse_id: int,
    shelf_id: Optional[int],
    product_id: int,
    expiration_date: Optional[date],
) -> Optional[Inventory]:
    """Look up the batch for one (warehouse, shelf, product, expiration) line.

    NULL shelf and NULL expiration match each other, unlike a SQL unique index.
    """
    query = db.query(Inventory).filter(
        Inventory.warehouse_id == warehouse_id,
        Inventory.product_id == product_id,
    )
    if shelf_id is None:
        query = query.filter(Inventory.warehouse_shelf_id.is_(None))
    else:
        query = query.filter(Inventory.warehouse_shelf_id == shelf_id)
    if expiration_date is None:
        query = query.filter(Inventory.expiration_date.is_(None))
    else:
        query = query.filter(Inventory.expiration_date == expiration_date)
    return query.order_by(Inventory.id.asc()).first()


def list_by_warehouse(db: Session, warehouse_id: int) -> List[Inventory]:
    return (
        _with_relations(db.query(Inventory))
        .filter(Inventory.warehouse_id == warehouse_id)
        .order_by(Inventory.id.asc())
        .all()
    )


def list_by_warehouse_and_product(db: Session, warehouse_id: int, product_id: int) -> List[Inventory]:
    # Oldest batch first; transfers drain in this order
    return (
        db.query(Inventory)
        .filter(Inventory.warehouse_id == warehouse_id, Inventory.product_id == product_id)
        .order_by(Inventory.id.asc())
        .all()
    )


def _search_base(db: Session, warehouse_id: int) -> Query:
    return (
        _with_relations(db.query(Inventory))
        .join(Product, Inventory.product_id == Product.id)
        .filter(Inventory.warehouse_id == warehouse_id)
    )


def search_by_product_name(db: Session, warehouse_id: int, name: str) -> List[Inventory]:
    return (
        _search_base(db, warehouse_id)
        .filter(Product.name.ilike(f"%{name}%"))
        .order_by(Product.name.asc(), Inventory.expiration_date.asc())
        .all()
    )


def search_by_product_sku(db: Session, warehouse_id: int, sku: str) -> List[Inventory]:
    return (
        _search_base(db, warehouse_id)
        .filter(Product.sku.ilike(f"%{sku}%"))
        .order_by(Product.sku.asc(), Inventory.expiration_date.asc())
        .all()
    )


def filter_by_category(db: Session, warehouse_id: int, category_id: int) -> List[Inventory]:
    return (
        _search_base(db, warehouse_id)
        .filter(Product.category_id == category_id)
        .order_by(Product.name.asc(), Inventory.expiration_date.asc())
        .all()
    )


def advanced_search(
    db: Session,
    warehouse_id: int,
    name: Optional[str] = None,
    sku: Optional[str] = None,
    category_id: Optional[int] = None,
) -> List[Inventory]:
    """Batches matching ANY of the supplied filters (exact, case-insensitive)."""
    conditions = []
    if name:
        conditions.append(func.lower(Product.name) == name.lower())
    if sku:
        conditions.append(func.lower(Product.sku) == sku.lower())
    if category_id:
        conditions.append(Product.category_id == category_id)
    if not conditions:
        return []

    return (
        _search_base(db, warehouse_id)
        .filter(or_(*conditions))
        .order_by(Product.name.asc(), Inventory.expiration_date.asc())
        .all()
    )


# --- serialized units ---

def get_unit_by_serial(db: Session, serial_number: str) -> Optional[InventoryUnit]:
    return db.query(InventoryUnit).filter(InventoryUnit.serial_number == serial_number).first()


def list_units(db: Session, inventory_id: int) -> List[InventoryUnit]:
    return (
        db.query(InventoryUnit)
        .filter(InventoryUnit.inventory_id == inventory_id)
        .order_by(InventoryUnit.id.asc())
        .all()
    )


# --- movement ledger ---

def list_transactions(
    db: Session,
    warehouse_id: int,
    transaction_type: Optional[TransactionType] = None,
    order: str = "desc",
) -> Query:
    query = (
        db.query(InventoryTransaction)
        .options(joinedload(InventoryTransaction.product))
        .filter(or_(
            InventoryTransaction.from_warehouse_id == warehouse_id,
            InventoryTransaction.to_warehouse_id == warehouse_id,
        ))
    )
    if transaction_type:
        query = query.filter(InventoryTransaction.transaction_type == transaction_type)
    col = InventoryTransaction.id
    return query.order_by(col.desc() if order == "desc" else col.asc())
