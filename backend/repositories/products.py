# repositories/products.py
from typing import List, Optional

from sqlalchemy.orm import Session, Query, joinedload

from models.product import Product, Category
from models.inventory import Inventory, InventoryTransaction
from models.transfer import InventoryTransfer


def get_category(db: Session, category_id: int) -> Optional[Category]:
    return db.query(Category).filter(Category.id == category_id).first()


def category_exists_by_name(db: Session, name: str) -> bool:
    return db.query(Category.id).filter(Category.name == name).first() is not None


def list_categories(db: Session) -> List[Category]:
    return db.query(Category).order_by(Category.name.asc()).all()


def get_product(db: Session, product_id: int) -> Optional[Product]:
    return (
        db.query(Product)
        .options(joinedload(Product.category))
        .filter(Product.id == product_id)
        .first()
    )


def get_by_sku(db: Session, sku: str) -> Optional[Product]:
    return db.query(Product).filter(Product.sku == sku).first()


def search_products(
    db: Session,
    name: Optional[str] = None,
    sku: Optional[str] = None,
    category_id: Optional[int] = None,
    is_active: Optional[bool] = None,
    sort_by: str = "id",
    order: str = "asc",
) -> Query:
    query = db.query(Product).options(joinedload(Product.category))

    if name:
        query = query.filter(Product.name.ilike(f"%{name}%"))
    if sku:
        query = query.filter(Product.sku.ilike(f"%{sku}%"))
    if category_id is not None:
        query = query.filter(Product.category_id == category_id)
    if is_active is not None:
        query = query.filter(Product.is_active == is_active)

    allowed = {"id": Product.id, "name": Product.name, "sku": Product.sku, "created_at": Product.created_at}
    col = allowed.get(sort_by, Product.id)
    return query.order_by(col.asc() if order == "asc" else col.desc())


def has_inventory(db: Session, product_id: int) -> bool:
    return db.query(Inventory.id).filter(Inventory.product_id == product_id).first() is not None


def has_transfers(db: Session, product_id: int) -> bool:
    return (
        db.query(InventoryTransfer.id)
        .filter(InventoryTransfer.product_id == product_id)
        .first()
        is not None
    )


def has_transactions(db: Session, product_id: int) -> bool:
    return (
        db.query(InventoryTransaction.id)
        .filter(InventoryTransaction.product_id == product_id)
        .first()
        is not None
    )
