# repositories/transfers.py
from typing import Optional

from sqlalchemy.orm import Session, Query, joinedload

from models.transfer import InventoryTransfer, TransferStatus


def _with_relations(query: Query) -> Query:
    return query.options(
        joinedload(InventoryTransfer.product),
        joinedload(InventoryTransfer.source_warehouse),
        joinedload(InventoryTransfer.destination_warehouse),
    )


def get_transfer(db: Session, transfer_id: int) -> Optional[InventoryTransfer]:
    return _with_relations(db.query(InventoryTransfer)).filter(InventoryTransfer.id == transfer_id).first()


def list_transfers(
    db: Session,
    source_warehouse_id: Optional[int] = None,
    destination_warehouse_id: Optional[int] = None,
    product_id: Optional[int] = None,
    status: Optional[TransferStatus] = None,
) -> Query:
    query = _with_relations(db.query(InventoryTransfer))

    if source_warehouse_id is not None:
        query = query.filter(InventoryTransfer.source_warehouse_id == source_warehouse_id)
    if destination_warehouse_id is not None:
        query = query.filter(InventoryTransfer.destination_warehouse_id == destination_warehouse_id)
    if product_id is not None:
        query = query.filter(InventoryTransfer.product_id == product_id)
    if status is not None:
        query = query.filter(InventoryTransfer.status == status)

    return query.order_by(InventoryTransfer.id.desc())
