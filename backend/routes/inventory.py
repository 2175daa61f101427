# backend/routes/inventory.py
from typing import List, Optional
from fastapi import APIRouter, Body, Depends, Query, Response, status
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from models.inventory import TransactionType
from models.transfer import TransferStatus
from services.inventory_service import InventoryService, to_view, transfer_view
from utils.pagination import paginate
import schemas.inventory as schemas

router = APIRouter(prefix="/inventories", tags=["Inventory"])


# =========================
# BATCHES
# =========================
@router.post("", response_model=schemas.InventoryView, status_code=status.HTTP_201_CREATED)
def add_inventory_item(payload: schemas.InventoryCreate, db: Session = Depends(get_db)):
    return to_view(InventoryService(db).add_inventory_item(payload))


@router.patch("/id/{inventory_id}", response_model=schemas.InventoryView)
def update_inventory_item(inventory_id: int, payload: schemas.InventoryUpdate, db: Session = Depends(get_db)):
    inventory = InventoryService(db).update_inventory_item(inventory_id, payload.model_dump(exclude_unset=True))
    return to_view(inventory)


@router.get("/id/{inventory_id}/deletion-check", response_model=schemas.InventoryDeletionCheck)
def check_deletion(inventory_id: int, db: Session = Depends(get_db)):
    return InventoryService(db).check_deletion_eligibility(inventory_id)


@router.delete("/id/{inventory_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_inventory_item(
    inventory_id: int,
    payload: Optional[schemas.InventoryDelete] = Body(None),
    db: Session = Depends(get_db),
):
    InventoryService(db).delete_inventory_item(inventory_id, payload.reason if payload else None)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =========================
# SERIALIZED UNITS
# =========================
@router.get("/id/{inventory_id}/units", response_model=List[schemas.UnitOut])
def list_units(inventory_id: int, db: Session = Depends(get_db)):
    return InventoryService(db).list_units(inventory_id)


@router.post("/id/{inventory_id}/units", response_model=schemas.UnitOut, status_code=status.HTTP_201_CREATED)
def register_unit(inventory_id: int, payload: schemas.UnitCreate, db: Session = Depends(get_db)):
    return InventoryService(db).register_unit(inventory_id, payload.serial_number, payload.status)


# =========================
# WAREHOUSE VIEWS
# =========================
@router.get("/warehouses/id/{warehouse_id}", response_model=List[schemas.InventoryView])
def view_by_warehouse(warehouse_id: int, db: Session = Depends(get_db)):
    return InventoryService(db).view_by_warehouse(warehouse_id)


@router.get("/warehouses/id/{warehouse_id}/search/name", response_model=List[schemas.InventoryView])
def search_by_product_name(
    warehouse_id: int,
    name: Optional[str] = Query(None, description="Partial product name"),
    db: Session = Depends(get_db),
):
    return InventoryService(db).search_by_product_name(warehouse_id, name)


@router.get("/warehouses/id/{warehouse_id}/search/sku", response_model=List[schemas.InventoryView])
def search_by_product_sku(
    warehouse_id: int,
    sku: Optional[str] = Query(None, description="Partial product SKU"),
    db: Session = Depends(get_db),
):
    return InventoryService(db).search_by_product_sku(warehouse_id, sku)


@router.get("/warehouses/id/{warehouse_id}/filter/category", response_model=List[schemas.InventoryView])
def filter_by_category(
    warehouse_id: int,
    category_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    return InventoryService(db).filter_by_category(warehouse_id, category_id)


@router.get("/warehouses/id/{warehouse_id}/search/advanced", response_model=List[schemas.InventoryView])
def advanced_search(
    warehouse_id: int,
    name: Optional[str] = Query(None, description="Exact product name, case-insensitive"),
    sku: Optional[str] = Query(None, description="Exact product SKU, case-insensitive"),
    category_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    return InventoryService(db).advanced_search(warehouse_id, name, sku, category_id)


@router.get("/warehouses/id/{warehouse_id}/transactions", response_model=schemas.TransactionPage)
def list_transactions(
    warehouse_id: int,
    transaction_type: Optional[TransactionType] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    order: str = Query("desc", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
):
    query = InventoryService(db).list_transactions(warehouse_id, transaction_type, order)
    return paginate(query, page, page_size)


# =========================
# TRANSFERS
# =========================
@router.post("/transfer", response_model=schemas.TransferResponse, status_code=status.HTTP_201_CREATED)
def transfer_inventory(payload: schemas.TransferRequest, db: Session = Depends(get_db)):
    return InventoryService(db).transfer_inventory(
        payload.product_id,
        payload.quantity,
        payload.source_warehouse_id,
        payload.destination_warehouse_id,
    )


@router.get("/transfers", response_model=schemas.TransferPage)
def list_transfers(
    source_warehouse_id: Optional[int] = Query(None),
    destination_warehouse_id: Optional[int] = Query(None),
    product_id: Optional[int] = Query(None),
    transfer_status: Optional[TransferStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    query = InventoryService(db).list_transfers(
        source_warehouse_id, destination_warehouse_id, product_id, transfer_status,
    )
    result = paginate(query, page, page_size)
    result["items"] = [transfer_view(t) for t in result["items"]]
    return result


@router.get("/transfers/{transfer_id}", response_model=schemas.TransferResponse)
def get_transfer(transfer_id: int, db: Session = Depends(get_db)):
    return transfer_view(InventoryService(db).get_transfer(transfer_id))
