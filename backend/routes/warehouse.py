# backend/routes/warehouse.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from database import get_db
from services.warehouse_service import WarehouseService
import schemas.warehouse as schemas

router = APIRouter(prefix="/warehouses", tags=["Warehouses"])


@router.post("", response_model=schemas.WarehouseOut, status_code=status.HTTP_201_CREATED)
def create_warehouse(payload: schemas.WarehouseCreate, db: Session = Depends(get_db)):
    return WarehouseService(db).create_warehouse(payload.name, payload.location, payload.max_capacity)


@router.get("", response_model=List[schemas.WarehouseOut])
def list_warehouses(
    active: Optional[bool] = Query(None, description="Filter by active flag"),
    db: Session = Depends(get_db),
):
    return WarehouseService(db).list_warehouses(active)


# ==========================================
#  CAPACITY DASHBOARD
# ==========================================
@router.get("/dashboard", response_model=List[schemas.WarehouseDashboard])
def list_dashboards(
    active: Optional[bool] = Query(None, description="Filter by active flag"),
    db: Session = Depends(get_db),
):
    return WarehouseService(db).list_dashboards(active)


@router.get("/id/{warehouse_id}", response_model=schemas.WarehouseOut)
def get_warehouse(warehouse_id: int, db: Session = Depends(get_db)):
    return WarehouseService(db).get_warehouse(warehouse_id)


@router.get("/id/{warehouse_id}/dashboard", response_model=schemas.WarehouseDashboard)
def get_dashboard(warehouse_id: int, db: Session = Depends(get_db)):
    return WarehouseService(db).get_dashboard(warehouse_id)


@router.patch("/id/{warehouse_id}", response_model=schemas.WarehouseOut)
def update_warehouse(warehouse_id: int, payload: schemas.WarehouseUpdate, db: Session = Depends(get_db)):
    return WarehouseService(db).update_warehouse(warehouse_id, payload.model_dump(exclude_unset=True))


@router.get("/id/{warehouse_id}/deletion-check", response_model=schemas.WarehouseDeletionCheck)
def check_deletion(warehouse_id: int, db: Session = Depends(get_db)):
    return WarehouseService(db).check_deletion_eligibility(warehouse_id)


@router.delete("/id/{warehouse_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_warehouse(warehouse_id: int, db: Session = Depends(get_db)):
    WarehouseService(db).delete_warehouse(warehouse_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ==========================================
#  SHELVES
# ==========================================
@router.get("/id/{warehouse_id}/shelves", response_model=List[schemas.ShelfOut])
def list_shelves(warehouse_id: int, db: Session = Depends(get_db)):
    return WarehouseService(db).list_shelves(warehouse_id)


@router.post(
    "/id/{warehouse_id}/shelves",
    response_model=schemas.ShelfOut,
    status_code=status.HTTP_201_CREATED,
)
def create_shelf(warehouse_id: int, payload: schemas.ShelfCreate, db: Session = Depends(get_db)):
    return WarehouseService(db).create_shelf(warehouse_id, payload.code, payload.description)


# ==========================================
#  CAPACITY SNAPSHOTS
# ==========================================
@router.get("/id/{warehouse_id}/capacity-snapshots", response_model=List[schemas.CapacitySnapshotOut])
def list_snapshots(
    warehouse_id: int,
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    return WarehouseService(db).list_snapshots(warehouse_id, limit)


@router.post(
    "/id/{warehouse_id}/capacity-snapshots",
    response_model=schemas.CapacitySnapshotOut,
    status_code=status.HTTP_201_CREATED,
)
def record_snapshot(warehouse_id: int, db: Session = Depends(get_db)):
    return WarehouseService(db).record_snapshot(warehouse_id)
