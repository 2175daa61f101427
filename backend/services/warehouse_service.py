# services/warehouse_service.py
import logging
from typing import List, Optional

from models.log import AuditAction, EntityType
from models.warehouse import Warehouse, WarehouseShelf, WarehouseCapacitySnapshot
from repositories import warehouses as warehouse_repo
from services.base import BaseService
from utils.audit import write_log
from utils.errors import BadRequestError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 255
MAX_LOCATION_LENGTH = 500


def _clean_name(name: Optional[str]) -> str:
    if name is None or not name.strip():
        raise BadRequestError("Warehouse name cannot be null or empty")
    if len(name.strip()) > MAX_NAME_LENGTH:
        raise BadRequestError(f"Warehouse name cannot exceed {MAX_NAME_LENGTH} characters")
    return name.strip()


def _clean_location(location: Optional[str]) -> str:
    if location is None or not location.strip():
        raise BadRequestError("Warehouse location cannot be null or empty")
    if len(location.strip()) > MAX_LOCATION_LENGTH:
        raise BadRequestError(f"Warehouse location cannot exceed {MAX_LOCATION_LENGTH} characters")
    return location.strip()


def _check_capacity(capacity: Optional[int]):
    if capacity is None or capacity <= 0:
        raise BadRequestError("Warehouse capacity must be greater than 0")


class WarehouseService(BaseService):
    """Warehouse lifecycle, capacity dashboard, shelves and snapshots."""

    def create_warehouse(self, name: Optional[str], location: Optional[str], capacity: Optional[int]) -> Warehouse:
        name = _clean_name(name)
        location = _clean_location(location)
        _check_capacity(capacity)

        if warehouse_repo.exists_by_name(self.db, name):
            raise ConflictError(f"Warehouse with name '{name}' already exists")

        warehouse = Warehouse(name=name, location=location, max_capacity=capacity, is_active=True)
        self.db.add(warehouse)
        self._commit()
        self.db.refresh(warehouse)
        logger.info("Created warehouse %s (%s)", warehouse.id, warehouse.name)

        write_log(self.db, EntityType.WAREHOUSE, warehouse.id, AuditAction.CREATE)
        return warehouse

    def get_warehouse(self, warehouse_id: int) -> Warehouse:
        warehouse = warehouse_repo.get_by_id(self.db, warehouse_id)
        if not warehouse:
            raise NotFoundError(f"Warehouse with ID {warehouse_id} not found")
        return warehouse

    def list_warehouses(self, active: Optional[bool] = None) -> List[Warehouse]:
        if active is None:
            return warehouse_repo.list_all(self.db)
        return warehouse_repo.list_by_active(self.db, active)

    def update_warehouse(self, warehouse_id: int, patch: dict) -> Warehouse:
        """Apply the supplied fields only; keys with a None value are ignored.

        All fields are validated before any of them is assigned.
        """
        warehouse = self.get_warehouse(warehouse_id)
        updates = {}

        if patch.get("name") is not None:
            name = _clean_name(patch["name"])
            if warehouse_repo.exists_by_name_excluding_id(self.db, name, warehouse.id):
                raise ConflictError(f"Warehouse with name '{name}' already exists")
            updates["name"] = name

        if patch.get("location") is not None:
            updates["location"] = _clean_location(patch["location"])

        if patch.get("max_capacity") is not None:
            capacity = patch["max_capacity"]
            _check_capacity(capacity)
            used = warehouse_repo.total_quantity(self.db, warehouse.id)
            if capacity < used:
                raise ConflictError(
                    f"New capacity ({capacity}) cannot be less than current usage ({used})"
                )
            updates["max_capacity"] = capacity

        if patch.get("is_active") is not None:
            updates["is_active"] = patch["is_active"]

        labels = {"name": "Name", "location": "Location", "max_capacity": "Capacity", "is_active": "Active"}
        changes = []
        for field, value in updates.items():
            old = getattr(warehouse, field)
            if value != old:
                changes.append(f"{labels[field]}: {old} -> {value}")
            setattr(warehouse, field, value)

        self._commit()
        self.db.refresh(warehouse)
        logger.info("Updated warehouse %s", warehouse.id)

        write_log(
            self.db, EntityType.WAREHOUSE, warehouse.id, AuditAction.UPDATE,
            " | ".join(changes) or None,
        )
        return warehouse

    def _deletion_blocker(self, warehouse: Warehouse) -> Optional[str]:
        items = warehouse_repo.count_items(self.db, warehouse.id)
        if items > 0:
            return f"Warehouse contains {items} inventory items"

        transfers = warehouse_repo.count_transfers(self.db, warehouse.id)
        if transfers > 0:
            return f"Warehouse is referenced by {transfers} inventory transfers"
        return None

    def check_deletion_eligibility(self, warehouse_id: int) -> dict:
        warehouse = self.get_warehouse(warehouse_id)
        reason = self._deletion_blocker(warehouse)
        return {
            "can_delete": reason is None,
            "warehouse_id": warehouse.id,
            "warehouse_name": warehouse.name,
            "reason": reason,
        }

    def delete_warehouse(self, warehouse_id: int):
        warehouse = self.get_warehouse(warehouse_id)
        reason = self._deletion_blocker(warehouse)
        if reason:
            raise ConflictError(f"Cannot delete warehouse '{warehouse.name}': {reason}")

        name = warehouse.name
        self.db.delete(warehouse)
        self._commit()
        logger.info("Deleted warehouse %s (%s)", warehouse_id, name)

        write_log(
            self.db, EntityType.WAREHOUSE, warehouse_id, AuditAction.DELETE,
            f"Deleted warehouse {name}",
        )

    # --- capacity dashboard ---

    def _dashboard(self, warehouse: Warehouse) -> dict:
        used = warehouse_repo.total_quantity(self.db, warehouse.id)
        capacity = warehouse.max_capacity or 0
        return {
            "id": warehouse.id,
            "name": warehouse.name,
            "location": warehouse.location,
            "max_capacity": capacity,
            "current_capacity_used": used,
            "capacity_percentage": (used * 100.0 / capacity) if capacity > 0 else 0.0,
            "total_items_count": warehouse_repo.count_items(self.db, warehouse.id),
            "is_active": warehouse.is_active,
            "created_at": warehouse.created_at,
            "updated_at": warehouse.updated_at,
        }

    def get_dashboard(self, warehouse_id: int) -> dict:
        return self._dashboard(self.get_warehouse(warehouse_id))

    def list_dashboards(self, active: Optional[bool] = None) -> List[dict]:
        return [self._dashboard(w) for w in self.list_warehouses(active)]

    # --- shelves ---

    def create_shelf(self, warehouse_id: int, code: Optional[str], description: Optional[str] = None) -> WarehouseShelf:
        warehouse = self.get_warehouse(warehouse_id)
        if code is None or not code.strip():
            raise BadRequestError("Shelf code is required")
        code = code.strip()
        if warehouse_repo.get_shelf_by_code(self.db, warehouse.id, code):
            raise ConflictError(f"Shelf '{code}' already exists in warehouse '{warehouse.name}'")

        shelf = WarehouseShelf(warehouse_id=warehouse.id, code=code, description=description)
        self.db.add(shelf)
        self._commit()
        self.db.refresh(shelf)

        write_log(
            self.db, EntityType.WAREHOUSE, warehouse.id, AuditAction.UPDATE,
            f"Added shelf {code}",
        )
        return shelf

    def list_shelves(self, warehouse_id: int) -> List[WarehouseShelf]:
        self.get_warehouse(warehouse_id)
        return warehouse_repo.list_shelves(self.db, warehouse_id)

    # --- capacity snapshots ---

    def record_snapshot(self, warehouse_id: int) -> WarehouseCapacitySnapshot:
        figures = self.get_dashboard(warehouse_id)
        snapshot = WarehouseCapacitySnapshot(
            warehouse_id=warehouse_id,
            capacity_used_units=figures["current_capacity_used"],
            capacity_percent=int(round(figures["capacity_percentage"])),
            total_items=figures["total_items_count"],
        )
        self.db.add(snapshot)
        self._commit()
        self.db.refresh(snapshot)
        return snapshot

    def list_snapshots(self, warehouse_id: int, limit: int = 100) -> List[WarehouseCapacitySnapshot]:
        self.get_warehouse(warehouse_id)
        return warehouse_repo.list_snapshots(self.db, warehouse_id, limit)
