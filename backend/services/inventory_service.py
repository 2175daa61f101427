# services/inventory_service.py
import logging
from datetime import date, datetime, timezone
from typing import List, Optional

from models.inventory import (
    Inventory, InventoryTransaction, InventoryUnit, TransactionType, UnitStatus,
)
from models.log import AuditAction, EntityType
from models.transfer import InventoryTransfer, TransferStatus
from models.warehouse import Warehouse
from repositories import inventory as inventory_repo
from repositories import products as product_repo
from repositories import transfers as transfer_repo
from repositories import warehouses as warehouse_repo
from services.alert_service import AlertService
from services.base import BaseService
from services.product_service import ProductService
from utils.audit import write_log
from utils.errors import BadRequestError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)


def to_view(inventory: Inventory) -> dict:
    """Flatten a batch with its product, category, warehouse and shelf."""
    product = inventory.product
    category = product.category if product else None
    warehouse = inventory.warehouse
    shelf = inventory.warehouse_shelf
    return {
        "inventory_id": inventory.id,
        "quantity_on_hand": inventory.quantity_on_hand,
        "expiration_date": inventory.expiration_date,
        "created_at": inventory.created_at,
        "updated_at": inventory.updated_at,
        "product_id": product.id if product else None,
        "product_name": product.name if product else None,
        "product_sku": product.sku if product else None,
        "product_description": product.description if product else None,
        "category_id": category.id if category else None,
        "category_name": category.name if category else None,
        "warehouse_id": warehouse.id if warehouse else None,
        "warehouse_name": warehouse.name if warehouse else None,
        "warehouse_location": warehouse.location if warehouse else None,
        "warehouse_shelf_id": shelf.id if shelf else None,
        "warehouse_shelf_code": shelf.code if shelf else None,
    }


def transfer_view(transfer: InventoryTransfer) -> dict:
    return {
        "transfer_id": transfer.id,
        "product_id": transfer.product_id,
        "product_name": transfer.product.name if transfer.product else None,
        "quantity": transfer.quantity,
        "source_warehouse_id": transfer.source_warehouse_id,
        "source_warehouse_name": transfer.source_warehouse.name if transfer.source_warehouse else None,
        "destination_warehouse_id": transfer.destination_warehouse_id,
        "destination_warehouse_name": (
            transfer.destination_warehouse.name if transfer.destination_warehouse else None
        ),
        "status": transfer.status,
        "created_at": transfer.created_at,
        "completed_at": transfer.completed_at,
    }


class InventoryService(BaseService):
    """Inventory batches, searches, transfers, serialized units and the movement ledger."""

    def __init__(self, db):
        super().__init__(db)
        self.product_service = ProductService(db)
        self.alert_service = AlertService(db)

    # --- lookups ---

    def _get_warehouse(self, warehouse_id: int, label: str = "Warehouse") -> Warehouse:
        warehouse = warehouse_repo.get_by_id(self.db, warehouse_id)
        if not warehouse:
            raise NotFoundError(f"{label} with ID {warehouse_id} not found")
        return warehouse

    def get_inventory(self, inventory_id: int) -> Inventory:
        inventory = inventory_repo.get_by_id(self.db, inventory_id)
        if not inventory:
            raise NotFoundError(f"Inventory with ID {inventory_id} not found")
        return inventory

    # --- add / update / delete ---

    def add_inventory_item(self, data) -> Inventory:
        """Receive stock into a warehouse, merging into a matching batch if one exists.

        ``data`` carries product_sku, product_name, product_description,
        category_id, quantity, warehouse_id, warehouse_shelf_code and
        expiration_date.
        """
        if data.product_sku is None or not data.product_sku.strip():
            raise BadRequestError("Product SKU cannot be null or empty")
        if data.quantity is None or data.quantity <= 0:
            raise BadRequestError("Quantity must be greater than 0")
        if data.warehouse_id is None or data.warehouse_id <= 0:
            raise BadRequestError("Warehouse ID must be greater than 0")

        warehouse = self._get_warehouse(data.warehouse_id)
        if not warehouse.is_active:
            raise ConflictError(f"Cannot add inventory to inactive warehouse: {warehouse.name}")

        product, product_created = self.product_service.stage_product(
            data.product_sku, data.product_name, data.product_description, data.category_id,
        )

        shelf = None
        if data.warehouse_shelf_code:
            shelf = warehouse_repo.get_shelf_by_code(self.db, warehouse.id, data.warehouse_shelf_code)
            if not shelf:
                raise NotFoundError(
                    f"Warehouse shelf with code '{data.warehouse_shelf_code}' "
                    f"not found in warehouse '{warehouse.name}'"
                )

        inventory = inventory_repo.find_batch(
            self.db, warehouse.id, shelf.id if shelf else None, product.id, data.expiration_date,
        )
        if inventory:
            inventory.quantity_on_hand += data.quantity
            action = AuditAction.UPDATE
            details = (
                f"Added {data.quantity} units of {product.name} "
                f"to existing inventory in warehouse {warehouse.name}"
            )
        else:
            inventory = Inventory(
                quantity_on_hand=data.quantity,
                expiration_date=data.expiration_date,
                product=product,
                warehouse=warehouse,
                warehouse_shelf=shelf,
            )
            self.db.add(inventory)
            action = AuditAction.CREATE
            details = f"Created new inventory: {data.quantity} units of {product.name} in warehouse {warehouse.name}"
            if shelf:
                details += f" at shelf {shelf.code}"

        self.db.add(InventoryTransaction(
            quantity=data.quantity,
            transaction_type=TransactionType.INBOUND,
            product_id=product.id,
            to_warehouse_id=warehouse.id,
            to_shelf_id=shelf.id if shelf else None,
        ))

        self._flush()
        alerts = self.alert_service.open_capacity_alerts(warehouse)
        self._commit()
        logger.info(
            "Received %d units of %s into warehouse %s (batch %s)",
            data.quantity, product.sku, warehouse.id, inventory.id,
        )

        if product_created:
            self.product_service.audit_created(product)
        write_log(self.db, EntityType.INVENTORY, inventory.id, action, details)
        self.alert_service.audit_opened(alerts, warehouse.name)
        return self.get_inventory(inventory.id)

    def update_inventory_item(self, inventory_id: int, patch: dict) -> Inventory:
        """Change quantity, expiration or shelf of one batch; None values are ignored.

        All fields are validated before any of them is assigned.
        """
        inventory = self.get_inventory(inventory_id)

        old_quantity = inventory.quantity_on_hand
        old_expiration = inventory.expiration_date
        old_shelf_id = inventory.warehouse_shelf_id

        new_quantity = patch.get("quantity_on_hand")
        if new_quantity is not None and new_quantity < 0:
            raise BadRequestError(f"Quantity cannot be negative: {new_quantity}")

        new_expiration = patch.get("expiration_date")
        if new_expiration is not None and new_expiration < date.today():
            raise BadRequestError(f"Expiration date cannot be in the past: {new_expiration}")

        new_shelf_id = patch.get("warehouse_shelf_id")
        shelf = inventory.warehouse_shelf
        if new_shelf_id is not None:
            shelf = warehouse_repo.get_shelf(self.db, new_shelf_id)
            if not shelf:
                raise NotFoundError(f"Warehouse shelf with ID {new_shelf_id} not found")
            if shelf.warehouse_id != inventory.warehouse_id:
                raise BadRequestError(
                    "Cannot relocate inventory to shelf in different warehouse. "
                    f"Current warehouse: {inventory.warehouse_id}, Target warehouse: {shelf.warehouse_id}"
                )

        target_shelf_id = shelf.id if shelf else None
        target_expiration = new_expiration if new_expiration is not None else old_expiration
        clash = inventory_repo.find_batch(
            self.db, inventory.warehouse_id, target_shelf_id, inventory.product_id, target_expiration,
        )
        if clash and clash.id != inventory.id:
            raise ConflictError(
                f"Inventory already exists at location warehouse/{inventory.warehouse_id}"
                f"/shelf/{target_shelf_id}"
                f" with product {inventory.product_id} and expiration date {target_expiration}"
            )

        if new_quantity is not None:
            inventory.quantity_on_hand = new_quantity
        inventory.expiration_date = target_expiration
        inventory.warehouse_shelf = shelf

        changes = []
        if new_quantity is not None and new_quantity != old_quantity:
            changes.append(f"Quantity: {old_quantity} -> {new_quantity}")
            self.db.add(InventoryTransaction(
                quantity=new_quantity - old_quantity,
                transaction_type=TransactionType.ADJUSTMENT,
                product_id=inventory.product_id,
                from_warehouse_id=inventory.warehouse_id,
                to_warehouse_id=inventory.warehouse_id,
                to_shelf_id=target_shelf_id,
            ))
        if new_expiration is not None and new_expiration != old_expiration:
            changes.append(f"Expiration: {old_expiration} -> {new_expiration}")
        if new_shelf_id is not None and new_shelf_id != old_shelf_id:
            changes.append(f"Shelf: {old_shelf_id} -> {new_shelf_id}")

        self._commit()

        if changes:
            logger.info("Updated inventory %s: %s", inventory_id, "; ".join(changes))
            write_log(self.db, EntityType.INVENTORY, inventory_id, AuditAction.UPDATE, " | ".join(changes))
        return self.get_inventory(inventory_id)

    def check_deletion_eligibility(self, inventory_id: int) -> dict:
        inventory = self.get_inventory(inventory_id)
        return {
            "inventory_id": inventory.id,
            "quantity": inventory.quantity_on_hand,
            "expiration_date": inventory.expiration_date,
            "warehouse_name": inventory.warehouse.name,
            "warehouse_shelf_code": inventory.warehouse_shelf.code if inventory.warehouse_shelf else None,
            "product_name": inventory.product.name,
            "product_sku": inventory.product.sku,
            "can_delete": True,
            "reason": None,
        }

    def delete_inventory_item(self, inventory_id: int, reason: Optional[str] = None):
        inventory = self.get_inventory(inventory_id)

        quantity = inventory.quantity_on_hand
        product = inventory.product
        shelf = inventory.warehouse_shelf
        details = "Deleted %d units of %s (%s) from %s/%s. Reason: %s" % (
            quantity,
            product.name,
            product.sku,
            inventory.warehouse.name,
            shelf.code if shelf else "None",
            reason or "",
        )

        if quantity > 0:
            self.db.add(InventoryTransaction(
                quantity=quantity,
                transaction_type=TransactionType.OUTBOUND,
                product_id=product.id,
                from_warehouse_id=inventory.warehouse_id,
                from_shelf_id=shelf.id if shelf else None,
            ))
        self.db.delete(inventory)
        self._commit()
        logger.info("Deleted inventory %s (%d units)", inventory_id, quantity)

        write_log(self.db, EntityType.INVENTORY, inventory_id, AuditAction.DELETE, details)

    # --- views ---

    def view_by_warehouse(self, warehouse_id: int) -> List[dict]:
        self._get_warehouse(warehouse_id)
        return [to_view(i) for i in inventory_repo.list_by_warehouse(self.db, warehouse_id)]

    def search_by_product_name(self, warehouse_id: int, name: Optional[str]) -> List[dict]:
        self._get_warehouse(warehouse_id)
        if name is None or not name.strip():
            raise BadRequestError("Product name search term cannot be empty")
        return [to_view(i) for i in inventory_repo.search_by_product_name(self.db, warehouse_id, name.strip())]

    def search_by_product_sku(self, warehouse_id: int, sku: Optional[str]) -> List[dict]:
        self._get_warehouse(warehouse_id)
        if sku is None or not sku.strip():
            raise BadRequestError("Product SKU search term cannot be empty")
        return [to_view(i) for i in inventory_repo.search_by_product_sku(self.db, warehouse_id, sku.strip())]

    def filter_by_category(self, warehouse_id: int, category_id: Optional[int]) -> List[dict]:
        self._get_warehouse(warehouse_id)
        if category_id is None or category_id <= 0:
            raise BadRequestError("Category ID must be a positive number")
        return [to_view(i) for i in inventory_repo.filter_by_category(self.db, warehouse_id, category_id)]

    def advanced_search(
        self,
        warehouse_id: int,
        name: Optional[str] = None,
        sku: Optional[str] = None,
        category_id: Optional[int] = None,
    ) -> List[dict]:
        self._get_warehouse(warehouse_id)
        name = name.strip() if name and name.strip() else None
        sku = sku.strip() if sku and sku.strip() else None
        category_id = category_id if category_id and category_id > 0 else None
        if not (name or sku or category_id):
            raise BadRequestError(
                "At least one search/filter parameter (name, sku, or category_id) is required"
            )
        results = inventory_repo.advanced_search(self.db, warehouse_id, name, sku, category_id)
        return [to_view(i) for i in results]

    # --- transfers ---

    def transfer_inventory(
        self,
        product_id: int,
        quantity: Optional[int],
        source_warehouse_id: int,
        destination_warehouse_id: int,
    ) -> dict:
        """Move stock of one product between two active warehouses in a single commit.

        Source batches are drained oldest first; the destination's first batch
        of the product absorbs the quantity, or a new unshelved batch is created.
        """
        if quantity is None or quantity <= 0:
            raise BadRequestError("Transfer quantity must be greater than 0")
        if source_warehouse_id == destination_warehouse_id:
            raise BadRequestError("Source and destination warehouses must be different")

        source = self._get_warehouse(source_warehouse_id, "Source warehouse")
        if not source.is_active:
            raise ConflictError(f"Cannot transfer from inactive warehouse: {source.name}")
        destination = self._get_warehouse(destination_warehouse_id, "Destination warehouse")
        if not destination.is_active:
            raise ConflictError(f"Cannot transfer to inactive warehouse: {destination.name}")

        product = product_repo.get_product(self.db, product_id)
        if not product:
            raise NotFoundError(f"Product with ID {product_id} not found")

        source_batches = inventory_repo.list_by_warehouse_and_product(self.db, source.id, product.id)
        available = sum(b.quantity_on_hand for b in source_batches)
        if available < quantity:
            raise ConflictError(
                f"Insufficient inventory in source warehouse. Available: {available}, Requested: {quantity}"
            )

        free = destination.max_capacity - warehouse_repo.total_quantity(self.db, destination.id)
        if free < quantity:
            raise ConflictError(
                f"Insufficient capacity in destination warehouse. Available capacity: {free}, Required: {quantity}"
            )
        # Bumps the destination version so concurrent transfers into it conflict at flush
        destination.updated_at = datetime.now(timezone.utc)

        remaining = quantity
        for batch in source_batches:
            if remaining <= 0:
                break
            taken = min(remaining, batch.quantity_on_hand)
            if taken:
                batch.quantity_on_hand -= taken
                remaining -= taken

        destination_batches = inventory_repo.list_by_warehouse_and_product(self.db, destination.id, product.id)
        if destination_batches:
            target = destination_batches[0]
            target.quantity_on_hand += quantity
        else:
            target = Inventory(
                quantity_on_hand=quantity,
                product_id=product.id,
                warehouse_id=destination.id,
            )
            self.db.add(target)

        transfer = InventoryTransfer(
            quantity=quantity,
            status=TransferStatus.PENDING,
            product_id=product.id,
            source_warehouse_id=source.id,
            destination_warehouse_id=destination.id,
        )
        self.db.add(transfer)
        self.db.add(InventoryTransaction(
            quantity=quantity,
            transaction_type=TransactionType.TRANSFER,
            product_id=product.id,
            from_warehouse_id=source.id,
            to_warehouse_id=destination.id,
        ))

        self._flush()
        alerts = self.alert_service.open_capacity_alerts(destination)
        self._commit()
        logger.info(
            "Transfer %s: %d units of %s from warehouse %s to %s",
            transfer.id, quantity, product.sku, source.id, destination.id,
        )

        details = "Transfer %d units of %s (%s) from %s to %s. Transfer ID: %d" % (
            quantity, product.name, product.sku, source.name, destination.name, transfer.id,
        )
        write_log(self.db, EntityType.INVENTORY, target.id, AuditAction.UPDATE, details)
        self.alert_service.audit_opened(alerts, destination.name)
        return transfer_view(self.get_transfer(transfer.id))

    def get_transfer(self, transfer_id: int) -> InventoryTransfer:
        transfer = transfer_repo.get_transfer(self.db, transfer_id)
        if not transfer:
            raise NotFoundError(f"Transfer with ID {transfer_id} not found")
        return transfer

    def list_transfers(
        self,
        source_warehouse_id: Optional[int] = None,
        destination_warehouse_id: Optional[int] = None,
        product_id: Optional[int] = None,
        status: Optional[TransferStatus] = None,
    ):
        return transfer_repo.list_transfers(
            self.db, source_warehouse_id, destination_warehouse_id, product_id, status,
        )

    # --- serialized units ---

    def register_unit(
        self,
        inventory_id: int,
        serial_number: Optional[str],
        status: UnitStatus = UnitStatus.AVAILABLE,
    ) -> InventoryUnit:
        inventory = self.get_inventory(inventory_id)
        if serial_number is None or not serial_number.strip():
            raise BadRequestError("Serial number cannot be null or empty")
        serial_number = serial_number.strip()
        if inventory_repo.get_unit_by_serial(self.db, serial_number):
            raise ConflictError(f"Unit with serial number '{serial_number}' already exists")

        unit = InventoryUnit(serial_number=serial_number, status=status, inventory_id=inventory.id)
        self.db.add(unit)
        self._commit()
        self.db.refresh(unit)

        write_log(
            self.db, EntityType.INVENTORY, inventory_id, AuditAction.UPDATE,
            f"Registered unit {serial_number}",
        )
        return unit

    def list_units(self, inventory_id: int) -> List[InventoryUnit]:
        self.get_inventory(inventory_id)
        return inventory_repo.list_units(self.db, inventory_id)

    # --- movement ledger ---

    def list_transactions(
        self,
        warehouse_id: int,
        transaction_type: Optional[TransactionType] = None,
        order: str = "desc",
    ):
        self._get_warehouse(warehouse_id)
        return inventory_repo.list_transactions(self.db, warehouse_id, transaction_type, order)
