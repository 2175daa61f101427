import os
import sys

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from sqlalchemy.orm import Session

# Database models and setup
from database import SessionLocal, init_db
from models.warehouse import Warehouse, WarehouseShelf
from models.product import Category, Product
from models.inventory import (
    Inventory, InventoryUnit, InventoryTransaction, TransactionType, UnitStatus,
)

# Configuration
WAREHOUSES = [
    ("Silicon Valley DC", "San Jose, CA, USA", 50000),
    ("Midwest DC", "Chicago, IL, USA", 40000),
    ("West Coast Fulfillment", "Los Angeles, CA", 1000),
    ("East Coast Hub", "Newark, NJ", 800),
    ("Overflow Storage", "Austin, TX", 500),
]

# (code, description, warehouse name)
SHELVES = [
    ("CAGE-CPU-01", "Secure CPU cage", "Silicon Valley DC"),
    ("CAGE-GPU-01", "Secure GPU cage", "Silicon Valley DC"),
    ("RACK-A1", "Standard rack A1", "Midwest DC"),
    ("VAULT-SEN-1", "Sensor vault 1", "West Coast Fulfillment"),
]

CATEGORIES = [
    "Microprocessors", "Graphics Cards", "Specialty Sensors", "Memory",
    "Storage", "Power Supplies", "Motherboards", "Batteries",
]

# (name, sku, description, category)
PRODUCTS = [
    ("Core i9-14900K Processor", "CPU-i9-14k", "High-performance desktop CPU.", "Microprocessors"),
    ("GeForce RTX 4090 GPU", "GPU-4090-FE", "Flagship graphics card.", "Graphics Cards"),
    ("High-Accuracy Radar Sensor", "SENS-RAD-005", "Industrial radar module for automation.", "Specialty Sensors"),
    ("64GB DDR5 RAM Kit", "MEM-DDR5-64G", "High-speed memory module.", "Memory"),
    ("Samsung 990 Pro 2TB NVMe SSD", "SSD-2TB-PRO", "High-speed storage drive.", "Storage"),
    ("1600W Platinum Power Supply", "PSU-1600W-PLAT", "High-wattage, high-efficiency PSU.", "Power Supplies"),
    ("Z790 Motherboard Ultra", "MBD-Z790-ULT", "Top-tier desktop motherboard.", "Motherboards"),
    ("25000mAh Lithium-Ion Battery Pack", "BAT-LION-25000", "High-density battery for industrial use.", "Batteries"),
]

# (quantity, warehouse name, shelf code, sku, serial numbers)
BATCHES = [
    (500, "Silicon Valley DC", "CAGE-CPU-01", "CPU-i9-14k",
     [("CPU-14900K-SN-0001", UnitStatus.AVAILABLE), ("CPU-14900K-SN-0002", UnitStatus.RESERVED)]),
    (1200, "Silicon Valley DC", "CAGE-GPU-01", "SENS-RAD-005", []),
    (150, "Midwest DC", "RACK-A1", "GPU-4090-FE",
     [("RTX-4090-SN-0101", UnitStatus.AVAILABLE), ("RTX-4090-SN-0102", UnitStatus.SHIPPED)]),
    (3000, "Midwest DC", "RACK-A1", "SSD-2TB-PRO", []),
    (800, "West Coast Fulfillment", "VAULT-SEN-1", "MEM-DDR5-64G", []),
]
# End Configuration


def seed(db: Session) -> bool:
    """Load the demo catalogue and stock. Returns False when data already exists."""
    if db.query(Warehouse).first():
        return False

    warehouses = {}
    for name, location, capacity in WAREHOUSES:
        warehouses[name] = Warehouse(name=name, location=location, max_capacity=capacity, is_active=True)
        db.add(warehouses[name])

    shelves = {}
    for code, description, warehouse_name in SHELVES:
        shelves[code] = WarehouseShelf(code=code, description=description, warehouse=warehouses[warehouse_name])
        db.add(shelves[code])

    categories = {name: Category(name=name) for name in CATEGORIES}
    db.add_all(categories.values())

    products = {}
    for name, sku, description, category in PRODUCTS:
        products[sku] = Product(
            name=name, sku=sku, description=description, is_active=True,
            category=categories[category],
        )
        db.add(products[sku])

    db.flush()

    for quantity, warehouse_name, shelf_code, sku, units in BATCHES:
        warehouse = warehouses[warehouse_name]
        shelf = shelves[shelf_code]
        batch = Inventory(
            quantity_on_hand=quantity,
            warehouse=warehouse,
            warehouse_shelf=shelf,
            product=products[sku],
        )
        db.add(batch)
        for serial, status in units:
            db.add(InventoryUnit(serial_number=serial, status=status, inventory=batch))
        db.add(InventoryTransaction(
            quantity=quantity,
            transaction_type=TransactionType.INBOUND,
            product_id=products[sku].id,
            to_warehouse_id=warehouse.id,
            to_shelf_id=shelf.id,
        ))

    db.commit()
    return True


if __name__ == "__main__":
    init_db()
    session = SessionLocal()
    try:
        if seed(session):
            print(f"Seeded {len(WAREHOUSES)} warehouses, {len(PRODUCTS)} products and {len(BATCHES)} batches.")
        else:
            print("Database already contains warehouses, nothing to seed.")
    finally:
        session.close()
