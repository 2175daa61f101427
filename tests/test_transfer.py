import pytest
from sqlalchemy import text

from models.inventory import Inventory
from models.transfer import InventoryTransfer
from models.warehouse import Warehouse
from schemas.inventory import InventoryCreate
from services.inventory_service import InventoryService
from services.warehouse_service import WarehouseService
from utils.errors import ConflictError

API = "/api/v1"


def _product_id(client, sku):
    r = client.get(f"{API}/products/sku/{sku}")
    assert r.status_code == 200, r.text
    return r.json()["id"]


def _used(client, warehouse_id):
    return client.get(f"{API}/warehouses/id/{warehouse_id}/dashboard").json()["current_capacity_used"]


def _transfer(client, product_id, quantity, source_id, destination_id):
    return client.post(f"{API}/inventories/transfer", json={
        "product_id": product_id,
        "quantity": quantity,
        "source_warehouse_id": source_id,
        "destination_warehouse_id": destination_id,
    })


def test_transfer_at_exact_free_capacity(client, make_warehouse, add_stock):
    source = make_warehouse(name="Silicon Valley DC", capacity=1000)
    destination = make_warehouse(name="Overflow Storage", capacity=500)
    add_stock(source["id"], "GPU-4090-FE", 200)
    add_stock(destination["id"], "SSD-2TB-PRO", 470)
    product_id = _product_id(client, "GPU-4090-FE")

    r = _transfer(client, product_id, 31, source["id"], destination["id"])
    assert r.status_code == 409, r.text
    assert "Insufficient capacity" in r.json()["detail"]
    assert _used(client, source["id"]) == 200
    assert _used(client, destination["id"]) == 470

    r = _transfer(client, product_id, 30, source["id"], destination["id"])
    assert r.status_code == 201, r.text
    data = r.json()
    assert data["status"] == "PENDING"
    assert data["quantity"] == 30
    assert data["product_name"] == "Product GPU-4090-FE"
    assert data["source_warehouse_name"] == "Silicon Valley DC"
    assert data["destination_warehouse_name"] == "Overflow Storage"
    assert _used(client, source["id"]) == 170
    assert _used(client, destination["id"]) == 500


def test_transfer_drains_oldest_batches_first(client, make_warehouse, add_stock, make_shelf):
    source = make_warehouse(capacity=1000)
    destination = make_warehouse(capacity=1000)
    make_shelf(source["id"], "RACK-A1")
    first = add_stock(source["id"], "CPU-i9-14k", 100, warehouse_shelf_code="RACK-A1")
    second = add_stock(source["id"], "CPU-i9-14k", 50, expiration_date="2099-01-01")
    product_id = _product_id(client, "CPU-i9-14k")

    r = _transfer(client, product_id, 120, source["id"], destination["id"])
    assert r.status_code == 201, r.text

    remaining = {i["inventory_id"]: i["quantity_on_hand"] for i in client.get(
        f"{API}/inventories/warehouses/id/{source['id']}").json()}
    assert remaining == {first["inventory_id"]: 0, second["inventory_id"]: 30}

    received = client.get(f"{API}/inventories/warehouses/id/{destination['id']}").json()
    assert len(received) == 1
    assert received[0]["quantity_on_hand"] == 120
    assert received[0]["warehouse_shelf_id"] is None
    assert received[0]["expiration_date"] is None

    r = _transfer(client, product_id, 10, source["id"], destination["id"])
    assert r.status_code == 201, r.text
    received = client.get(f"{API}/inventories/warehouses/id/{destination['id']}").json()
    assert [i["quantity_on_hand"] for i in received] == [130]

    logs = client.get(f"{API}/activity-logs", params={
        "entity_type": "INVENTORY", "entity_id": received[0]["inventory_id"], "action": "UPDATE",
    }).json()
    assert logs["total"] == 2
    assert logs["items"][0]["details"].startswith("Transfer 10 units of Product CPU-i9-14k (CPU-i9-14k)")


def test_transfer_insufficient_stock(client, make_warehouse, add_stock):
    source = make_warehouse()
    destination = make_warehouse()
    add_stock(source["id"], "MEM-DDR5-64G", 40)
    add_stock(source["id"], "MEM-DDR5-64G", 20, expiration_date="2099-06-30")
    product_id = _product_id(client, "MEM-DDR5-64G")

    r = _transfer(client, product_id, 61, source["id"], destination["id"])
    assert r.status_code == 409, r.text
    assert r.json()["detail"] == "Insufficient inventory in source warehouse. Available: 60, Requested: 61"
    assert _used(client, source["id"]) == 60
    assert _used(client, destination["id"]) == 0


def test_transfer_request_validation(client, make_warehouse, add_stock):
    source = make_warehouse()
    destination = make_warehouse()
    inactive = make_warehouse()
    client.patch(f"{API}/warehouses/id/{inactive['id']}", json={"is_active": False})
    add_stock(source["id"], "PSU-1600W-PLAT", 10)
    product_id = _product_id(client, "PSU-1600W-PLAT")

    assert _transfer(client, product_id, 0, source["id"], destination["id"]).status_code == 400
    assert _transfer(client, product_id, -5, source["id"], destination["id"]).status_code == 400
    assert _transfer(client, product_id, 1, source["id"], source["id"]).status_code == 400
    assert _transfer(client, product_id, 1, 9999, destination["id"]).status_code == 404
    assert _transfer(client, product_id, 1, source["id"], 9999).status_code == 404
    assert _transfer(client, product_id, 1, source["id"], inactive["id"]).status_code == 409
    assert _transfer(client, product_id, 1, inactive["id"], destination["id"]).status_code == 409
    assert _transfer(client, 9999, 1, source["id"], destination["id"]).status_code == 404

    r = client.post(f"{API}/inventories/transfer", json={"product_id": product_id})
    assert r.status_code == 400
    assert r.json()["errors"]


def test_transfer_records_and_queries(client, make_warehouse, add_stock):
    source = make_warehouse()
    destination = make_warehouse()
    add_stock(source["id"], "BAT-LION-25000", 100)
    product_id = _product_id(client, "BAT-LION-25000")

    created = _transfer(client, product_id, 25, source["id"], destination["id"]).json()

    r = client.get(f"{API}/inventories/transfers/{created['transfer_id']}")
    assert r.status_code == 200, r.text
    assert r.json()["quantity"] == 25
    assert client.get(f"{API}/inventories/transfers/9999").status_code == 404

    page = client.get(f"{API}/inventories/transfers", params={"source_warehouse_id": source["id"]}).json()
    assert page["total"] == 1
    assert page["items"][0]["transfer_id"] == created["transfer_id"]
    assert client.get(f"{API}/inventories/transfers", params={"status": "COMPLETED"}).json()["total"] == 0

    ledger = client.get(
        f"{API}/inventories/warehouses/id/{destination['id']}/transactions",
        params={"transaction_type": "TRANSFER"},
    ).json()
    assert ledger["total"] == 1
    assert ledger["items"][0]["from_warehouse_id"] == source["id"]
    assert ledger["items"][0]["to_warehouse_id"] == destination["id"]

    received = client.get(f"{API}/inventories/warehouses/id/{destination['id']}").json()
    client.delete(f"{API}/inventories/id/{received[0]['inventory_id']}")
    r = client.delete(f"{API}/warehouses/id/{destination['id']}")
    assert r.status_code == 409
    assert "inventory transfers" in r.json()["detail"]


def test_stale_batch_version_aborts_transfer(db):
    warehouses = WarehouseService(db)
    source = warehouses.create_warehouse("Source", "Austin, TX", 1000)
    destination = warehouses.create_warehouse("Destination", "Newark, NJ", 1000)
    source_id, destination_id = source.id, destination.id

    service = InventoryService(db)
    service.add_inventory_item(InventoryCreate(
        warehouse_id=source_id, product_sku="CPU-i9-14k", product_name="Core i9", quantity=50,
    ))

    batch = db.query(Inventory).filter(Inventory.warehouse_id == source_id).one()
    product_id = batch.product_id
    # Another writer bumps the row after this session loaded it
    db.execute(text("UPDATE inventory SET version = version + 1 WHERE id = :id"), {"id": batch.id})

    with pytest.raises(ConflictError):
        service.transfer_inventory(product_id, 10, source_id, destination_id)

    db.expire_all()
    quantities = [i.quantity_on_hand for i in db.query(Inventory).all()]
    assert quantities == [50]


def test_concurrent_transfer_into_same_destination_conflicts(db):
    warehouses = WarehouseService(db)
    source_id = warehouses.create_warehouse("Silicon Valley DC", "San Jose, CA", 1000).id
    destination_id = warehouses.create_warehouse("Overflow Storage", "Austin, TX", 100).id

    service = InventoryService(db)
    product_id = service.add_inventory_item(InventoryCreate(
        warehouse_id=source_id, product_sku="SSD-2TB-PRO", product_name="Samsung 990 Pro", quantity=80,
    )).product_id

    destination = db.get(Warehouse, destination_id)
    loaded_version = destination.version
    # Another transfer into the destination commits after this session read it
    db.execute(
        text("UPDATE warehouse SET version = version + 1 WHERE id = :id"), {"id": destination_id},
    )

    with pytest.raises(ConflictError):
        service.transfer_inventory(product_id, 60, source_id, destination_id)

    db.expire_all()
    assert [i.quantity_on_hand for i in db.query(Inventory).all()] == [80]
    assert db.query(InventoryTransfer).count() == 0
    assert db.get(Warehouse, destination_id).version == loaded_version


def test_transfer_bumps_destination_version(db):
    warehouses = WarehouseService(db)
    source_id = warehouses.create_warehouse("Midwest DC", "Chicago, IL", 1000).id
    destination_id = warehouses.create_warehouse("East Coast Hub", "Newark, NJ", 800).id

    service = InventoryService(db)
    product_id = service.add_inventory_item(InventoryCreate(
        warehouse_id=source_id, product_sku="PSU-1600W-PLAT", product_name="1600W PSU", quantity=20,
    )).product_id
    before = db.get(Warehouse, destination_id).version

    service.transfer_inventory(product_id, 5, source_id, destination_id)

    db.expire_all()
    assert db.get(Warehouse, destination_id).version == before + 1
    assert db.get(Warehouse, source_id).version == 1
