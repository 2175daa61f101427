import pytest

from services.warehouse_service import WarehouseService
from utils.errors import BadRequestError

API = "/api/v1"


def _logs(client, **params):
    r = client.get(f"{API}/activity-logs", params=params)
    assert r.status_code == 200, r.text
    return r.json()


def test_create_warehouse_trims_and_activates(client):
    r = client.post(f"{API}/warehouses", json={
        "name": "  Silicon Valley DC  ", "location": " San Jose, CA ", "max_capacity": 50000,
    })
    assert r.status_code == 201, r.text
    data = r.json()
    assert data["name"] == "Silicon Valley DC"
    assert data["location"] == "San Jose, CA"
    assert data["is_active"] is True
    assert isinstance(data["id"], int)


def test_create_warehouse_validation(client):
    cases = [
        {"name": "   ", "location": "X", "max_capacity": 10},
        {"name": "A" * 256, "location": "X", "max_capacity": 10},
        {"name": "Valid", "location": "", "max_capacity": 10},
        {"name": "Valid", "location": "L" * 501, "max_capacity": 10},
        {"name": "Valid", "location": "X", "max_capacity": 0},
        {"name": "Valid", "location": "X"},
    ]
    for payload in cases:
        r = client.post(f"{API}/warehouses", json=payload)
        assert r.status_code == 400, payload
        assert r.json()["error"] == "Validation Error"


def test_create_warehouse_duplicate_name_conflicts(client, make_warehouse):
    make_warehouse(name="Midwest DC")
    r = client.post(f"{API}/warehouses", json={"name": " Midwest DC ", "location": "Chicago", "max_capacity": 5})
    assert r.status_code == 409, r.text
    assert r.json()["error"] == "Conflict Error"


def test_get_and_list_warehouses(client, make_warehouse):
    a = make_warehouse()
    b = make_warehouse()
    r = client.patch(f"{API}/warehouses/id/{b['id']}", json={"is_active": False})
    assert r.status_code == 200, r.text

    r = client.get(f"{API}/warehouses/id/{a['id']}")
    assert r.status_code == 200
    assert r.json()["name"] == a["name"]

    assert client.get(f"{API}/warehouses/id/9999").status_code == 404

    ids = [w["id"] for w in client.get(f"{API}/warehouses").json()]
    assert ids == [a["id"], b["id"]]
    active = [w["id"] for w in client.get(f"{API}/warehouses", params={"active": True}).json()]
    assert active == [a["id"]]


def test_partial_update_leaves_other_fields(client, make_warehouse):
    w = make_warehouse(name="East Coast Hub", capacity=800)
    r = client.patch(f"{API}/warehouses/id/{w['id']}", json={"location": "Newark, NJ"})
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["location"] == "Newark, NJ"
    assert data["name"] == "East Coast Hub"
    assert data["max_capacity"] == 800

    logs = _logs(client, entity_type="WAREHOUSE", entity_id=w["id"], action="UPDATE")
    assert logs["total"] == 1
    assert logs["items"][0]["updated_at"] is not None


def test_update_name_uniqueness_excludes_self(client, make_warehouse):
    a = make_warehouse(name="Alpha")
    make_warehouse(name="Beta")
    assert client.patch(f"{API}/warehouses/id/{a['id']}", json={"name": "Alpha"}).status_code == 200
    assert client.patch(f"{API}/warehouses/id/{a['id']}", json={"name": "Beta"}).status_code == 409
    assert client.patch(f"{API}/warehouses/id/{a['id']}", json={"name": " "}).status_code == 400


def test_capacity_update_respects_current_usage(client, make_warehouse, add_stock):
    w = make_warehouse(capacity=1000)
    add_stock(w["id"], "CPU-1", 300)

    r = client.patch(f"{API}/warehouses/id/{w['id']}", json={"max_capacity": 299})
    assert r.status_code == 409, r.text
    assert "current usage (300)" in r.json()["detail"]

    assert client.patch(f"{API}/warehouses/id/{w['id']}", json={"max_capacity": 0}).status_code == 400

    r = client.patch(f"{API}/warehouses/id/{w['id']}", json={"max_capacity": 300})
    assert r.status_code == 200, r.text
    assert r.json()["max_capacity"] == 300


def test_dashboard_figures(client, make_warehouse, add_stock):
    w = make_warehouse(capacity=1000)
    empty = make_warehouse(capacity=500)
    add_stock(w["id"], "CPU-1", 200)
    add_stock(w["id"], "GPU-1", 50)

    r = client.get(f"{API}/warehouses/id/{w['id']}/dashboard")
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["current_capacity_used"] == 250
    assert data["capacity_percentage"] == 25.0
    assert data["total_items_count"] == 2

    boards = {d["id"]: d for d in client.get(f"{API}/warehouses/dashboard").json()}
    assert boards[empty["id"]]["capacity_percentage"] == 0.0
    assert boards[empty["id"]]["current_capacity_used"] == 0

    assert client.get(f"{API}/warehouses/id/9999/dashboard").status_code == 404


def test_delete_blocked_by_zero_quantity_batch(client, make_warehouse, add_stock):
    w = make_warehouse()
    item = add_stock(w["id"], "SSD-1", 10)
    r = client.patch(f"{API}/inventories/id/{item['inventory_id']}", json={"quantity_on_hand": 0})
    assert r.status_code == 200, r.text

    check = client.get(f"{API}/warehouses/id/{w['id']}/deletion-check").json()
    assert check["can_delete"] is False
    assert check["warehouse_id"] == w["id"]
    assert check["reason"] == "Warehouse contains 1 inventory items"

    r = client.delete(f"{API}/warehouses/id/{w['id']}")
    assert r.status_code == 409, r.text
    assert client.get(f"{API}/warehouses/id/{w['id']}").status_code == 200


def test_delete_blocked_by_stocked_batches(client, make_warehouse, add_stock):
    w = make_warehouse()
    add_stock(w["id"], "CPU-i9-14k", 7)
    add_stock(w["id"], "GPU-4090-FE", 3)

    check = client.get(f"{API}/warehouses/id/{w['id']}/deletion-check").json()
    assert check["can_delete"] is False
    assert check["reason"] == "Warehouse contains 2 inventory items"

    r = client.delete(f"{API}/warehouses/id/{w['id']}")
    assert r.status_code == 409
    assert r.json()["detail"].endswith("Warehouse contains 2 inventory items")


def test_delete_empty_warehouse(client, make_warehouse, make_shelf):
    w = make_warehouse(name="Overflow Storage")
    make_shelf(w["id"], "RACK-A1")

    check = client.get(f"{API}/warehouses/id/{w['id']}/deletion-check").json()
    assert check == {
        "can_delete": True, "warehouse_id": w["id"], "warehouse_name": "Overflow Storage", "reason": None,
    }

    r = client.delete(f"{API}/warehouses/id/{w['id']}")
    assert r.status_code == 204
    assert client.get(f"{API}/warehouses/id/{w['id']}").status_code == 404
    assert client.delete(f"{API}/warehouses/id/{w['id']}").status_code == 404

    logs = _logs(client, entity_type="WAREHOUSE", entity_id=w["id"], action="DELETE")
    assert logs["total"] == 1
    assert logs["items"][0]["deleted_at"] is not None


def test_shelves(client, make_warehouse, make_shelf):
    w = make_warehouse()
    other = make_warehouse()
    make_shelf(w["id"], "RACK-B2")
    make_shelf(w["id"], "CAGE-CPU-01", "Secure CPU cage")
    make_shelf(other["id"], "RACK-B2")

    r = client.post(f"{API}/warehouses/id/{w['id']}/shelves", json={"code": "RACK-B2"})
    assert r.status_code == 409
    assert client.post(f"{API}/warehouses/id/{w['id']}/shelves", json={"code": ""}).status_code == 400
    assert client.post(f"{API}/warehouses/id/9999/shelves", json={"code": "X"}).status_code == 404

    codes = [s["code"] for s in client.get(f"{API}/warehouses/id/{w['id']}/shelves").json()]
    assert codes == ["CAGE-CPU-01", "RACK-B2"]


def test_capacity_snapshots(client, make_warehouse, add_stock):
    w = make_warehouse(capacity=800)
    add_stock(w["id"], "MEM-1", 200)

    r = client.post(f"{API}/warehouses/id/{w['id']}/capacity-snapshots")
    assert r.status_code == 201, r.text
    snap = r.json()
    assert snap["capacity_used_units"] == 200
    assert snap["capacity_percent"] == 25
    assert snap["total_items"] == 1

    items = client.get(f"{API}/warehouses/id/{w['id']}/capacity-snapshots").json()
    assert [s["id"] for s in items] == [snap["id"]]


def test_rejected_update_changes_nothing_in_session(db):
    service = WarehouseService(db)
    warehouse = service.create_warehouse("East Coast Hub", "Newark, NJ", 800)
    warehouse_id = warehouse.id

    with pytest.raises(BadRequestError):
        service.update_warehouse(warehouse_id, {"name": "Renamed Hub", "location": "Trenton, NJ", "max_capacity": 0})

    # the same session keeps working; nothing from the rejected patch lands
    service.update_warehouse(warehouse_id, {"max_capacity": 900})
    db.expire_all()
    stored = service.get_warehouse(warehouse_id)
    assert (stored.name, stored.location, stored.max_capacity) == ("East Coast Hub", "Newark, NJ", 900)
