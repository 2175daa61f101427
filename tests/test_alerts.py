API = "/api/v1"


def _alerts(client, **params):
    r = client.get(f"{API}/alerts", params=params)
    assert r.status_code == 200, r.text
    return r.json()


def test_capacity_alerts_open_once_per_type(client, make_warehouse, add_stock):
    w = make_warehouse(capacity=100)

    add_stock(w["id"], "SENS-RAD-005", 80)
    assert _alerts(client)["total"] == 0

    add_stock(w["id"], "SENS-RAD-005", 10)
    page = _alerts(client, warehouse_id=w["id"])
    assert page["total"] == 1
    near = page["items"][0]
    assert near["type"] == "CAPACITY_NEAR_LIMIT"
    assert near["severity"] == "WARNING"
    assert near["is_resolved"] is False

    # still near the limit, already alerted
    add_stock(w["id"], "SENS-RAD-005", 5)
    assert _alerts(client, warehouse_id=w["id"])["total"] == 1

    add_stock(w["id"], "SENS-RAD-005", 10)
    exceeded = _alerts(client, type="CAPACITY_EXCEEDED")["items"]
    assert len(exceeded) == 1
    assert exceeded[0]["severity"] == "CRITICAL"
    assert exceeded[0]["warehouse_id"] == w["id"]

    logs = client.get(f"{API}/activity-logs", params={"entity_type": "ALERT", "action": "CREATE"}).json()
    assert logs["total"] == 2


def test_transfer_raises_alert_on_destination(client, make_warehouse, add_stock):
    source = make_warehouse(capacity=1000)
    destination = make_warehouse(capacity=50)
    batch = add_stock(source["id"], "BAT-LION-25000", 100)

    r = client.post(f"{API}/inventories/transfer", json={
        "product_id": batch["product_id"],
        "quantity": 48,
        "source_warehouse_id": source["id"],
        "destination_warehouse_id": destination["id"],
    })
    assert r.status_code == 201, r.text

    assert _alerts(client, warehouse_id=source["id"])["total"] == 0
    items = _alerts(client, warehouse_id=destination["id"])["items"]
    assert [a["type"] for a in items] == ["CAPACITY_NEAR_LIMIT"]


def test_resolve_alert(client, make_warehouse, add_stock):
    w = make_warehouse(capacity=10)
    add_stock(w["id"], "MEM-DDR5-64G", 11)
    alert = _alerts(client)["items"][0]

    r = client.patch(f"{API}/alerts/{alert['id']}/resolve")
    assert r.status_code == 200, r.text
    assert r.json()["is_resolved"] is True
    assert r.json()["resolved_at"] is not None

    r = client.patch(f"{API}/alerts/{alert['id']}/resolve")
    assert r.status_code == 409
    assert client.patch(f"{API}/alerts/999/resolve").status_code == 404

    assert _alerts(client, resolved="false")["total"] == 0
    assert _alerts(client, resolved="true")["total"] == 1

    # resolved alerts no longer suppress new ones
    add_stock(w["id"], "MEM-DDR5-64G", 1)
    assert _alerts(client, resolved="false")["total"] == 1


def test_alert_filters_validate(client):
    assert client.get(f"{API}/alerts", params={"type": "FIRE"}).status_code == 400
