API = "/api/v1"


def _stocked_warehouse(client, make_warehouse, add_stock):
    w = make_warehouse()
    cpus = client.post(f"{API}/categories", json={"name": "Microprocessors"}).json()
    gpus = client.post(f"{API}/categories", json={"name": "Graphics Cards"}).json()
    add_stock(w["id"], "GPU-4090-FE", 10, name="GeForce RTX 4090 GPU", category_id=gpus["id"])
    add_stock(w["id"], "GPU-4090-FE", 5, name="GeForce RTX 4090 GPU", expiration_date="2099-01-01")
    add_stock(w["id"], "CPU-i9-14k", 20, name="Core i9-14900K Processor", category_id=cpus["id"])
    add_stock(w["id"], "SSD-2TB-PRO", 30, name="Samsung 990 Pro 2TB NVMe SSD")
    return w, cpus, gpus


def _search(client, warehouse_id, path, **params):
    return client.get(f"{API}/inventories/warehouses/id/{warehouse_id}/{path}", params=params)


def test_search_by_name_is_partial_and_case_insensitive(client, make_warehouse, add_stock):
    w, _, _ = _stocked_warehouse(client, make_warehouse, add_stock)
    r = _search(client, w["id"], "search/name", name=" rtx ")
    assert r.status_code == 200, r.text
    rows = r.json()
    assert [row["quantity_on_hand"] for row in rows] == [10, 5]
    assert rows[0]["category_name"] == "Graphics Cards"

    assert _search(client, w["id"], "search/name", name="  ").status_code == 400
    assert _search(client, w["id"], "search/name").status_code == 400
    assert _search(client, 9999, "search/name", name="rtx").status_code == 404


def test_search_by_sku_orders_by_sku(client, make_warehouse, add_stock):
    w, _, _ = _stocked_warehouse(client, make_warehouse, add_stock)
    rows = _search(client, w["id"], "search/sku", sku="-").json()
    assert [row["product_sku"] for row in rows] == ["CPU-i9-14k", "GPU-4090-FE", "GPU-4090-FE", "SSD-2TB-PRO"]
    assert _search(client, w["id"], "search/sku", sku="").status_code == 400


def test_filter_by_category(client, make_warehouse, add_stock):
    w, cpus, _ = _stocked_warehouse(client, make_warehouse, add_stock)
    rows = _search(client, w["id"], "filter/category", category_id=cpus["id"]).json()
    assert [row["product_sku"] for row in rows] == ["CPU-i9-14k"]
    assert _search(client, w["id"], "filter/category", category_id=0).status_code == 400
    assert _search(client, w["id"], "filter/category").status_code == 400


def test_advanced_search_matches_any_supplied_filter(client, make_warehouse, add_stock):
    w, cpus, _ = _stocked_warehouse(client, make_warehouse, add_stock)

    assert _search(client, w["id"], "search/advanced").status_code == 400
    assert _search(client, w["id"], "search/advanced", name=" ", category_id=0).status_code == 400

    rows = _search(client, w["id"], "search/advanced", sku="ssd-2tb-pro").json()
    assert [row["product_sku"] for row in rows] == ["SSD-2TB-PRO"]

    # exact match only
    assert _search(client, w["id"], "search/advanced", name="geforce").json() == []

    rows = _search(
        client, w["id"], "search/advanced", name="samsung 990 pro 2tb nvme ssd", category_id=cpus["id"],
    ).json()
    assert sorted(row["product_sku"] for row in rows) == ["CPU-i9-14k", "SSD-2TB-PRO"]


def test_view_is_scoped_to_warehouse(client, make_warehouse, add_stock):
    a = make_warehouse()
    b = make_warehouse()
    add_stock(a["id"], "MEM-DDR5-64G", 8)
    add_stock(b["id"], "MEM-DDR5-64G", 9)
    rows = client.get(f"{API}/inventories/warehouses/id/{b['id']}").json()
    assert [(row["warehouse_id"], row["quantity_on_hand"]) for row in rows] == [(b["id"], 9)]
    assert client.get(f"{API}/inventories/warehouses/id/9999").status_code == 404
