import json

from conftest import RATE_LIMIT

PRODUCT = {
    "name": "Kettle",
    "price": 45.0,
    "description": "1.7 L electric kettle",
    "category": "Kitchen",
    "stock": 6,
}


def _create(client, **overrides):
    payload = {**PRODUCT, **overrides}
    response = client.post("/api/products", json=payload)
    assert response.status_code == 201
    return response.json()["data"]


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "db_ok": True}


def test_list_empty_catalog(client):
    response = client.get("/api/products")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"] == []


def test_create_and_get(client):
    response = client.post("/api/products", json=PRODUCT)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Product created successfully"
    created = body["data"]
    for key, value in PRODUCT.items():
        assert created[key] == value
    assert created["created_at"] == created["updated_at"]

    fetched = client.get(f"/api/products/{created['id']}").json()["data"]
    assert fetched == created


def test_create_without_description(client):
    payload = {key: value for key, value in PRODUCT.items() if key != "description"}

    created = client.post("/api/products", json=payload).json()["data"]

    assert created["description"] == ""


def test_create_requires_fields(client):
    response = client.post("/api/products", json={"name": "No price"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "price" in body["error"]


def test_create_rejects_negative_values(client):
    assert client.post("/api/products", json={**PRODUCT, "price": -1}).status_code == 400
    assert client.post("/api/products", json={**PRODUCT, "stock": -3}).status_code == 400


def test_get_missing(client):
    response = client.get("/api/products/999")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Product not found"}


def test_partial_update(client):
    created = _create(client)

    response = client.put(f"/api/products/{created['id']}", json={"stock": 11})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Product updated successfully"
    assert body["data"]["stock"] == 11
    assert body["data"]["name"] == PRODUCT["name"]
    assert body["data"]["price"] == PRODUCT["price"]


def test_update_with_empty_body(client):
    created = _create(client)

    response = client.put(f"/api/products/{created['id']}", json={})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "No fields to update"}


def test_update_null_fields_count_as_absent(client):
    created = _create(client)

    response = client.put(f"/api/products/{created['id']}", json={"name": None})

    assert response.status_code == 400


def test_update_missing(client):
    response = client.put("/api/products/999", json={"price": 5})

    assert response.status_code == 404
    assert response.json()["error"] == "Product not found"


def test_delete(client):
    created = _create(client)

    response = client.delete(f"/api/products/{created['id']}")
    assert response.status_code == 200
    assert response.json()["message"] == "Product deleted successfully"

    assert client.get(f"/api/products/{created['id']}").status_code == 404
    assert client.delete(f"/api/products/{created['id']}").status_code == 404


def test_search_and_sort(client):
    for name, price in [("Ten", 10), ("Thirty", 30), ("Twenty", 20)]:
        _create(client, name=name, price=price)

    response = client.get("/api/products", params={"sortBy": "price", "sortOrder": "desc"})

    assert [p["price"] for p in response.json()["data"]] == [30, 20, 10]


def test_search_filters(client):
    _create(client, name="Blue Mug", category="Kitchen", price=8)
    _create(client, name="Blue Shirt", category="Clothing", price=15)
    _create(client, name="Red Mug", category="Kitchen", price=9)

    response = client.get("/api/products", params={"name": "blue", "category": "Kitchen"})

    assert [p["name"] for p in response.json()["data"]] == ["Blue Mug"]


def test_search_inverted_price_range(client):
    _create(client, price=75)

    response = client.get("/api/products", params={"minPrice": 100, "maxPrice": 50})

    assert response.status_code == 200
    assert response.json()["data"] == []


def test_search_rejects_unknown_sort_field(client):
    response = client.get("/api/products", params={"sortBy": "description"})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_stats(client):
    _create(client, category="A", price=10, stock=5)
    _create(client, category="A", price=20, stock=1)
    _create(client, category="B", price=30, stock=0)

    response = client.get("/api/stats")

    assert response.status_code == 200
    assert response.json()["data"] == {
        "totalProducts": 3,
        "totalValue": 70.0,
        "averagePrice": 20.0,
        "totalStock": 6,
        "categories": {"A": 2, "B": 1},
    }


def test_stats_empty(client):
    response = client.get("/api/stats")

    assert response.json()["data"] == {
        "totalProducts": 0,
        "totalValue": 0.0,
        "averagePrice": 0.0,
        "totalStock": 0,
        "categories": {},
    }


def test_oversized_id_is_not_found(client):
    huge = "99999999999999999999"

    assert client.get(f"/api/products/{huge}").status_code == 404
    assert client.put(f"/api/products/{huge}", json={"price": 5}).status_code == 404

    response = client.delete(f"/api/products/{huge}")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Product not found"}


def test_infinite_price_is_rejected(client):
    body = json.dumps({**PRODUCT, "price": 0}).replace('"price": 0', '"price": 1e309')

    response = client.post(
        "/api/products", content=body, headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert client.get("/api/stats").status_code == 200
    assert client.get("/api/products").json()["data"] == []


def test_infinite_price_update_is_rejected(client):
    created = _create(client)

    response = client.put(
        f"/api/products/{created['id']}",
        content='{"price": 1e309}',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert client.get(f"/api/products/{created['id']}").json()["data"]["price"] == PRODUCT["price"]


def test_oversized_stock_is_rejected(client):
    response = client.post("/api/products", json={**PRODUCT, "stock": 2**64})

    assert response.status_code == 400


def test_rate_limited_writes_use_envelope(client):
    for _ in range(RATE_LIMIT):
        assert client.delete("/api/products/1").status_code == 404

    response = client.delete("/api/products/1")

    assert response.status_code == 429
    body = response.json()
    assert body["success"] is False
    assert body["error"].startswith("Rate limit exceeded")
