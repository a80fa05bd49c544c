"""HTTP tests for the products and producers endpoints."""

import pytest


@pytest.fixture
def producer(client):
    response = client.post("/api/producers", json={"name": "Nordic Dairy AS", "address": "Melkeveien 1"})
    assert response.status_code == 201
    return response.get_json()


def _create_product(client, producer_id, **overrides):
    payload = {
        "name": "Whole Milk",
        "description": "Fresh whole milk",
        "category": "Dairy",
        "producerId": producer_id,
    }
    payload.update(overrides)
    response = client.post("/api/products", json=payload)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


class TestHealth:

    def test_health_reports_database_ok(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.get_json()["database"] == "ok"


class TestProductEndpoints:

    def test_list_is_empty_initially(self, client):
        response = client.get("/api/products")

        assert response.status_code == 200
        assert response.get_json() == []

    def test_create_returns_camel_case_product(self, client, producer):
        created = _create_product(client, producer["producerId"])

        assert created["productId"] > 0
        assert created["name"] == "Whole Milk"
        assert created["producerId"] == producer["producerId"]
        assert created["imageUrl"] is None
        assert created["createdAt"] is not None

    def test_get_missing_product_is_404(self, client):
        response = client.get("/api/products/4040")

        assert response.status_code == 404
        assert "not found" in response.get_json()["error"]

    def test_create_requires_name(self, client, producer):
        response = client.post("/api/products", json={"description": "x", "producerId": producer["producerId"]})

        assert response.status_code == 400
        assert "name" in response.get_json()["error"]

    def test_create_rejects_unknown_producer(self, client):
        response = client.post("/api/products", json={"name": "Orphan", "producerId": 999})

        assert response.status_code == 400
        assert "Producer 999" in response.get_json()["error"]

    def test_create_requires_json(self, client):
        response = client.post("/api/products", data="name=Milk")

        assert response.status_code == 400

    def test_search_is_case_insensitive_over_name_and_description(self, client, producer):
        widget = _create_product(client, producer["producerId"], name="ABC Widget", description="A gadget")
        described = _create_product(client, producer["producerId"], name="Bread", description="Baked by abc bakers")
        _create_product(client, producer["producerId"], name="Cheese", description="Aged")

        response = client.get("/api/products?search=abc")

        ids = [p["productId"] for p in response.get_json()]
        assert ids == [widget["productId"], described["productId"]]

    def test_filter_by_producer(self, client, producer):
        other = client.post("/api/producers", json={"name": "Fjord Bakery"}).get_json()
        mine = _create_product(client, producer["producerId"])
        _create_product(client, other["producerId"], name="Sourdough")

        response = client.get(f"/api/products?producerId={producer['producerId']}")

        assert [p["productId"] for p in response.get_json()] == [mine["productId"]]

    def test_filter_by_non_numeric_producer_is_400(self, client):
        response = client.get("/api/products?producerId=abc")

        assert response.status_code == 400

    def test_update_product(self, client, producer):
        created = _create_product(client, producer["producerId"])

        response = client.put(
            f"/api/products/{created['productId']}",
            json={"name": "Skimmed Milk", "description": "Low fat", "producerId": producer["producerId"]},
        )

        assert response.status_code == 200
        body = response.get_json()
        assert body["name"] == "Skimmed Milk"
        assert body["category"] is None
        assert client.get(f"/api/products/{created['productId']}").get_json()["description"] == "Low fat"

    def test_update_missing_product_is_404(self, client, producer):
        response = client.put("/api/products/321", json={"name": "X", "producerId": producer["producerId"]})

        assert response.status_code == 404

    def test_update_with_mismatched_body_id_is_400(self, client, producer):
        created = _create_product(client, producer["producerId"])

        response = client.put(
            f"/api/products/{created['productId']}",
            json={"productId": created["productId"] + 1, "name": "X", "producerId": producer["producerId"]},
        )

        assert response.status_code == 400

    def test_delete_product_removes_only_that_id(self, client, producer):
        first = _create_product(client, producer["producerId"], name="First")
        second = _create_product(client, producer["producerId"], name="Second")

        response = client.delete(f"/api/products/{first['productId']}")

        assert response.status_code == 200
        remaining = [p["productId"] for p in client.get("/api/products").get_json()]
        assert remaining == [second["productId"]]

    def test_delete_missing_product_is_404(self, client):
        assert client.delete("/api/products/8080").status_code == 404


class TestProducerEndpoints:

    def test_list_includes_product_counts(self, client, producer):
        _create_product(client, producer["producerId"])
        _create_product(client, producer["producerId"], name="Butter")

        body = client.get("/api/producers").get_json()

        assert len(body) == 1
        assert body[0]["name"] == "Nordic Dairy AS"
        assert body[0]["productCount"] == 2

    def test_create_requires_name(self, client):
        response = client.post("/api/producers", json={"address": "Nowhere"})

        assert response.status_code == 400

    def test_get_producer(self, client, producer):
        response = client.get(f"/api/producers/{producer['producerId']}")

        assert response.status_code == 200
        assert response.get_json()["address"] == "Melkeveien 1"

    def test_list_producer_products(self, client, producer):
        created = _create_product(client, producer["producerId"])

        response = client.get(f"/api/producers/{producer['producerId']}/products")

        assert [p["productId"] for p in response.get_json()] == [created["productId"]]

    def test_list_products_of_missing_producer_is_404(self, client):
        assert client.get("/api/producers/77/products").status_code == 404

    def test_update_producer(self, client, producer):
        response = client.put(f"/api/producers/{producer['producerId']}", json={"name": "Nordic Dairy ASA"})

        assert response.status_code == 200
        assert response.get_json()["name"] == "Nordic Dairy ASA"

    def test_delete_producer_cascades_to_products(self, client, producer):
        for name in ("Milk", "Cream", "Butter"):
            _create_product(client, producer["producerId"], name=name)

        response = client.delete(f"/api/producers/{producer['producerId']}")

        assert response.status_code == 200
        assert response.get_json()["deletedProducts"] == 3
        assert client.get("/api/products").get_json() == []
        assert client.get(f"/api/producers/{producer['producerId']}").status_code == 404

    def test_delete_missing_producer_is_404(self, client):
        assert client.delete("/api/producers/9").status_code == 404

    def test_unknown_route_returns_json_error(self, client):
        response = client.get("/api/nothing-here")

        assert response.status_code == 404
        assert "error" in response.get_json()


class TestTimestamps:

    def test_created_and_updated_carry_the_same_offset(self, client, producer):
        created = _create_product(client, producer["producerId"])

        updated = client.put(
            f"/api/products/{created['productId']}",
            json={"name": "Skimmed Milk", "producerId": producer["producerId"]},
        ).get_json()
        fetched = client.get(f"/api/products/{created['productId']}").get_json()

        for body in (created, updated, fetched):
            assert body["createdAt"].endswith("+00:00")
            assert body["updatedAt"].endswith("+00:00")

    def test_producer_timestamps_are_utc(self, client, producer):
        fetched = client.get(f"/api/producers/{producer['producerId']}").get_json()

        assert fetched["createdAt"].endswith("+00:00")
        assert fetched["updatedAt"].endswith("+00:00")


class TestRepositoryFailuresBecomeServerErrors:

    def test_failed_create_is_500(self, app, client, producer, monkeypatch):
        monkeypatch.setattr(app.config["product_repository"], "create", lambda db, product: False)

        response = client.post("/api/products", json={"name": "Milk", "producerId": producer["producerId"]})

        assert response.status_code == 500
        assert response.get_json()["error"] == "Product could not be created."

    def test_failed_list_is_500(self, app, client, monkeypatch):
        monkeypatch.setattr(app.config["product_repository"], "get_all", lambda db: None)

        response = client.get("/api/products")

        assert response.status_code == 500
        assert "error" in response.get_json()

    def test_failed_producer_delete_is_500_and_keeps_products(self, app, client, producer, monkeypatch):
        _create_product(client, producer["producerId"])
        monkeypatch.setattr(app.config["producer_repository"], "delete_producer", lambda db, producer_id: False)

        response = client.delete(f"/api/producers/{producer['producerId']}")

        assert response.status_code == 500
        assert "could not be deleted" in response.get_json()["error"]
        assert len(client.get("/api/products").get_json()) == 1
