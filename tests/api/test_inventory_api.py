"""API tests for the inventory endpoints."""

from httpx import AsyncClient

from src.core.entities.query import Equals
from src.core.exceptions import ConnectivityError, DuplicateKeyError, StoreError


class TestListRecords:
    async def test_list(self, client: AsyncClient, mock_store, sample_record):
        mock_store.select_where.return_value = [sample_record]

        response = await client.get("/api/inventory", params={"category": "Hardware"})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["sku"] == "X1"
        assert data["stale"] is False
        predicates = mock_store.select_where.await_args.args[0]
        assert predicates == [Equals("category", "Hardware")]

    async def test_stale_listing_when_store_unreachable(self, client: AsyncClient, mock_store):
        mock_store.select_where.side_effect = ConnectivityError("select", "database is locked")

        response = await client.get("/api/inventory")

        assert response.status_code == 200
        data = response.json()
        assert data["stale"] is True
        assert data["notice"].startswith("Network error")

    async def test_unknown_stock_level(self, client: AsyncClient):
        response = await client.get("/api/inventory", params={"stock_level": "some"})
        assert response.status_code == 422
        assert response.json()["error_code"] == "REQUEST_VALIDATION_ERROR"

    async def test_store_error_is_500(self, client: AsyncClient, mock_store):
        mock_store.select_where.side_effect = StoreError("select", "malformed")
        response = await client.get("/api/inventory")
        assert response.status_code == 500
        assert response.json()["error_code"] == "STORE_ERROR"


class TestAddRecord:
    async def test_created(self, client: AsyncClient, mock_store):
        mock_store.insert_one.side_effect = lambda record: record.model_copy(
            update={"id": "abc"}
        )

        response = await client.post(
            "/api/inventory",
            json={"sku": "X1", "name": "Widget", "quantity": 10, "minimum_stock": 5},
        )

        assert response.status_code == 201
        assert response.json()["id"] == "abc"

    async def test_validation_error_is_400(self, client: AsyncClient, mock_store):
        response = await client.post(
            "/api/inventory",
            json={"sku": "X1", "name": "Widget", "quantity": 3.5},
        )

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert data["message"] == "Invalid quantity: Must be a whole number"
        assert data["hint"]
        mock_store.insert_one.assert_not_awaited()

    async def test_duplicate_is_409(self, client: AsyncClient, mock_store):
        mock_store.insert_one.side_effect = DuplicateKeyError("sku")

        response = await client.post("/api/inventory", json={"sku": "X1", "name": "Widget"})

        assert response.status_code == 409
        assert response.json()["message"] == "A product with this SKU already exists"

    async def test_unreachable_store_is_503(self, client: AsyncClient, mock_store):
        mock_store.insert_one.side_effect = ConnectivityError("insert", "database is locked")

        response = await client.post("/api/inventory", json={"sku": "X1", "name": "Widget"})

        assert response.status_code == 503
        assert response.json()["error_code"] == "STORE_UNAVAILABLE"

    async def test_missing_body_field(self, client: AsyncClient):
        response = await client.post("/api/inventory", json={"name": "Widget"})
        assert response.status_code == 422


class TestRemoveStock:
    async def test_remove(self, client: AsyncClient, mock_store, sample_record):
        confirmed = sample_record.model_copy(update={"quantity": 3})
        mock_store.get_by_id.side_effect = [sample_record, confirmed]

        response = await client.post("/api/inventory/id-x1/remove-stock", json={"amount": 7})

        assert response.status_code == 200
        data = response.json()
        assert data["record"]["quantity"] == 3
        assert data["removed"] == 7
        assert data["states"][-1] == "done"

    async def test_not_found(self, client: AsyncClient):
        response = await client.post("/api/inventory/nope/remove-stock", json={"amount": 1})
        assert response.status_code == 404
        assert response.json()["error_code"] == "RECORD_NOT_FOUND"

    async def test_invalid_amount(self, client: AsyncClient):
        response = await client.post("/api/inventory/id-x1/remove-stock", json={"amount": -2})
        assert response.status_code == 400


class TestLookups:
    async def test_list_categories(self, client: AsyncClient, mock_store):
        mock_store.list_categories.return_value = ["Hardware", "Tools"]

        response = await client.get("/api/inventory/categories")

        assert response.status_code == 200
        assert response.json() == {"names": ["Hardware", "Tools"], "total": 2}

    async def test_add_location(self, client: AsyncClient, mock_store):
        mock_store.list_locations.return_value = ["Dock 1"]

        response = await client.post("/api/inventory/locations", json={"name": " Dock 1 "})

        assert response.status_code == 201
        mock_store.add_location.assert_awaited_once_with("Dock 1")
        assert response.json()["names"] == ["Dock 1"]

    async def test_blank_name_rejected(self, client: AsyncClient):
        response = await client.post("/api/inventory/categories", json={"name": "  "})
        assert response.status_code == 400
