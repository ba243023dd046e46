"""Pytest configuration and fixtures."""

from collections.abc import Callable, Generator
from datetime import UTC, datetime, timedelta
from typing import Any
from unittest.mock import AsyncMock

import pytest

from src.application.inventory_view import InventoryView
from src.application.services import reset_services
from src.config import reset_settings
from src.core.entities.inventory import InventoryRecord
from src.core.interfaces.inventory_store import IInventoryStore

BASE_TIME = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _reset_singletons() -> Generator[None, None, None]:
    """Give each test fresh settings and a fresh inventory view."""
    reset_settings()
    reset_services()
    yield
    reset_settings()
    reset_services()


@pytest.fixture
def make_record() -> Callable[..., InventoryRecord]:
    """Factory for stored-looking records; minutes offsets the timestamps."""

    def _make(sku: str = "WH-001", minutes: int = 0, **overrides: Any) -> InventoryRecord:
        stamp = BASE_TIME + timedelta(minutes=minutes)
        values: dict[str, Any] = {
            "id": f"id-{sku.lower()}",
            "sku": sku,
            "name": f"Item {sku}",
            "quantity": 10,
            "minimum_stock": 5,
            "created_at": stamp,
            "updated_at": stamp,
        }
        values.update(overrides)
        return InventoryRecord(**values)

    return _make


@pytest.fixture
def sample_record(make_record) -> InventoryRecord:
    """A record with ten units and a threshold of five."""
    return make_record(
        "X1",
        name="Widget",
        category="Hardware",
        location="Aisle 1",
    )


@pytest.fixture
def mock_store() -> AsyncMock:
    """Inventory store double with empty defaults."""
    store = AsyncMock(spec=IInventoryStore)
    store.select_where.return_value = []
    store.count_all.return_value = 0
    store.list_categories.return_value = []
    store.list_locations.return_value = []
    store.get_by_id.return_value = None
    return store


@pytest.fixture
def view() -> InventoryView:
    return InventoryView()
