"""Tests for AddRecordUseCase."""

import pytest

from src.application.dto.requests import AddRecordRequest
from src.application.use_cases.add_record import AddRecordUseCase
from src.core.exceptions import ConnectivityError, DuplicateKeyError, ValidationError


@pytest.fixture
def use_case(mock_store, view):
    mock_store.insert_one.side_effect = lambda record: record.model_copy(update={"id": "new"})
    return AddRecordUseCase(inventory_store=mock_store, view=view)


class TestAddRecord:
    async def test_inserts_and_refreshes_view(self, use_case, mock_store, view):
        request = AddRecordRequest(sku="X1", name="Widget", quantity="10", minimum_stock=5.0)

        created = await use_case.execute(request)

        inserted = mock_store.insert_one.await_args.args[0]
        assert inserted.quantity == 10
        assert inserted.minimum_stock == 5
        assert inserted.unit == "pcs"
        assert created.id == "new"
        mock_store.select_where.assert_awaited_once()
        assert view.generation == 1

    @pytest.mark.parametrize(
        "overrides,field",
        [
            ({"sku": "  "}, "sku"),
            ({"name": ""}, "name"),
            ({"quantity": 3.5}, "quantity"),
            ({"quantity": -1}, "quantity"),
            ({"minimum_stock": "many"}, "minimum_stock"),
            ({"unit": "crate"}, "unit"),
        ],
    )
    async def test_invalid_fields_are_not_sent(self, use_case, mock_store, overrides, field):
        request = AddRecordRequest(**{"sku": "X1", "name": "Widget", **overrides})

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(request)

        assert exc_info.value.field == field
        mock_store.insert_one.assert_not_awaited()

    async def test_fractional_quantity_is_not_floored(self, use_case):
        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(AddRecordRequest(sku="X1", name="Widget", quantity=3.5))
        assert exc_info.value.message == "Invalid quantity: Must be a whole number"

    async def test_duplicate_refreshes_and_propagates(self, use_case, mock_store):
        mock_store.insert_one.side_effect = DuplicateKeyError("sku")

        with pytest.raises(DuplicateKeyError):
            await use_case.execute(AddRecordRequest(sku="X1", name="Widget"))

        mock_store.select_where.assert_awaited_once()

    async def test_failed_refresh_does_not_mask_success(self, use_case, mock_store):
        mock_store.select_where.side_effect = ConnectivityError("select", "database is locked")

        created = await use_case.execute(AddRecordRequest(sku="X1", name="Widget"))

        assert created.id == "new"
