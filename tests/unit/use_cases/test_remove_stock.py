"""Tests for RemoveStockUseCase."""

import pytest

from src.application.dto.requests import RemoveStockRequest
from src.application.use_cases.remove_stock import RemoveStockUseCase
from src.core.entities.query import FilterSpec
from src.core.exceptions import RecordNotFoundError, StoreError, ValidationError


@pytest.fixture
def use_case(mock_store, view):
    return RemoveStockUseCase(inventory_store=mock_store, view=view)


class TestRemoveStock:
    async def test_confirmed_record_replaces_view_entry(
        self, use_case, mock_store, view, sample_record
    ):
        generation = view.begin_fetch(FilterSpec())
        view.apply_fetch(generation, [sample_record])
        confirmed = sample_record.model_copy(update={"quantity": 3})
        mock_store.get_by_id.side_effect = [sample_record, confirmed]

        outcome = await use_case.execute("id-x1", RemoveStockRequest(amount=7))

        assert outcome.record.quantity == 3
        assert view.records[0].quantity == 3
        mock_store.select_where.assert_not_awaited()

    async def test_to_response(self, use_case, mock_store, sample_record):
        mock_store.get_by_id.side_effect = [sample_record, sample_record]
        outcome = await use_case.execute("id-x1", RemoveStockRequest(amount="2"))

        response = use_case.to_response(outcome)

        assert response.requested_amount == "2"
        assert response.removed == 2
        assert response.states == ["idle", "validating", "applying", "confirming", "done"]

    async def test_validation_failure_leaves_view_alone(self, use_case, mock_store):
        with pytest.raises(ValidationError):
            await use_case.execute("id-x1", RemoveStockRequest(amount=0.5))
        mock_store.update_by_id.assert_not_awaited()
        mock_store.select_where.assert_not_awaited()

    async def test_store_failure_triggers_refetch(self, use_case, mock_store, sample_record):
        mock_store.get_by_id.return_value = sample_record
        mock_store.update_by_id.side_effect = StoreError("update", "disk I/O")

        with pytest.raises(StoreError):
            await use_case.execute("id-x1", RemoveStockRequest(amount=1))

        mock_store.select_where.assert_awaited_once()

    async def test_missing_record(self, use_case):
        with pytest.raises(RecordNotFoundError):
            await use_case.execute("missing", RemoveStockRequest(amount=1))
