"""Tests for ImportBatchUseCase."""

import pytest

from src.application.use_cases.import_batch import ImportBatchUseCase
from src.config import reset_settings
from src.core.exceptions import (
    DuplicateKeyError,
    FileTooLargeError,
    ImportFormatError,
    InvalidRowError,
    UnsupportedFileTypeError,
)
from src.infrastructure.tabular import CsvCodec

GOOD_CSV = b"sku,name,quantity,minimum_stock\nA1,Alpha,5,2\nB1,Beta,x,\n"
BAD_ROW_CSV = b"sku,name,quantity\nA1,Alpha,5\nB1,Beta,-3\n"


@pytest.fixture
def use_case_factory(mock_store, view):
    mock_store.insert_many.side_effect = lambda records: records
    mock_store.count_all.return_value = 12

    def _make(validate_rows=None):
        return ImportBatchUseCase(
            inventory_store=mock_store,
            codec=CsvCodec(),
            view=view,
            validate_rows=validate_rows,
        )

    return _make


class TestImportBatch:
    async def test_imports_all_rows_leniently(self, use_case_factory, mock_store):
        result = await use_case_factory().execute(GOOD_CSV, "stock.csv")

        candidates = mock_store.insert_many.await_args.args[0]
        assert [c.sku for c in candidates] == ["A1", "B1"]
        assert candidates[1].quantity == 0
        assert candidates[1].minimum_stock == 0
        assert result.imported == 2
        assert result.total_records == 12
        assert result.validated is False
        mock_store.select_where.assert_awaited_once()

    async def test_unvalidated_import_passes_negative_quantity_to_store(
        self, use_case_factory, mock_store
    ):
        await use_case_factory(validate_rows=False).execute(BAD_ROW_CSV, "stock.csv")
        candidates = mock_store.insert_many.await_args.args[0]
        assert candidates[1].quantity == -3

    async def test_validation_enabled_rejects_whole_batch(self, use_case_factory, mock_store):
        with pytest.raises(InvalidRowError) as exc_info:
            await use_case_factory(validate_rows=True).execute(BAD_ROW_CSV, "stock.csv")
        assert exc_info.value.row_number == 3
        mock_store.insert_many.assert_not_awaited()

    async def test_validation_follows_settings(self, use_case_factory, monkeypatch):
        monkeypatch.setenv("EXCHANGE_VALIDATE_IMPORTS", "true")
        reset_settings()

        with pytest.raises(InvalidRowError):
            await use_case_factory().execute(BAD_ROW_CSV, "stock.csv")

    async def test_missing_columns(self, use_case_factory, mock_store):
        with pytest.raises(ImportFormatError) as exc_info:
            await use_case_factory().execute(b"sku,name\nA1,Alpha\n", "stock.csv")
        assert exc_info.value.message.endswith("quantity")
        mock_store.insert_many.assert_not_awaited()

    async def test_store_rejection_inserts_nothing_and_refreshes(
        self, use_case_factory, mock_store
    ):
        mock_store.insert_many.side_effect = DuplicateKeyError("sku")

        with pytest.raises(DuplicateKeyError):
            await use_case_factory().execute(GOOD_CSV, "stock.csv")

        mock_store.count_all.assert_not_awaited()
        mock_store.select_where.assert_awaited_once()

    async def test_unsupported_extension(self, use_case_factory):
        with pytest.raises(UnsupportedFileTypeError):
            await use_case_factory().execute(GOOD_CSV, "stock.txt")

    async def test_file_too_large(self, use_case_factory, monkeypatch):
        monkeypatch.setenv("API_MAX_UPLOAD_SIZE", "10")
        reset_settings()

        with pytest.raises(FileTooLargeError):
            await use_case_factory().execute(GOOD_CSV, "stock.csv")

    async def test_to_response(self, use_case_factory):
        use_case = use_case_factory()
        response = use_case.to_response(await use_case.execute(GOOD_CSV, "stock.csv"))
        assert response.imported == 2
        assert response.filename == "stock.csv"
