"""Unit tests for domain exceptions."""

import pytest

from src.core.exceptions import (
    ConnectivityError,
    DuplicateKeyError,
    ExchangeError,
    FileTooLargeError,
    ImportFormatError,
    InvalidReportTypeError,
    InvalidRowError,
    NothingToExportError,
    RecordNotFoundError,
    StorageError,
    StoreError,
    TabularCodecError,
    UnsupportedFileTypeError,
    ValidationError,
    WareFlowError,
)


class TestWareFlowError:
    def test_basic_initialization(self):
        error = WareFlowError("Something broke")
        assert error.message == "Something broke"
        assert error.code == "WareFlowError"
        assert error.details == {}
        assert str(error) == "Something broke"

    def test_to_dict(self):
        error = WareFlowError("Oops", code="CUSTOM", details={"k": "v"})
        assert error.to_dict() == {"error": "CUSTOM", "message": "Oops", "details": {"k": "v"}}


class TestValidationError:
    def test_carries_field_and_reason(self):
        error = ValidationError("minimum_stock", "negative", "Must be a positive number", -1)
        assert error.field == "minimum_stock"
        assert error.reason == "negative"
        assert error.code == "VALIDATION_ERROR"
        assert error.message == "Invalid minimum stock: Must be a positive number"
        assert error.details["value"] == "-1"


class TestStorageErrors:
    def test_duplicate_key_message(self):
        error = DuplicateKeyError()
        assert isinstance(error, StorageError)
        assert error.field == "sku"
        assert error.message == "A product with this SKU already exists"
        assert error.code == "DUPLICATE_KEY"

    def test_connectivity_is_distinct_from_store_error(self):
        unreachable = ConnectivityError("select", "database is locked")
        rejected = StoreError("insert", "CHECK constraint failed")
        assert unreachable.code == "STORE_UNAVAILABLE"
        assert rejected.code == "STORE_ERROR"
        assert unreachable.message != rejected.message
        assert "Network error" in unreachable.message

    def test_record_not_found(self):
        error = RecordNotFoundError("abc")
        assert error.details == {"record_id": "abc"}


class TestExchangeErrors:
    @pytest.mark.parametrize(
        "error",
        [
            ImportFormatError(["sku"]),
            InvalidRowError(3, ValidationError("quantity", "negative", "Must be a positive number")),
            InvalidReportTypeError("weekly", ["inventory"]),
            NothingToExportError(),
            TabularCodecError("x.xlsx", "bad zip"),
            UnsupportedFileTypeError("x.pdf", ".pdf", [".xlsx"]),
            FileTooLargeError("x.xlsx", 10, 5),
        ],
    )
    def test_all_are_exchange_errors(self, error):
        assert isinstance(error, ExchangeError)

    def test_every_kind_has_its_own_message(self):
        errors = [
            ValidationError("sku", "required", "This field is required"),
            DuplicateKeyError(),
            ConnectivityError("select", "locked"),
            StoreError("insert", "constraint"),
            RecordNotFoundError("x"),
            ImportFormatError(["sku"]),
            InvalidReportTypeError("weekly", ["inventory"]),
            NothingToExportError(),
        ]
        assert len({e.message for e in errors}) == len(errors)
        assert len({e.code for e in errors}) == len(errors)

    def test_nothing_to_export_message(self):
        assert NothingToExportError().message == "No data to export"

    def test_invalid_row_points_at_row(self):
        error = InvalidRowError(4, ValidationError("quantity", "not_integer", "Must be a whole number"))
        assert error.row_number == 4
        assert error.message.startswith("Row 4: ")
        assert error.details["field"] == "quantity"
