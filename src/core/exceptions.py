"""
Domain exceptions for the WareFlow inventory core.

Each error kind carries its own human-readable message so the caller can
surface it without further translation.
"""

from typing import Any


class WareFlowError(Exception):
    """Base exception for all WareFlow errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(WareFlowError):
    """A field value was rejected before reaching the store."""

    def __init__(self, field: str, reason: str, message: str, value: Any = None):
        super().__init__(
            f"Invalid {field.replace('_', ' ')}: {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "reason": reason,
                "value": str(value)[:100] if value is not None else None,
            },
        )
        self.field = field
        self.reason = reason


# Storage Exceptions
class StorageError(WareFlowError):
    """Base exception for record store operations."""

    pass


class DuplicateKeyError(StorageError):
    """A unique key (the SKU) already exists in the store."""

    def __init__(self, field: str = "sku", value: Any = None):
        super().__init__(
            "A product with this SKU already exists",
            code="DUPLICATE_KEY",
            details={"field": field, "value": value},
        )
        self.field = field


class ConnectivityError(StorageError):
    """The store could not be reached; transient."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            "Network error - unable to connect to the database. "
            "Please check your connection and try again.",
            code="STORE_UNAVAILABLE",
            details={"operation": operation, "error": error},
        )
        self.operation = operation


class StoreError(StorageError):
    """The store rejected the operation; not retryable."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"The inventory store rejected {operation}: {error}",
            code="STORE_ERROR",
            details={"operation": operation, "error": error},
        )
        self.operation = operation


class RecordNotFoundError(StorageError):
    """Inventory record not found."""

    def __init__(self, record_id: str):
        super().__init__(
            f"Inventory record not found: {record_id}",
            code="RECORD_NOT_FOUND",
            details={"record_id": record_id},
        )


# Exchange Exceptions
class ExchangeError(WareFlowError):
    """Base exception for import, export and report generation."""

    pass


class ImportFormatError(ExchangeError):
    """Imported file is missing required columns."""

    def __init__(self, missing: list[str]):
        super().__init__(
            f"Import file is missing required columns: {', '.join(missing)}",
            code="IMPORT_FORMAT_ERROR",
            details={"missing_columns": missing},
        )


class InvalidRowError(ExchangeError):
    """An imported row failed field validation."""

    def __init__(self, row_number: int, error: ValidationError):
        super().__init__(
            f"Row {row_number}: {error.message}",
            code="INVALID_IMPORT_ROW",
            details={"row": row_number, **error.details},
        )
        self.row_number = row_number


class InvalidReportTypeError(ExchangeError):
    """Requested report type does not exist."""

    def __init__(self, report_type: str, allowed: list[str]):
        super().__init__(
            f"Invalid report type '{report_type}'. Allowed: {', '.join(allowed)}",
            code="INVALID_REPORT_TYPE",
            details={"report_type": report_type, "allowed": allowed},
        )


class NothingToExportError(ExchangeError):
    """Export was requested on an empty store."""

    def __init__(self):
        super().__init__("No data to export", code="NOTHING_TO_EXPORT")


class TabularCodecError(ExchangeError):
    """Interchange file could not be read or written."""

    def __init__(self, filename: str, reason: str):
        super().__init__(
            f"Failed to read '{filename}': {reason}",
            code="TABULAR_CODEC_ERROR",
            details={"filename": filename, "reason": reason},
        )


class UnsupportedFileTypeError(ExchangeError):
    """Uploaded file type is not supported."""

    def __init__(self, filename: str, extension: str, allowed: list[str]):
        super().__init__(
            f"Unsupported file type '{extension}'. Allowed: {', '.join(allowed)}",
            code="UNSUPPORTED_FILE_TYPE",
            details={"filename": filename, "extension": extension, "allowed": allowed},
        )


class FileTooLargeError(ExchangeError):
    """Uploaded file exceeds size limit."""

    def __init__(self, filename: str, size: int, max_size: int):
        super().__init__(
            f"File '{filename}' is too large ({size} bytes, max {max_size})",
            code="FILE_TOO_LARGE",
            details={"filename": filename, "size": size, "max_size": max_size},
        )


class ConfigurationError(WareFlowError):
    """Configuration error."""

    pass
