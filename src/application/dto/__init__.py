"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from src.application.dto.requests import (
    AddRecordRequest,
    LookupValueRequest,
    RemoveStockRequest,
)
from src.application.dto.responses import (
    ActivityEntryResponse,
    CategoryStatResponse,
    DashboardResponse,
    ErrorResponse,
    HealthResponse,
    ImportResultResponse,
    InventoryRecordResponse,
    LookupListResponse,
    LowStockAlertResponse,
    ProviderHealthResponse,
    RecordListResponse,
    RemoveStockResponse,
    ReportOverviewResponse,
)

__all__ = [
    # Requests
    "AddRecordRequest",
    "RemoveStockRequest",
    "LookupValueRequest",
    # Responses
    "InventoryRecordResponse",
    "RecordListResponse",
    "RemoveStockResponse",
    "ImportResultResponse",
    "LookupListResponse",
    "CategoryStatResponse",
    "LowStockAlertResponse",
    "ActivityEntryResponse",
    "DashboardResponse",
    "ReportOverviewResponse",
    "ProviderHealthResponse",
    "HealthResponse",
    "ErrorResponse",
]
