"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services
3. Keeping the shared inventory view and service factories

Use cases are the only entry point for API handlers and the CLI.
"""

from src.application.dto.requests import (
    AddRecordRequest,
    LookupValueRequest,
    RemoveStockRequest,
)
from src.application.dto.responses import (
    DashboardResponse,
    ErrorResponse,
    HealthResponse,
    ImportResultResponse,
    InventoryRecordResponse,
    LookupListResponse,
    RecordListResponse,
    RemoveStockResponse,
    ReportOverviewResponse,
)
from src.application.inventory_view import InventoryView, ViewSnapshot
from src.application.services import (
    get_inventory_view,
    get_stock_mutation_service,
    reset_services,
)
from src.application.use_cases import (
    AddRecordUseCase,
    DashboardSummaryUseCase,
    ExportRecordsUseCase,
    ImportBatchUseCase,
    ListRecordsUseCase,
    ManageLookupsUseCase,
    RemoveStockUseCase,
    ReportOverviewUseCase,
)

__all__ = [
    # Request DTOs
    "AddRecordRequest",
    "RemoveStockRequest",
    "LookupValueRequest",
    # Response DTOs
    "InventoryRecordResponse",
    "RecordListResponse",
    "RemoveStockResponse",
    "ImportResultResponse",
    "LookupListResponse",
    "DashboardResponse",
    "ReportOverviewResponse",
    "HealthResponse",
    "ErrorResponse",
    # View
    "InventoryView",
    "ViewSnapshot",
    # Use Cases
    "ListRecordsUseCase",
    "AddRecordUseCase",
    "RemoveStockUseCase",
    "ImportBatchUseCase",
    "ExportRecordsUseCase",
    "DashboardSummaryUseCase",
    "ReportOverviewUseCase",
    "ManageLookupsUseCase",
    # Service factories
    "get_inventory_view",
    "get_stock_mutation_service",
    "reset_services",
]
