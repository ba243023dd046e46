"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from src.core.entities.inventory import InventoryRecord


class InventoryRecordResponse(BaseModel):
    """Single inventory record."""

    id: str = Field(..., description="Record ID")
    sku: str
    name: str
    description: str = ""
    quantity: int
    minimum_stock: int
    location: str = ""
    category: str = ""
    unit: str = "pcs"
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, record: InventoryRecord) -> "InventoryRecordResponse":
        return cls(**record.model_dump())


class RecordListResponse(BaseModel):
    """Filtered inventory listing.

    When the store is unreachable the last known snapshot is returned with
    stale=True and a notice for the user.
    """

    items: list[InventoryRecordResponse] = Field(default_factory=list)
    total: int = 0
    generation: int = Field(..., description="Request generation this listing answers")
    stale: bool = False
    notice: str | None = None


class RemoveStockResponse(BaseModel):
    """Confirmed record after a stock removal."""

    record: InventoryRecordResponse
    requested_amount: str
    removed: int = Field(..., description="Units removed after clamping")
    states: list[str] = Field(default_factory=list, description="Mutation state trace")


class ImportResultResponse(BaseModel):
    """Outcome of a batch import."""

    filename: str
    imported: int = Field(..., description="Rows inserted")
    total_records: int = Field(..., description="Records in the store after the import")
    validated: bool = Field(..., description="Whether rows were validated before insert")


class LookupListResponse(BaseModel):
    """Category or location names, ordered by name."""

    names: list[str] = Field(default_factory=list)
    total: int = 0


class CategoryStatResponse(BaseModel):
    name: str
    count: int
    percentage: float


class LowStockAlertResponse(BaseModel):
    id: str | None = None
    sku: str
    name: str
    quantity: int
    minimum_stock: int
    ratio: float


class ActivityEntryResponse(BaseModel):
    id: str | None = None
    item_name: str
    action: str
    timestamp: datetime | None = None


class DashboardResponse(BaseModel):
    """Dashboard aggregates."""

    total_items: int
    low_stock_count: int
    total_quantity: int
    top_low_stock: list[LowStockAlertResponse] = Field(default_factory=list)
    top_recently_updated: list[ActivityEntryResponse] = Field(default_factory=list)


class ReportOverviewResponse(BaseModel):
    """Reports page aggregates."""

    total_items: int
    low_stock_items: int
    total_quantity: int
    categories: list[CategoryStatResponse] = Field(default_factory=list)


class ProviderHealthResponse(BaseModel):
    """Dependency health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. DUPLICATE_KEY)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
