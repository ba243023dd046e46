"""Inventory record endpoints."""

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import (
    get_add_record_use_case,
    get_list_records_use_case,
    get_manage_lookups_use_case,
    get_remove_stock_use_case,
)
from src.application.dto.requests import (
    AddRecordRequest,
    LookupValueRequest,
    RemoveStockRequest,
)
from src.application.dto.responses import (
    ErrorResponse,
    InventoryRecordResponse,
    LookupListResponse,
    RecordListResponse,
    RemoveStockResponse,
)
from src.application.use_cases import (
    AddRecordUseCase,
    ListRecordsUseCase,
    ManageLookupsUseCase,
    RemoveStockUseCase,
)
from src.core.entities.query import ALL, FilterSpec, StockLevel

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.get(
    "",
    response_model=RecordListResponse,
    responses={500: {"model": ErrorResponse}},
)
async def list_records(
    search: str = Query(default="", description="Substring of name or SKU"),
    category: str = Query(default=ALL),
    location: str = Query(default=ALL),
    stock_level: StockLevel = Query(default=StockLevel.ALL),
    use_case: ListRecordsUseCase = Depends(get_list_records_use_case),
) -> RecordListResponse:
    """
    List records matching the filters, newest first.

    If the database is unreachable the last known listing is returned with
    stale=true and a notice instead of an error.
    """
    spec = FilterSpec(
        search=search,
        category=category,
        location=location,
        stock_level=stock_level,
    )
    result = await use_case.execute(spec)
    return use_case.to_response(result)


@router.post(
    "",
    response_model=InventoryRecordResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def add_record(
    request: AddRecordRequest,
    use_case: AddRecordUseCase = Depends(get_add_record_use_case),
) -> InventoryRecordResponse:
    """Create a record; the SKU must be unique."""
    record = await use_case.execute(request)
    return InventoryRecordResponse.from_entity(record)


@router.post(
    "/{record_id}/remove-stock",
    response_model=RemoveStockResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def remove_stock(
    record_id: str,
    request: RemoveStockRequest,
    use_case: RemoveStockUseCase = Depends(get_remove_stock_use_case),
) -> RemoveStockResponse:
    """Remove stock, clamped to what is on hand, and return the confirmed record."""
    outcome = await use_case.execute(record_id, request)
    return use_case.to_response(outcome)


@router.get("/categories", response_model=LookupListResponse)
async def list_categories(
    use_case: ManageLookupsUseCase = Depends(get_manage_lookups_use_case),
) -> LookupListResponse:
    """List category names for the category filter."""
    names = await use_case.list_names("category")
    return LookupListResponse(names=names, total=len(names))


@router.post(
    "/categories",
    response_model=LookupListResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def add_category(
    request: LookupValueRequest,
    use_case: ManageLookupsUseCase = Depends(get_manage_lookups_use_case),
) -> LookupListResponse:
    """Register a category name and return the updated list."""
    await use_case.add_name("category", request.name)
    names = await use_case.list_names("category")
    return LookupListResponse(names=names, total=len(names))


@router.get("/locations", response_model=LookupListResponse)
async def list_locations(
    use_case: ManageLookupsUseCase = Depends(get_manage_lookups_use_case),
) -> LookupListResponse:
    """List location names for the location filter."""
    names = await use_case.list_names("location")
    return LookupListResponse(names=names, total=len(names))


@router.post(
    "/locations",
    response_model=LookupListResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def add_location(
    request: LookupValueRequest,
    use_case: ManageLookupsUseCase = Depends(get_manage_lookups_use_case),
) -> LookupListResponse:
    """Register a location name and return the updated list."""
    await use_case.add_name("location", request.name)
    names = await use_case.list_names("location")
    return LookupListResponse(names=names, total=len(names))
