"""Dashboard and report endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from src.api.dependencies import (
    get_dashboard_summary_use_case,
    get_export_records_use_case,
    get_report_overview_use_case,
)
from src.api.routes.exchange import file_response
from src.application.dto.responses import (
    DashboardResponse,
    ErrorResponse,
    ReportOverviewResponse,
)
from src.application.use_cases import (
    DashboardSummaryUseCase,
    ExportRecordsUseCase,
    ReportOverviewUseCase,
)

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(
    use_case: DashboardSummaryUseCase = Depends(get_dashboard_summary_use_case),
) -> DashboardResponse:
    """Totals, lowest-stock records and the latest stock updates."""
    return use_case.to_response(await use_case.execute())


@router.get("/overview", response_model=ReportOverviewResponse)
async def overview(
    use_case: ReportOverviewUseCase = Depends(get_report_overview_use_case),
) -> ReportOverviewResponse:
    """Totals and category distribution."""
    return use_case.to_response(await use_case.execute())


@router.get(
    "/{report_type}",
    response_class=Response,
    responses={422: {"model": ErrorResponse}},
)
async def download_report(
    report_type: str,
    use_case: ExportRecordsUseCase = Depends(get_export_records_use_case),
) -> Response:
    """Download a report: inventory, low-stock or activity."""
    return file_response(await use_case.generate_report(report_type))
