"""Import and export endpoints."""

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import Response

from src.api.dependencies import get_export_records_use_case, get_import_batch_use_case
from src.application.dto.responses import ErrorResponse, ImportResultResponse
from src.application.use_cases import ExportRecordsUseCase, ImportBatchUseCase
from src.core.entities.exchange import ExportedFile

router = APIRouter(prefix="/api/exchange", tags=["exchange"])


def file_response(exported: ExportedFile) -> Response:
    """Wrap an exported file as a download."""
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{exported.filename}"',
            "X-Row-Count": str(exported.row_count),
        },
    )


@router.post(
    "/import",
    response_model=ImportResultResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        413: {"model": ErrorResponse},
        415: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def import_file(
    file: UploadFile = File(...),
    use_case: ImportBatchUseCase = Depends(get_import_batch_use_case),
) -> ImportResultResponse:
    """
    Import records from an .xlsx or .csv file.

    The first row must name the columns; sku, name and quantity are
    required. All rows are inserted in one batch or none are.
    """
    filename = file.filename or ""
    content = await file.read()
    if len(content) == 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Empty file",
        )

    result = await use_case.execute(content, filename)
    return use_case.to_response(result)


@router.get(
    "/export",
    response_class=Response,
    responses={422: {"model": ErrorResponse}},
)
async def export_all(
    use_case: ExportRecordsUseCase = Depends(get_export_records_use_case),
) -> Response:
    """Download every record, most recently created first."""
    return file_response(await use_case.export_all())
