# Third-party imports
from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

# Local application imports
from consulta.api.internal.utils.permissions import require_consultation_reader
from consulta.core.db import get_async_session
from consulta.core.monitoring.logging import get_request_logger
from consulta.dependancies.filters import consultation_filters
from consulta.models.auth.user import User
from consulta.schemas.consultations.consultation_schemas import ConsultationFilters
from consulta.services.consultations.consultation_services import fetch_consultations
from consulta.services.exports.renderers import (
    CSV_MEDIA_TYPE,
    EXCEL_MEDIA_TYPE,
    PDF_MEDIA_TYPE,
    render_csv,
    render_excel,
    render_pdf,
)
from consulta.services.exports.row_services import build_export_rows, export_file_name
from consulta.settings import settings

router = APIRouter(prefix="/export/consultations", tags=["Exports"])


def _attachment(content: bytes, media_type: str, extension: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{export_file_name(extension)}"'},
    )


async def _export_rows(db: AsyncSession, filters: ConsultationFilters) -> list[list[str]]:
    consultations = await fetch_consultations(db, filters, max_rows=settings.EXPORT_MAX_ROWS)
    return build_export_rows(consultations)


@router.get("/csv")
async def export_csv(
    request: Request,
    filters: ConsultationFilters = Depends(consultation_filters),
    current_user: User = Depends(require_consultation_reader),
    db: AsyncSession = Depends(get_async_session),
):
    """Export filtered consultations as CSV"""
    rows = await _export_rows(db, filters)
    get_request_logger(__name__, request, user_id=current_user.id).info(f"CSV export: rows={len(rows)}")
    return _attachment(render_csv(rows), CSV_MEDIA_TYPE, "csv")


@router.get("/excel")
async def export_excel(
    request: Request,
    filters: ConsultationFilters = Depends(consultation_filters),
    current_user: User = Depends(require_consultation_reader),
    db: AsyncSession = Depends(get_async_session),
):
    """Export filtered consultations as an Excel workbook"""
    rows = await _export_rows(db, filters)
    content = await run_in_threadpool(render_excel, rows)
    get_request_logger(__name__, request, user_id=current_user.id).info(f"Excel export: rows={len(rows)}")
    return _attachment(content, EXCEL_MEDIA_TYPE, "xlsx")


@router.get("/pdf")
async def export_pdf(
    request: Request,
    filters: ConsultationFilters = Depends(consultation_filters),
    current_user: User = Depends(require_consultation_reader),
    db: AsyncSession = Depends(get_async_session),
):
    """Export filtered consultations as a PDF report"""
    rows = await _export_rows(db, filters)
    content = await run_in_threadpool(render_pdf, rows, filters.period_label())
    get_request_logger(__name__, request, user_id=current_user.id).info(f"PDF export: rows={len(rows)}")
    return _attachment(content, PDF_MEDIA_TYPE, "pdf")
