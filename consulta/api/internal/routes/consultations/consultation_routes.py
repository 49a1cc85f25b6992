# Standard library imports
from uuid import UUID

# Third-party imports
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from consulta.api.internal.utils.permissions import require_consultation_manager, require_consultation_reader
from consulta.core.db import get_async_session
from consulta.core.monitoring.logging import get_request_logger
from consulta.dependancies.filters import consultation_filters, pagination_params
from consulta.models.auth.user import User
from consulta.models.consultations.consultation import Consultation
from consulta.schemas.common import OperationResult
from consulta.schemas.consultations.consultation_schemas import (
    ConsultationCreate,
    ConsultationFilters,
    ConsultationListResponse,
    ConsultationMultiCreate,
    ConsultationMultiCreateResponse,
    ConsultationResponse,
    ConsultationStatusResponse,
    ConsultationStatusUpdate,
    ConsultationUpdate,
)
from consulta.services.consultations.consultation_services import (
    create_consultation,
    create_consultation_batch,
    delete_consultation,
    get_consultation,
    list_consultations,
    update_consultation,
    update_consultation_status,
)

router = APIRouter(prefix="/consultations", tags=["Consultations"])


async def _get_or_404(db: AsyncSession, consultation_id: UUID) -> Consultation:
    consultation = await get_consultation(db, consultation_id)
    if consultation is None:
        raise HTTPException(status_code=404, detail="Consulta no encontrada")
    return consultation


@router.post("", response_model=ConsultationResponse, status_code=status.HTTP_201_CREATED)
async def submit_consultation(
    request: Request,
    consultation_data: ConsultationCreate,
    db: AsyncSession = Depends(get_async_session),
):
    """Submit a citizen consultation (public)"""
    consultation = await create_consultation(db, consultation_data)
    get_request_logger(__name__, request).info(f"Consultation submitted: id={consultation.id}")
    return consultation


@router.post("/multi", response_model=ConsultationMultiCreateResponse, status_code=status.HTTP_201_CREATED)
async def submit_consultations(
    request: Request,
    batch: ConsultationMultiCreate,
    db: AsyncSession = Depends(get_async_session),
):
    """Submit one consultation per sector item sharing the same header (public)"""
    created_ids = await create_consultation_batch(db, batch)
    get_request_logger(__name__, request).info(f"Consultation batch submitted: count={len(created_ids)}")
    return ConsultationMultiCreateResponse(created_ids=created_ids)


@router.get("", response_model=ConsultationListResponse)
async def list_all_consultations(
    filters: ConsultationFilters = Depends(consultation_filters),
    pagination: tuple[int, int] = Depends(pagination_params),
    _: User = Depends(require_consultation_reader),
    db: AsyncSession = Depends(get_async_session),
):
    """List consultations with filters, newest first"""
    offset, limit = pagination
    consultations, total = await list_consultations(db, filters, offset=offset, limit=limit)
    return ConsultationListResponse(
        consultations=[ConsultationResponse.model_validate(consultation) for consultation in consultations],
        total=total,
    )


@router.get("/{consultation_id}", response_model=ConsultationResponse)
async def get_consultation_detail(
    consultation_id: UUID,
    _: User = Depends(require_consultation_reader),
    db: AsyncSession = Depends(get_async_session),
):
    """Get consultation details"""
    return await _get_or_404(db, consultation_id)


@router.patch("/{consultation_id}/status", response_model=ConsultationStatusResponse)
async def change_consultation_status(
    request: Request,
    consultation_id: UUID,
    status_data: ConsultationStatusUpdate,
    current_user: User = Depends(require_consultation_manager),
    db: AsyncSession = Depends(get_async_session),
):
    """Archive or reactivate a consultation"""
    consultation = await _get_or_404(db, consultation_id)
    consultation = await update_consultation_status(db, consultation, status_data.status)
    get_request_logger(__name__, request, user_id=current_user.id).info(
        f"Consultation status set: id={consultation_id} status={status_data.status.value}"
    )
    return ConsultationStatusResponse(id=consultation.id, status=consultation.status)


@router.put("/{consultation_id}", response_model=ConsultationResponse)
async def edit_consultation(
    request: Request,
    consultation_id: UUID,
    update_data: ConsultationUpdate,
    current_user: User = Depends(require_consultation_manager),
    db: AsyncSession = Depends(get_async_session),
):
    """Edit consultation fields. The geocode is always recomputed server-side"""
    consultation = await _get_or_404(db, consultation_id)
    consultation = await update_consultation(db, consultation, update_data)
    get_request_logger(__name__, request, user_id=current_user.id).info(f"Consultation edited: id={consultation_id}")
    return consultation


@router.delete("/{consultation_id}", response_model=OperationResult)
async def remove_consultation(
    request: Request,
    consultation_id: UUID,
    current_user: User = Depends(require_consultation_manager),
    db: AsyncSession = Depends(get_async_session),
):
    """Delete a consultation"""
    consultation = await _get_or_404(db, consultation_id)
    await delete_consultation(db, consultation)
    get_request_logger(__name__, request, user_id=current_user.id).info(f"Consultation deleted: id={consultation_id}")
    return OperationResult(id=str(consultation_id))
