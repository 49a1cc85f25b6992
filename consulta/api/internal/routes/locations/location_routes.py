# Third-party imports
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from consulta.core.db import get_async_session
from consulta.models.locations.location import Department, Locality, Municipality, Zone
from consulta.schemas.locations.location_schemas import DepartmentResponse, LocalityResponse, MunicipalityResponse

router = APIRouter(tags=["Locations"])


@router.get("/departments", response_model=list[DepartmentResponse])
async def list_departments(db: AsyncSession = Depends(get_async_session)):
    """List all departments ordered by name"""
    result = await db.execute(select(Department).order_by(Department.name))
    return result.scalars().all()


@router.get("/municipalities/{department_id}", response_model=list[MunicipalityResponse])
async def list_municipalities(department_id: str, db: AsyncSession = Depends(get_async_session)):
    """List the municipalities of a department"""
    department_id = department_id.strip()
    if department_id.isdigit() and len(department_id) == 1:
        department_id = department_id.zfill(2)
    if len(department_id) != 2:
        raise HTTPException(status_code=400, detail="Código de departamento inválido")

    result = await db.execute(
        select(Municipality).where(Municipality.department_id == department_id).order_by(Municipality.name)
    )
    return result.scalars().all()


@router.get("/localities/{municipality_id}", response_model=list[LocalityResponse])
async def list_localities(
    municipality_id: int,
    zone: Zone | None = Query(None),
    db: AsyncSession = Depends(get_async_session),
):
    """List the localities of a municipality, optionally for one zone"""
    query = select(Locality).where(Locality.municipality_id == municipality_id)
    if zone:
        query = query.where(Locality.area == zone)
    result = await db.execute(query.order_by(Locality.name))
    return result.scalars().all()
