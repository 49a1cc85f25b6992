# Third-party imports
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from consulta.api.internal.utils.permissions import require_consultation_reader
from consulta.core.db import get_async_session
from consulta.dependancies.filters import consultation_filters
from consulta.schemas.consultations.consultation_schemas import ConsultationFilters
from consulta.schemas.dashboard.dashboard_schemas import (
    DashboardStats,
    DateCount,
    DepartmentCount,
    DepartmentTopSector,
    LocalityCount,
    LocalitySectorCount,
    MunicipalitySectorCount,
    RegionSectorCount,
    SectorCount,
)
from consulta.services.dashboard.aggregation_services import (
    get_all_sector_counts,
    get_consultations_by_date,
    get_consultations_by_department,
    get_consultations_by_locality,
    get_consultations_by_sector,
    get_dashboard_stats,
    get_sector_by_locality,
    get_sector_by_municipality,
    get_sectors_by_department,
    get_sectors_by_locality,
    get_sectors_by_municipality,
    get_top_sector_by_department,
)

router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
    dependencies=[Depends(require_consultation_reader)],
)


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(db: AsyncSession = Depends(get_async_session)):
    """Totals shown on the dashboard cards"""
    return await get_dashboard_stats(db)


@router.get("/consultations-by-date", response_model=list[DateCount])
async def consultations_by_date(
    days: int = Query(30, ge=1, le=365),
    filters: ConsultationFilters = Depends(consultation_filters),
    db: AsyncSession = Depends(get_async_session),
):
    """Consultations per day over the last `days` days"""
    return await get_consultations_by_date(db, days=days, filters=filters)


@router.get("/consultations-by-sector", response_model=list[SectorCount])
async def consultations_by_sector(
    filters: ConsultationFilters = Depends(consultation_filters),
    db: AsyncSession = Depends(get_async_session),
):
    """Top 10 sectors by number of consultations"""
    return await get_consultations_by_sector(db, filters)


@router.get("/by-sector", response_model=list[SectorCount])
async def all_sector_counts(
    filters: ConsultationFilters = Depends(consultation_filters),
    db: AsyncSession = Depends(get_async_session),
):
    """Every mentioned sector, not just the top 10"""
    return await get_all_sector_counts(db, filters)


@router.get("/by-department", response_model=list[DepartmentCount])
async def consultations_by_department(
    filters: ConsultationFilters = Depends(consultation_filters),
    db: AsyncSession = Depends(get_async_session),
):
    return await get_consultations_by_department(db, filters)


@router.get("/by-locality", response_model=list[LocalityCount])
async def consultations_by_locality(
    filters: ConsultationFilters = Depends(consultation_filters),
    db: AsyncSession = Depends(get_async_session),
):
    """Top 20 localities of the selected department"""
    return await get_consultations_by_locality(db, filters)


@router.get("/top-sector-by-department", response_model=list[DepartmentTopSector])
async def top_sector_by_department(
    filters: ConsultationFilters = Depends(consultation_filters),
    db: AsyncSession = Depends(get_async_session),
):
    return await get_top_sector_by_department(db, filters)


@router.get("/sectors-by-department", response_model=list[RegionSectorCount])
async def sectors_by_department(
    filters: ConsultationFilters = Depends(consultation_filters),
    db: AsyncSession = Depends(get_async_session),
):
    return await get_sectors_by_department(db, filters)


@router.get("/sectors-by-municipality", response_model=list[RegionSectorCount])
async def sectors_by_municipality(
    filters: ConsultationFilters = Depends(consultation_filters),
    db: AsyncSession = Depends(get_async_session),
):
    """Municipality x sector counts; requires `departmentId`"""
    return await get_sectors_by_municipality(db, filters)


@router.get("/sectors-by-locality", response_model=list[RegionSectorCount])
async def sectors_by_locality(
    filters: ConsultationFilters = Depends(consultation_filters),
    db: AsyncSession = Depends(get_async_session),
):
    """Locality x sector counts; requires `municipalityId`"""
    return await get_sectors_by_locality(db, filters)


@router.get("/sector-by-municipality", response_model=list[MunicipalitySectorCount])
async def sector_by_municipality(
    filters: ConsultationFilters = Depends(consultation_filters),
    db: AsyncSession = Depends(get_async_session),
):
    return await get_sector_by_municipality(db, filters)


@router.get("/sector-by-locality", response_model=list[LocalitySectorCount])
async def sector_by_locality(
    filters: ConsultationFilters = Depends(consultation_filters),
    db: AsyncSession = Depends(get_async_session),
):
    """Sector counts per locality; requires `departmentId` or `municipalityId`"""
    return await get_sector_by_locality(db, filters)
