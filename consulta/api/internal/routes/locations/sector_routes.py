# Third-party imports
from fastapi import APIRouter, Depends, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from consulta.core.db import get_async_session
from consulta.models.sectors.sector import Sector
from consulta.schemas.locations.location_schemas import SectorResponse

router = APIRouter(prefix="/sectors", tags=["Sectors"])


@router.get("", response_model=list[SectorResponse])
async def list_sectors(db: AsyncSession = Depends(get_async_session)):
    """List active sectors ordered by name"""
    result = await db.execute(select(Sector).where(Sector.active.is_(True)).order_by(Sector.name))
    return result.scalars().all()


@router.get("/search", response_model=list[SectorResponse])
async def search_sectors(q: str = Query("", max_length=100), db: AsyncSession = Depends(get_async_session)):
    """Case-insensitive substring search over active sectors"""
    term = q.strip().lower()
    if not term:
        return []

    # Escape LIKE wildcards typed by the user
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    result = await db.execute(
        select(Sector)
        .where(Sector.active.is_(True), func.lower(Sector.name).like(f"%{escaped}%", escape="\\"))
        .order_by(Sector.name)
    )
    return result.scalars().all()
