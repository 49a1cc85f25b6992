"""
Dashboard aggregations.

Rows are fetched with the shared consultation filters and counted in memory.
The counting helpers are pure so they can be exercised without a database.
"""

# Standard library imports
from collections import Counter
from collections.abc import Hashable, Iterable
from datetime import UTC, datetime, timedelta
from typing import TypeVar

# Third-party imports
from sqlalchemy import and_, distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from consulta.models.consultations.consultation import Consultation
from consulta.models.sectors.sector import Sector
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
from consulta.services.consultations.consultation_services import build_consultation_filters, fetch_consultations

TOP_SECTORS_LIMIT = 10
TOP_LOCALITIES_LIMIT = 20
UNKNOWN_DEPARTMENT = "Sin departamento"
UNKNOWN_MUNICIPALITY = "Sin municipio"
UNKNOWN_LOCALITY = "Sin localidad"

KeyT = TypeVar("KeyT", bound=Hashable)

# (department id, department, municipality id, municipality)
MunicipalityKey = tuple[str | None, str | None, int | None, str | None]
# (municipality id, municipality, locality id, locality label)
LocalityKey = tuple[int | None, str | None, int | None, str | None]


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _ranked(counter: Counter[str]) -> list[tuple[str, int]]:
    # Count descending, ties broken by name ascending
    return sorted(counter.items(), key=lambda item: (-item[1], item[0]))


def count_by_day(timestamps: Iterable[datetime]) -> list[DateCount]:
    """Consultations per UTC calendar day, ascending, days without rows omitted."""
    counter: Counter[str] = Counter(as_utc(ts).date().isoformat() for ts in timestamps)
    return [DateCount(date=day, count=count) for day, count in sorted(counter.items())]


def count_by_sector(
    sector_lists: Iterable[Iterable[str]],
    limit: int | None = TOP_SECTORS_LIMIT,
) -> list[SectorCount]:
    """
    Flatten every consultation's sector list and tally occurrences.

    A consultation tagged with several sectors adds one to each of them.
    `limit=None` keeps every sector.
    """
    counter: Counter[str] = Counter()
    for sectors in sector_lists:
        counter.update(set(sectors))
    return [SectorCount(sector=name, count=count) for name, count in _ranked(counter)[:limit]]


def count_by_department(department_names: Iterable[str | None]) -> list[DepartmentCount]:
    counter: Counter[str] = Counter(name or UNKNOWN_DEPARTMENT for name in department_names)
    return [DepartmentCount(department=name, count=count) for name, count in _ranked(counter)]


def count_by_locality(labels: Iterable[str | None], limit: int = TOP_LOCALITIES_LIMIT) -> list[LocalityCount]:
    counter: Counter[str] = Counter((label or "").strip() or UNKNOWN_LOCALITY for label in labels)
    return [LocalityCount(locality=name, count=count) for name, count in _ranked(counter)[:limit]]


def top_sector_by_department(rows: Iterable[tuple[str | None, Iterable[str]]]) -> list[DepartmentTopSector]:
    """
    For each department, its most mentioned sector.

    `total` is the number of sector mentions in the department and
    `percentage` the share of the top sector, rounded to one decimal.
    """
    per_department: dict[str, Counter[str]] = {}
    for department, sectors in rows:
        per_department.setdefault(department or UNKNOWN_DEPARTMENT, Counter()).update(set(sectors))

    result: list[DepartmentTopSector] = []
    for department in sorted(per_department):
        counter = per_department[department]
        if not counter:
            continue
        sector, count = _ranked(counter)[0]
        total = sum(counter.values())
        result.append(
            DepartmentTopSector(
                department=department,
                sector=sector,
                count=count,
                total=total,
                percentage=round(count * 100 / total, 1),
            )
        )
    return result


def _sector_tally(
    rows: Iterable[tuple[KeyT, Iterable[str]]],
    sector: str | None = None,
) -> dict[KeyT, Counter[str]]:
    """Sector mentions per key; with `sector` set only that sector is counted."""
    tally: dict[KeyT, Counter[str]] = {}
    for key, sectors in rows:
        names = {name for name in sectors if sector is None or name == sector}
        if names:
            tally.setdefault(key, Counter()).update(names)
    return tally


def count_sectors_by_region(
    rows: Iterable[tuple[str | None, Iterable[str]]],
    unknown: str,
    sector: str | None = None,
) -> list[RegionSectorCount]:
    """
    Region x sector matrix.

    Rows without a region are grouped under `unknown`. Regions are sorted by
    name, sectors within a region by count descending then name.
    """
    tally = _sector_tally(((region or unknown, sectors) for region, sectors in rows), sector)
    return [
        RegionSectorCount(region=region, sector=name, count=count)
        for region in sorted(tally)
        for name, count in _ranked(tally[region])
    ]


def count_sector_by_municipality(
    rows: Iterable[tuple[MunicipalityKey, Iterable[str]]],
    sector: str | None = None,
) -> list[MunicipalitySectorCount]:
    """Sector counts per municipality, ordered by department then municipality name."""
    tally = _sector_tally(rows, sector)
    ordered = sorted(
        tally,
        key=lambda key: (key[1] or UNKNOWN_DEPARTMENT, key[3] or UNKNOWN_MUNICIPALITY, str(key[2])),
    )

    result: list[MunicipalitySectorCount] = []
    for key in ordered:
        department_id, department, municipality_id, municipality = key
        for name, count in _ranked(tally[key]):
            result.append(
                MunicipalitySectorCount(
                    municipality_id=municipality_id,
                    municipality=municipality or UNKNOWN_MUNICIPALITY,
                    department_id=department_id,
                    department=department or UNKNOWN_DEPARTMENT,
                    sector=name,
                    count=count,
                )
            )
    return result


def count_sector_by_locality(
    rows: Iterable[tuple[LocalityKey, Iterable[str]]],
    sector: str | None = None,
) -> list[LocalitySectorCount]:
    """
    Sector counts per locality, ordered by municipality then locality name.

    Custom localities have no id and are told apart by their typed name.
    """
    tally = _sector_tally(rows, sector)
    ordered = sorted(
        tally,
        key=lambda key: (key[1] or UNKNOWN_MUNICIPALITY, key[3] or UNKNOWN_LOCALITY, str(key[2])),
    )

    result: list[LocalitySectorCount] = []
    for key in ordered:
        municipality_id, municipality, locality_id, locality = key
        for name, count in _ranked(tally[key]):
            result.append(
                LocalitySectorCount(
                    locality_id=locality_id,
                    locality=locality or UNKNOWN_LOCALITY,
                    municipality_id=municipality_id,
                    municipality=municipality or UNKNOWN_MUNICIPALITY,
                    sector=name,
                    count=count,
                )
            )
    return result


def _department_name(consultation: Consultation) -> str | None:
    return consultation.department.name if consultation.department else None


def _municipality_name(consultation: Consultation) -> str | None:
    return consultation.municipality.name if consultation.municipality else None


async def get_dashboard_stats(db: AsyncSession, now: datetime | None = None) -> DashboardStats:
    now = now or datetime.now(UTC)
    week_ago = now - timedelta(days=7)

    total = (await db.execute(select(func.count()).select_from(Consultation))).scalar() or 0
    this_week = (
        await db.execute(select(func.count()).select_from(Consultation).where(Consultation.created_at >= week_ago))
    ).scalar() or 0
    departments = (await db.execute(select(func.count(distinct(Consultation.department_id))))).scalar() or 0
    active_sectors = (
        await db.execute(select(func.count()).select_from(Sector).where(Sector.active.is_(True)))
    ).scalar() or 0

    return DashboardStats(total=total, this_week=this_week, departments=departments, active_sectors=active_sectors)


async def get_consultations_by_date(
    db: AsyncSession,
    days: int = 30,
    filters: ConsultationFilters | None = None,
    now: datetime | None = None,
) -> list[DateCount]:
    start = (now or datetime.now(UTC)) - timedelta(days=days)
    conditions = build_consultation_filters(filters or ConsultationFilters())
    conditions.append(Consultation.created_at >= start)
    result = await db.execute(select(Consultation.created_at).where(and_(*conditions)))
    return count_by_day(result.scalars().all())


async def get_consultations_by_sector(db: AsyncSession, filters: ConsultationFilters) -> list[SectorCount]:
    consultations = await fetch_consultations(db, filters)
    return count_by_sector(consultation.selected_sectors for consultation in consultations)


async def get_consultations_by_department(db: AsyncSession, filters: ConsultationFilters) -> list[DepartmentCount]:
    consultations = await fetch_consultations(db, filters)
    return count_by_department(
        _department_name(consultation) for consultation in consultations
    )


async def get_consultations_by_locality(db: AsyncSession, filters: ConsultationFilters) -> list[LocalityCount]:
    if not filters.department_id:
        return []
    consultations = await fetch_consultations(db, filters)
    return count_by_locality(consultation.locality_label for consultation in consultations)


async def get_top_sector_by_department(db: AsyncSession, filters: ConsultationFilters) -> list[DepartmentTopSector]:
    consultations = await fetch_consultations(db, filters)
    return top_sector_by_department(
        (_department_name(consultation), consultation.selected_sectors)
        for consultation in consultations
    )


async def get_all_sector_counts(db: AsyncSession, filters: ConsultationFilters) -> list[SectorCount]:
    consultations = await fetch_consultations(db, filters)
    return count_by_sector((consultation.selected_sectors for consultation in consultations), limit=None)


async def get_sectors_by_department(db: AsyncSession, filters: ConsultationFilters) -> list[RegionSectorCount]:
    consultations = await fetch_consultations(db, filters)
    return count_sectors_by_region(
        ((_department_name(consultation), consultation.selected_sectors) for consultation in consultations),
        unknown=UNKNOWN_DEPARTMENT,
        sector=filters.sector,
    )


async def get_sectors_by_municipality(db: AsyncSession, filters: ConsultationFilters) -> list[RegionSectorCount]:
    """Municipality x sector matrix of one department; empty without a department filter."""
    if not filters.department_id:
        return []
    consultations = await fetch_consultations(db, filters)
    return count_sectors_by_region(
        ((_municipality_name(consultation), consultation.selected_sectors) for consultation in consultations),
        unknown=UNKNOWN_MUNICIPALITY,
        sector=filters.sector,
    )


async def get_sectors_by_locality(db: AsyncSession, filters: ConsultationFilters) -> list[RegionSectorCount]:
    """Locality x sector matrix of one municipality; empty without a municipality filter."""
    if filters.municipality_id is None:
        return []
    consultations = await fetch_consultations(db, filters)
    return count_sectors_by_region(
        ((consultation.locality_label, consultation.selected_sectors) for consultation in consultations),
        unknown=UNKNOWN_LOCALITY,
        sector=filters.sector,
    )


async def get_sector_by_municipality(
    db: AsyncSession,
    filters: ConsultationFilters,
) -> list[MunicipalitySectorCount]:
    consultations = await fetch_consultations(db, filters)
    return count_sector_by_municipality(
        (
            (
                (
                    consultation.department_id,
                    _department_name(consultation),
                    consultation.municipality_id,
                    _municipality_name(consultation),
                ),
                consultation.selected_sectors,
            )
            for consultation in consultations
        ),
        sector=filters.sector,
    )


async def get_sector_by_locality(db: AsyncSession, filters: ConsultationFilters) -> list[LocalitySectorCount]:
    if not filters.department_id and filters.municipality_id is None:
        return []
    consultations = await fetch_consultations(db, filters)
    return count_sector_by_locality(
        (
            (
                (
                    consultation.municipality_id,
                    _municipality_name(consultation),
                    consultation.locality_id,
                    consultation.locality_label,
                ),
                consultation.selected_sectors,
            )
            for consultation in consultations
        ),
        sector=filters.sector,
    )
