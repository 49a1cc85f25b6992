# Local application imports
from consulta.schemas.common.response_schemas import CamelModel


class DashboardStats(CamelModel):
    total: int
    this_week: int
    departments: int
    active_sectors: int


class DateCount(CamelModel):
    date: str
    count: int


class SectorCount(CamelModel):
    sector: str
    count: int


class DepartmentCount(CamelModel):
    department: str
    count: int


class LocalityCount(CamelModel):
    locality: str
    count: int


class DepartmentTopSector(CamelModel):
    department: str
    sector: str
    count: int
    total: int
    percentage: float


class RegionSectorCount(CamelModel):
    """One cell of a region x sector matrix."""

    region: str
    sector: str
    count: int


class MunicipalitySectorCount(CamelModel):
    municipality_id: int | None = None
    municipality: str
    department_id: str | None = None
    department: str
    sector: str
    count: int


class LocalitySectorCount(CamelModel):
    locality_id: int | None = None
    locality: str
    municipality_id: int | None = None
    municipality: str
    sector: str
    count: int
