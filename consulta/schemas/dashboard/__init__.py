# Local application imports
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

__all__ = [
    "DashboardStats",
    "DateCount",
    "DepartmentCount",
    "DepartmentTopSector",
    "LocalityCount",
    "LocalitySectorCount",
    "MunicipalitySectorCount",
    "RegionSectorCount",
    "SectorCount",
]
