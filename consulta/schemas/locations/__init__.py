# Local application imports
from consulta.schemas.locations.location_schemas import (
    DepartmentResponse,
    LocalityResponse,
    LocationRef,
    MunicipalityResponse,
    SectorResponse,
)

__all__ = [
    "DepartmentResponse",
    "LocalityResponse",
    "LocationRef",
    "MunicipalityResponse",
    "SectorResponse",
]
