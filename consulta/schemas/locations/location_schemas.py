# Local application imports
from consulta.models.locations.location import Zone
from consulta.schemas.common.response_schemas import CamelModel


class DepartmentResponse(CamelModel):
    id: str
    name: str
    geocode: str
    latitude: str | None = None
    longitude: str | None = None


class MunicipalityResponse(CamelModel):
    id: int
    name: str
    department_id: str
    geocode: str
    latitude: str | None = None
    longitude: str | None = None


class LocalityResponse(CamelModel):
    id: int
    name: str
    municipality_id: int
    area: Zone
    geocode: str
    latitude: str | None = None
    longitude: str | None = None


class SectorResponse(CamelModel):
    id: int
    name: str
    description: str | None = None
    active: bool


class LocationRef(CamelModel):
    """Compact `{id, name}` reference embedded in consultation rows."""

    id: int | str
    name: str
