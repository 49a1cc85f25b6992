"""
Geocode composition and location referential integrity.

A consultation's geocode is never taken from the client. It is rebuilt from
the stored department, municipality and locality fragments after checking
that each record exists and belongs to the submitted parent.
"""

# Standard library imports
from dataclasses import dataclass
from typing import Any

# Third-party imports
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from consulta.models.locations.location import Department, Locality, Municipality, Zone
from consulta.utils.validators.coordinate_validator import normalize_coordinate

GEOCODE_SEPARATOR = "-"
# Fragment used when the citizen typed a locality that is not in the catalogue
CUSTOM_LOCALITY_FRAGMENT = "999"


class LocationIntegrityError(Exception):
    """A location id does not resolve or does not belong to its parent."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(message)

    @property
    def details(self) -> dict[str, str]:
        return {self.field: self.message}


@dataclass(frozen=True)
class GeoResolution:
    geocode: str
    latitude: str | None
    longitude: str | None
    zone: Zone | None = None


def build_geocode(
    department: Department | None,
    municipality: Municipality | None,
    locality: Locality | None,
    *,
    department_id: str,
    municipality_id: int,
    locality_id: int | None = None,
    zone: Zone | None = None,
) -> str:
    """
    Check the fetched hierarchy against the submitted ids and compose the geocode.

    `locality_id=None` selects the custom-locality fragment.

    Raises:
        LocationIntegrityError: On a dangling id, a parent mismatch or a
            locality outside the chosen zone
    """
    if department is None:
        raise LocationIntegrityError("departmentId", "Departamento inválido")
    if municipality is None:
        raise LocationIntegrityError("municipalityId", "Municipio inválido")
    if municipality.department_id != department_id:
        raise LocationIntegrityError("municipalityId", "El municipio no pertenece al departamento seleccionado")

    locality_fragment = CUSTOM_LOCALITY_FRAGMENT
    if locality_id is not None:
        if locality is None:
            raise LocationIntegrityError("localityId", "Localidad inválida")
        if locality.municipality_id != municipality_id:
            raise LocationIntegrityError("localityId", "La localidad no pertenece al municipio seleccionado")
        if zone is not None and locality.area != zone:
            raise LocationIntegrityError("localityId", "La localidad no corresponde a la zona seleccionada")
        locality_fragment = locality.geocode

    return GEOCODE_SEPARATOR.join((department.geocode, municipality.geocode, locality_fragment))


def _first_coordinate(*values: Any) -> str | None:
    for value in values:
        normalized = normalize_coordinate(value)
        if normalized is not None:
            return normalized
    return None


async def compose_geocode(
    db: AsyncSession,
    department_id: str,
    municipality_id: int,
    locality_id: int | None = None,
    zone: Zone | None = None,
    latitude: Any = None,
    longitude: Any = None,
) -> GeoResolution:
    """
    Fetch the hierarchy, verify it and return the geocode with coordinates.

    Coordinates supplied by the client win. Otherwise they fall back to the
    locality's, then the municipality's, then the department's.
    """
    department = await db.get(Department, department_id)
    municipality = await db.get(Municipality, municipality_id)
    locality = await db.get(Locality, locality_id) if locality_id is not None else None

    geocode = build_geocode(
        department,
        municipality,
        locality,
        department_id=department_id,
        municipality_id=municipality_id,
        locality_id=locality_id,
        zone=zone,
    )

    # build_geocode guarantees both parents exist at this point
    assert department is not None and municipality is not None
    return GeoResolution(
        geocode=geocode,
        zone=zone or (locality.area if locality else None),
        latitude=_first_coordinate(
            latitude,
            locality.latitude if locality else None,
            municipality.latitude,
            department.latitude,
        ),
        longitude=_first_coordinate(
            longitude,
            locality.longitude if locality else None,
            municipality.longitude,
            department.longitude,
        ),
    )
