# Local application imports
from consulta.services.locations.geocode_services import (
    CUSTOM_LOCALITY_FRAGMENT,
    GEOCODE_SEPARATOR,
    GeoResolution,
    LocationIntegrityError,
    build_geocode,
    compose_geocode,
)

__all__ = [
    "CUSTOM_LOCALITY_FRAGMENT",
    "GEOCODE_SEPARATOR",
    "GeoResolution",
    "LocationIntegrityError",
    "build_geocode",
    "compose_geocode",
]
