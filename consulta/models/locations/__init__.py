# Local application imports
from consulta.models.locations.location import Department, Locality, Municipality, Zone

__all__ = ["Department", "Locality", "Municipality", "Zone"]
