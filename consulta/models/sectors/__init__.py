# Local application imports
from consulta.models.sectors.sector import Sector

__all__ = ["Sector"]
