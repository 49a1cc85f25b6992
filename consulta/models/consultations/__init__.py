# Local application imports
from consulta.models.consultations.consultation import (
    Consultation,
    ConsultationSector,
    ConsultationStatus,
    PersonType,
)

__all__ = ["Consultation", "ConsultationSector", "ConsultationStatus", "PersonType"]
