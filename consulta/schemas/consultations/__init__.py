# Local application imports
from consulta.schemas.consultations.consultation_schemas import (
    OTHER_LOCALITY,
    ConsultationCreate,
    ConsultationFilters,
    ConsultationHeader,
    ConsultationItem,
    ConsultationListResponse,
    ConsultationMultiCreate,
    ConsultationMultiCreateResponse,
    ConsultationResponse,
    ConsultationStatusResponse,
    ConsultationStatusUpdate,
    ConsultationUpdate,
    normalize_sector_names,
)

__all__ = [
    "OTHER_LOCALITY",
    "ConsultationCreate",
    "ConsultationFilters",
    "ConsultationHeader",
    "ConsultationItem",
    "ConsultationListResponse",
    "ConsultationMultiCreate",
    "ConsultationMultiCreateResponse",
    "ConsultationResponse",
    "ConsultationStatusResponse",
    "ConsultationStatusUpdate",
    "ConsultationUpdate",
    "normalize_sector_names",
]
