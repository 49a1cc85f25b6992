# Local application imports
from consulta.services.consultations.consultation_services import (
    build_consultation_filters,
    create_consultation,
    create_consultation_batch,
    delete_consultation,
    fetch_consultations,
    get_consultation,
    list_consultations,
    update_consultation,
    update_consultation_status,
)
from consulta.services.consultations.validation_services import (
    ConsultationRulesError,
    check_consultation_rules,
    collect_consultation_errors,
)

__all__ = [
    "ConsultationRulesError",
    "build_consultation_filters",
    "check_consultation_rules",
    "collect_consultation_errors",
    "create_consultation",
    "create_consultation_batch",
    "delete_consultation",
    "fetch_consultations",
    "get_consultation",
    "list_consultations",
    "update_consultation",
    "update_consultation_status",
]
