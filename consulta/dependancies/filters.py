# Standard library imports
from datetime import date

# Third-party imports
from fastapi import Query

# Local application imports
from consulta.models.consultations.consultation import ConsultationStatus, PersonType
from consulta.schemas.consultations.consultation_schemas import ConsultationFilters
from consulta.settings import settings

_pagination = settings.PAGINATION_CONFIGS["consultations"]
ALL_SECTORS = "all"


def consultation_filters(
    date_from: date | None = Query(None, alias="dateFrom"),
    date_to: date | None = Query(None, alias="dateTo"),
    department_id: str | None = Query(None, alias="departmentId", max_length=2),
    municipality_id: int | None = Query(None, alias="municipalityId"),
    locality_id: int | None = Query(None, alias="localityId"),
    sector: str | None = Query(None),
    person_type: PersonType | None = Query(None, alias="personType"),
    status: ConsultationStatus | None = Query(None),
) -> ConsultationFilters:
    if department_id and department_id.isdigit() and len(department_id) == 1:
        department_id = department_id.zfill(2)
    if sector is not None:
        sector = sector.strip()
        if not sector or sector.lower() == ALL_SECTORS:
            sector = None
    return ConsultationFilters(
        date_from=date_from,
        date_to=date_to,
        department_id=department_id or None,
        municipality_id=municipality_id,
        locality_id=locality_id,
        sector=sector,
        person_type=person_type,
        status=status,
    )


def pagination_params(
    offset: int = Query(_pagination["default_offset"], ge=0),
    limit: int = Query(_pagination["default_limit"], ge=_pagination["min_limit"], le=_pagination["max_limit"]),
) -> tuple[int, int]:
    return offset, limit
