"""
Business rules applied to a consultation after schema parsing.

Schema parsing (pydantic) guarantees types and enumerations. The rules here
cover what depends on the person type and on the locality branch, and
report every violation at once as a field path -> message map.
"""

# Standard library imports
import re

# Local application imports
from consulta.models.consultations.consultation import PersonType
from consulta.models.locations.location import Zone
from consulta.schemas.consultations.consultation_schemas import OTHER_LOCALITY, ConsultationHeader
from consulta.utils.validators.coordinate_validator import normalize_coordinate
from consulta.utils.validators.phone_validator import is_valid_phone_number

IDENTITY_PATTERN = re.compile(r"^(?:\d{13}|\d{4}-\d{4}-\d{5})$")
RTN_PATTERN = re.compile(r"^(?:\d{14}|\d{4}-\d{4}-\d{6})$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class ConsultationRulesError(Exception):
    """A submission broke one or more business rules."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = errors
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors.items()))


def is_valid_email(value: str | None) -> bool:
    return bool(value) and EMAIL_PATTERN.match(value) is not None


def _person_errors(data: ConsultationHeader) -> dict[str, str]:
    errors: dict[str, str] = {}

    match data.person_type:
        case PersonType.NATURAL:
            if not data.first_name:
                errors["firstName"] = "El primer nombre es requerido"
            if not data.last_name:
                errors["lastName"] = "El apellido es requerido"
            if not data.identity:
                errors["identity"] = "La identidad es requerida"
            elif not IDENTITY_PATTERN.match(data.identity):
                errors["identity"] = "Use 13 dígitos o el formato ####-####-#####"

        case PersonType.JURIDICA:
            if not data.company_name:
                errors["companyName"] = "El nombre de la empresa es requerido"
            if not data.rtn:
                errors["rtn"] = "El RTN es requerido"
            elif not RTN_PATTERN.match(data.rtn):
                errors["rtn"] = "RTN inválido (14 dígitos o ####-####-######)"
            if not data.legal_representative:
                errors["legalRepresentative"] = "El representante legal es requerido"
            if not data.company_contact:
                errors["companyContact"] = "Ingrese correo o teléfono de contacto"
            elif not (is_valid_email(data.company_contact) or is_valid_phone_number(data.company_contact)):
                errors["companyContact"] = "Ingrese un correo válido o un teléfono de 8 dígitos (solo números)"

        case PersonType.ANONIMO:
            identifying = (
                data.first_name,
                data.last_name,
                data.identity,
                data.company_name,
                data.rtn,
                data.legal_representative,
            )
            if any(identifying):
                errors["personType"] = "Si elige Anónimo, no ingrese nombre/apellido/identidad"
            has_email = bool(data.email or data.alt_email)
            has_phone = bool(data.mobile or data.phone)
            if not (has_email or has_phone):
                errors["mobile"] = "Ingrese un correo o teléfono de contacto"

    return errors


def _contact_errors(data: ConsultationHeader) -> dict[str, str]:
    errors: dict[str, str] = {}
    for field, value in (("email", data.email), ("altEmail", data.alt_email)):
        if value and not is_valid_email(value):
            errors[field] = "Correo inválido"
    for field, value in (("mobile", data.mobile), ("phone", data.phone)):
        if value and not is_valid_phone_number(value):
            errors[field] = "Debe tener exactamente 8 dígitos (solo números)"
    return errors


def _location_errors(data: ConsultationHeader) -> dict[str, str]:
    errors: dict[str, str] = {}

    if data.locality_id is None and not data.custom_locality_name:
        if data.zone == Zone.URBANO:
            errors["localityId"] = "Seleccione su colonia/barrio"
        else:
            errors["localityId"] = "Seleccione su aldea/caserío"
        return errors

    custom_branch = data.locality_id is None or data.locality_id == OTHER_LOCALITY
    if not custom_branch:
        return errors

    if data.zone is None:
        errors["zone"] = "Seleccione la zona"

    if not data.custom_locality_name:
        errors["customLocalityName"] = "Escriba el nombre de la colonia/barrio o aldea/caserío"

    if normalize_coordinate(data.latitude) is None or normalize_coordinate(data.longitude) is None:
        errors["latitude"] = "Haz click en el mapa para fijar la ubicación"

    return errors


def collect_header_errors(data: ConsultationHeader) -> dict[str, str]:
    errors = _contact_errors(data)
    # Person-type messages win over generic format messages on the same field
    errors.update(_person_errors(data))
    errors.update(_location_errors(data))
    return errors


def collect_consultation_errors(
    data: ConsultationHeader,
    message: str | None,
    selected_sectors: list[str],
) -> dict[str, str]:
    """
    Every rule violation of a consultation as a field path -> message map.

    An empty map means the submission may proceed to the location
    integrity check.
    """
    errors = collect_header_errors(data)
    if not (message or "").strip():
        errors["message"] = "El mensaje es requerido"
    if not selected_sectors:
        errors["selectedSectors"] = "Seleccione al menos un sector"
    return errors


def check_consultation_rules(
    data: ConsultationHeader,
    message: str | None,
    selected_sectors: list[str],
) -> None:
    """
    Raises:
        ConsultationRulesError: If any business rule is broken
    """
    errors = collect_consultation_errors(data, message, selected_sectors)
    if errors:
        raise ConsultationRulesError(errors)
