"""Business rules applied to consultation submissions."""

# Third-party imports
from pydantic import ValidationError
import pytest

# Local application imports
from consulta.schemas.consultations import ConsultationCreate, normalize_sector_names
from consulta.services.consultations.validation_services import (
    ConsultationRulesError,
    check_consultation_rules,
    collect_consultation_errors,
)


def _errors(payload: dict) -> dict[str, str]:
    data = ConsultationCreate.model_validate(payload)
    return collect_consultation_errors(data, data.message, data.selected_sectors)


def test_valid_natural_person_has_no_errors(natural_payload):
    assert _errors(natural_payload) == {}


def test_natural_person_requires_name_and_identity(natural_payload):
    payload = {**natural_payload, "firstName": "", "lastName": None, "identity": "  "}
    errors = _errors(payload)
    assert set(errors) == {"firstName", "lastName", "identity"}


@pytest.mark.parametrize("identity", ["0801198801234", "0801-1988-01234"])
def test_identity_accepts_plain_and_hyphenated(natural_payload, identity):
    assert "identity" not in _errors({**natural_payload, "identity": identity})


def test_identity_with_wrong_shape_is_rejected(natural_payload):
    errors = _errors({**natural_payload, "identity": "0801-1988"})
    assert errors["identity"] == "Use 13 dígitos o el formato ####-####-#####"


def test_juridica_requires_company_fields(natural_payload):
    payload = {**natural_payload, "personType": "juridica"}
    errors = _errors(payload)
    assert {"companyName", "rtn", "legalRepresentative", "companyContact"} <= set(errors)


def test_juridica_company_contact_accepts_email_or_phone(natural_payload):
    base = {
        **natural_payload,
        "personType": "juridica",
        "companyName": "Servicios del Norte S.A.",
        "rtn": "08019000012345",
        "legalRepresentative": "Carlos López",
    }
    assert _errors({**base, "companyContact": "info@servicioshn.com"}) == {}
    assert _errors({**base, "companyContact": "22334455"}) == {}
    assert "companyContact" in _errors({**base, "companyContact": "llamar a Carlos"})


def test_anonymous_must_not_carry_identifying_data(anonymous_payload):
    errors = _errors({**anonymous_payload, "firstName": "Juan"})
    assert errors == {"personType": "Si elige Anónimo, no ingrese nombre/apellido/identidad"}


def test_anonymous_needs_email_or_phone(anonymous_payload):
    payload = {key: value for key, value in anonymous_payload.items() if key != "mobile"}
    assert "mobile" in _errors(payload)
    assert _errors({**payload, "email": "vecino@example.com"}) == {}


def test_phone_is_normalized_and_checked(anonymous_payload):
    data = ConsultationCreate.model_validate({**anonymous_payload, "mobile": "9999-8888", "phone": "2233 4455"})
    assert data.mobile == "99998888"
    assert data.phone == "22334455"

    errors = _errors({**anonymous_payload, "phone": "12345"})
    assert errors["phone"] == "Debe tener exactamente 8 dígitos (solo números)"


def test_invalid_email_is_reported(natural_payload):
    assert _errors({**natural_payload, "email": "maria@"})["email"] == "Correo inválido"


def test_locality_is_required(anonymous_payload):
    payload = {key: value for key, value in anonymous_payload.items() if key != "localityId"}
    assert _errors({**payload, "zone": "urbano"})["localityId"] == "Seleccione su colonia/barrio"
    assert _errors({**payload, "zone": "rural"})["localityId"] == "Seleccione su aldea/caserío"


def test_custom_locality_requires_name_and_coordinates(anonymous_payload):
    payload = {**anonymous_payload, "localityId": "otro", "zone": "rural"}
    errors = _errors(payload)
    assert set(errors) == {"customLocalityName", "latitude"}

    complete = {**payload, "customLocalityName": "Aldea El Paraíso", "latitude": "14,1", "longitude": "-87.2"}
    assert _errors(complete) == {}


def test_custom_locality_requires_zone(anonymous_payload):
    payload = {
        **anonymous_payload,
        "localityId": "otro",
        "customLocalityName": "Aldea El Paraíso",
        "latitude": "14.1",
        "longitude": "-87.2",
    }
    assert _errors(payload) == {"zone": "Seleccione la zona"}


def test_message_and_sectors_are_required(anonymous_payload):
    errors = _errors({**anonymous_payload, "message": "   ", "selectedSectors": [" ", ""]})
    assert set(errors) == {"message", "selectedSectors"}


def test_check_rules_raises_with_every_error(natural_payload):
    data = ConsultationCreate.model_validate({**natural_payload, "firstName": None, "email": "x"})
    with pytest.raises(ConsultationRulesError) as exc_info:
        check_consultation_rules(data, data.message, data.selected_sectors)
    assert set(exc_info.value.errors) == {"firstName", "email"}


def test_sector_names_are_trimmed_and_deduplicated():
    assert normalize_sector_names([" Salud ", "", "Educación", "Salud"]) == ["Salud", "Educación"]
    assert normalize_sector_names("Salud; Ambiente,Salud") == ["Salud", "Ambiente"]


def test_department_code_is_zero_padded(anonymous_payload):
    assert ConsultationCreate.model_validate({**anonymous_payload, "departmentId": 8}).department_id == "08"
    assert ConsultationCreate.model_validate({**anonymous_payload, "departmentId": "8"}).department_id == "08"


def test_snake_case_keys_are_accepted(anonymous_payload):
    data = ConsultationCreate.model_validate(
        {
            "person_type": "anonimo",
            "department_id": "08",
            "municipality_id": 801,
            "locality_id": 1,
            "message": "Hola",
            "selected_sectors": ["Salud"],
            "email": "vecino@example.com",
        }
    )
    assert data.municipality_id == 801
    assert data.linked_locality_id == 1


def test_unknown_person_type_fails_schema(anonymous_payload):
    with pytest.raises(ValidationError):
        ConsultationCreate.model_validate({**anonymous_payload, "personType": "empresa"})
