"""Consultation submission and administration over HTTP."""

# Standard library imports
import uuid

# Local application imports
from conftest import ALUBAREN_ID, GUAMILITO_ID, HATILLO_ID, KENNEDY_ID, SAN_PEDRO_SULA_ID, TEGUCIGALPA_ID, login_as

API = "/api/consultations"


def _total(client) -> int:
    login_as(client, "planner")
    response = client.get(API)
    client.cookies.clear()
    return response.json()["total"]


def test_anonymous_submission_gets_composed_geocode(client, anonymous_payload):
    response = client.post(API, json=anonymous_payload)

    assert response.status_code == 201, response.text
    body = response.json()
    uuid.UUID(body["id"])
    assert body["geocode"] == "08-01-0001"
    assert body["zone"] == "urbano"
    assert body["status"] == "active"
    assert body["selectedSectors"] == ["Salud"]
    assert body["department"] == {"id": "08", "name": "Francisco Morazán"}
    assert body["locality"] == {"id": KENNEDY_ID, "name": "Colonia Kennedy"}
    # Coordinates fall back to the locality's
    assert (body["latitude"], body["longitude"]) == ("14.05", "-87.17")


def test_client_supplied_geocode_is_ignored(client, natural_payload):
    response = client.post(API, json={**natural_payload, "geocode": "99-99-9999"})
    assert response.status_code == 201
    assert response.json()["geocode"] == "08-01-0001"


def test_municipality_outside_department_is_rejected_without_insert(client, anonymous_payload):
    payload = {**anonymous_payload, "municipalityId": SAN_PEDRO_SULA_ID, "localityId": GUAMILITO_ID}
    response = client.post(API, json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["ok"] is False
    assert body["error"]["code"] == "location_integrity_error"
    assert set(body["error"]["details"]) == {"municipalityId"}
    assert _total(client) == 0


def test_locality_outside_municipality_is_rejected(client, anonymous_payload):
    response = client.post(API, json={**anonymous_payload, "municipalityId": ALUBAREN_ID})
    assert response.status_code == 400
    assert response.json()["error"]["details"] == {
        "localityId": "La localidad no pertenece al municipio seleccionado"
    }


def test_locality_outside_zone_is_rejected(client, anonymous_payload):
    response = client.post(API, json={**anonymous_payload, "zone": "rural"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "location_integrity_error"


def test_unknown_department_is_rejected(client, anonymous_payload):
    response = client.post(API, json={**anonymous_payload, "departmentId": "77"})
    assert response.status_code == 400
    assert response.json()["error"]["details"] == {"departmentId": "Departamento inválido"}


def test_schema_errors_use_envelope_with_camel_case_fields(client, anonymous_payload):
    response = client.post(API, json={**anonymous_payload, "personType": "empresa", "municipalityId": "abc"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"]["code"] == "validation_error"
    assert {"personType", "municipalityId"} <= set(body["error"]["details"])


def test_rule_errors_are_reported_per_field(client, natural_payload):
    response = client.post(API, json={**natural_payload, "firstName": "", "selectedSectors": []})

    assert response.status_code == 400
    assert set(response.json()["error"]["details"]) == {"firstName", "selectedSectors"}
    assert _total(client) == 0


def test_custom_locality_submission(client, anonymous_payload):
    payload = {
        **anonymous_payload,
        "zone": "rural",
        "localityId": "otro",
        "customLocalityName": "Aldea El Paraíso",
        "latitude": "14,1234",
        "longitude": "-87.2",
    }
    response = client.post(API, json=payload)

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["geocode"] == "08-01-999"
    assert body["localityId"] is None
    assert body["customLocalityName"] == "Aldea El Paraíso"
    assert body["latitude"] == "14.1234"


def test_multi_submission_creates_one_row_per_item(client, natural_payload):
    header = {key: value for key, value in natural_payload.items() if key not in {"message", "selectedSectors"}}
    payload = {
        "header": header,
        "items": [
            {"sector": "Salud", "message": "Faltan medicinas", "images": ["/api/images/a.jpg"]},
            {"sector": "Educación", "message": "Escuela sin techo", "images": ["/api/images/b.jpg"]},
        ],
    }
    response = client.post(f"{API}/multi", json=payload)

    assert response.status_code == 201, response.text
    created_ids = response.json()["createdIds"]
    assert len(created_ids) == 2

    login_as(client, "planner")
    listing = client.get(API).json()
    assert listing["total"] == 2
    assert {row["geocode"] for row in listing["consultations"]} == {"08-01-0001"}
    assert sorted(row["selectedSectors"][0] for row in listing["consultations"]) == ["Educación", "Salud"]


def test_multi_submission_reports_header_and_item_errors(client, natural_payload):
    header = {key: value for key, value in natural_payload.items() if key not in {"message", "selectedSectors"}}
    item = {"sector": "Salud", "message": "Faltan medicinas", "images": ["/api/images/a.jpg"]}

    response = client.post(f"{API}/multi", json={"header": {**header, "identity": "123"}, "items": [item]})
    assert response.status_code == 400
    assert set(response.json()["error"]["details"]) == {"header.identity"}

    response = client.post(f"{API}/multi", json={"header": header, "items": [{**item, "message": " "}]})
    assert response.status_code == 400
    assert "items.0.message" in response.json()["error"]["details"]

    response = client.post(f"{API}/multi", json={"header": header, "items": []})
    assert response.status_code == 400


def test_listing_requires_authentication(client):
    response = client.get(API)
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "unauthorized"


def test_citizen_role_can_not_list(client):
    login_as(client, "citizen")
    response = client.get(API)
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "forbidden"


def test_listing_filters_and_pagination(client, natural_payload, anonymous_payload):
    client.post(API, json=natural_payload)
    client.post(API, json={**anonymous_payload, "selectedSectors": ["Educación"]})
    rural = {**anonymous_payload, "zone": "rural", "localityId": HATILLO_ID, "selectedSectors": ["Salud"]}
    client.post(API, json=rural)

    login_as(client, "planner")

    everything = client.get(API).json()
    assert everything["total"] == 3
    # Newest first
    assert everything["consultations"][0]["localityId"] == HATILLO_ID

    assert client.get(API, params={"sector": "Salud"}).json()["total"] == 2
    assert client.get(API, params={"sector": "all"}).json()["total"] == 3
    assert client.get(API, params={"personType": "natural"}).json()["total"] == 1
    assert client.get(API, params={"localityId": HATILLO_ID}).json()["total"] == 1
    assert client.get(API, params={"departmentId": "5"}).json()["total"] == 0

    page = client.get(API, params={"offset": 1, "limit": 1}).json()
    assert page["total"] == 3
    assert len(page["consultations"]) == 1


def test_date_to_is_inclusive(client, anonymous_payload):
    created = client.post(API, json=anonymous_payload).json()
    today = created["createdAt"][:10]

    login_as(client, "planner")
    assert client.get(API, params={"dateFrom": today, "dateTo": today}).json()["total"] == 1


def test_invalid_pagination_is_rejected(client):
    login_as(client, "planner")
    assert client.get(API, params={"limit": 0}).status_code == 400
    assert client.get(API, params={"limit": 1001}).status_code == 400
    assert client.get(API, params={"offset": -1}).status_code == 400


def test_detail_and_unknown_id(client, anonymous_payload):
    created = client.post(API, json=anonymous_payload).json()

    login_as(client, "planner")
    assert client.get(f"{API}/{created['id']}").json()["id"] == created["id"]

    response = client.get(f"{API}/{uuid.uuid4()}")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "not_found"


def test_status_change_requires_manager(client, anonymous_payload):
    created = client.post(API, json=anonymous_payload).json()

    login_as(client, "planner")
    assert client.patch(f"{API}/{created['id']}/status", json={"status": "archived"}).status_code == 403

    login_as(client, "gestor")
    response = client.patch(f"{API}/{created['id']}/status", json={"status": "archived"})
    assert response.status_code == 200
    assert response.json() == {"ok": True, "id": created["id"], "status": "archived"}

    assert client.patch(f"{API}/{created['id']}/status", json={"status": "deleted"}).status_code == 400
    assert client.patch(f"{API}/{uuid.uuid4()}/status", json={"status": "active"}).status_code == 404


def test_edit_recomputes_geocode(client, anonymous_payload):
    created = client.post(API, json=anonymous_payload).json()

    login_as(client, "gestor")
    response = client.put(
        f"{API}/{created['id']}",
        json={"zone": "rural", "localityId": HATILLO_ID, "geocode": "00-00-0000", "message": "Actualizado"},
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["geocode"] == "08-01-0002"
    assert body["message"] == "Actualizado"
    assert body["selectedSectors"] == ["Salud"]
    assert body["updatedAt"] >= created["updatedAt"]


def test_edit_locality_rederives_inferred_zone(client, anonymous_payload):
    created = client.post(API, json=anonymous_payload).json()
    assert created["zone"] == "urbano"

    login_as(client, "gestor")
    response = client.put(f"{API}/{created['id']}", json={"localityId": HATILLO_ID})

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["zone"] == "rural"
    assert body["localityId"] == HATILLO_ID
    assert body["geocode"] == "08-01-0002"


def test_edit_schema_errors_use_camel_case_fields(client, anonymous_payload):
    created = client.post(API, json=anonymous_payload).json()

    login_as(client, "gestor")
    response = client.put(f"{API}/{created['id']}", json={"municipalityId": None})

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "validation_error"
    assert "municipalityId" in error["details"]
    assert "municipality_id" not in error["details"]


def test_edit_keeps_integrity_guard(client, anonymous_payload):
    created = client.post(API, json=anonymous_payload).json()

    login_as(client, "gestor")
    response = client.put(f"{API}/{created['id']}", json={"municipalityId": SAN_PEDRO_SULA_ID})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "location_integrity_error"

    unchanged = client.get(f"{API}/{created['id']}").json()
    assert unchanged["municipalityId"] == TEGUCIGALPA_ID


def test_edit_revalidates_person_rules(client, anonymous_payload):
    created = client.post(API, json=anonymous_payload).json()

    login_as(client, "gestor")
    response = client.put(f"{API}/{created['id']}", json={"personType": "natural"})
    assert response.status_code == 400
    assert {"firstName", "lastName", "identity"} <= set(response.json()["error"]["details"])


def test_edit_replaces_sectors(client, anonymous_payload):
    created = client.post(API, json=anonymous_payload).json()

    login_as(client, "gestor")
    response = client.put(f"{API}/{created['id']}", json={"selectedSectors": ["Educación", " Salud ", "Educación"]})
    assert response.status_code == 200
    assert response.json()["selectedSectors"] == ["Educación", "Salud"]


def test_delete(client, anonymous_payload):
    created = client.post(API, json=anonymous_payload).json()

    login_as(client, "planner")
    assert client.delete(f"{API}/{created['id']}").status_code == 403

    login_as(client, "gestor")
    response = client.delete(f"{API}/{created['id']}")
    assert response.status_code == 200
    assert response.json() == {"ok": True, "id": created["id"]}
    assert client.get(f"{API}/{created['id']}").status_code == 404
    assert client.delete(f"{API}/{created['id']}").status_code == 404
