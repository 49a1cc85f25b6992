"""Export rows and the CSV, Excel and PDF renderers."""

# Standard library imports
import csv
from datetime import UTC, datetime
import io
import uuid

# Third-party imports
from openpyxl import load_workbook
import pytest

# Local application imports
from consulta.models.consultations.consultation import Consultation, ConsultationStatus, PersonType
from consulta.models.locations import Department, Locality, Municipality, Zone
from consulta.services.exports.renderers import EXCEL_SHEET_NAME, render_csv, render_excel, render_pdf
from consulta.services.exports.row_services import (
    EXPORT_HEADERS,
    build_export_row,
    display_name,
    export_file_name,
    sanitize_cell,
)


@pytest.fixture
def consultation() -> Consultation:
    consultation = Consultation(
        id=uuid.UUID("6f1c2a5e-8d4b-4c55-9a0e-2b7d3f4e5a61"),
        person_type=PersonType.NATURAL,
        first_name="María",
        last_name="García",
        department_id="08",
        municipality_id=801,
        zone=Zone.URBANO,
        locality_id=1,
        geocode="08-01-0001",
        message="=HYPERLINK(\"http://example.com\")\nsegunda línea",
        images=[],
        status=ConsultationStatus.ACTIVE,
        created_at=datetime(2026, 3, 5, 15, 30, tzinfo=UTC),
    )
    consultation.department = Department(id="08", name="Francisco Morazán", geocode="08")
    consultation.municipality = Municipality(id=801, name="Distrito Central", department_id="08", geocode="01")
    consultation.locality = Locality(
        id=1, name="Colonia Kennedy", municipality_id=801, area=Zone.URBANO, geocode="0001"
    )
    consultation.selected_sectors = ["Salud", "Educación"]
    return consultation


@pytest.mark.parametrize(
    "value, expected",
    [
        ("=1+1", "'=1+1"),
        ("+504", "'+504"),
        ("-5", "'-5"),
        ("@cmd", "'@cmd"),
        ("línea 1\r\nlínea 2", "línea 1  línea 2"),
        ("Salud", "Salud"),
        (None, ""),
    ],
)
def test_sanitize_cell(value, expected):
    assert sanitize_cell(value) == expected


def test_display_name_per_person_type(consultation):
    assert display_name(consultation) == "María García"

    consultation.first_name = consultation.last_name = None
    assert display_name(consultation) == "Anónimo"

    consultation.person_type = PersonType.JURIDICA
    consultation.rtn = "08019000012345"
    assert display_name(consultation) == "08019000012345"
    consultation.company_name = "Servicios del Norte S.A."
    assert display_name(consultation) == "Servicios del Norte S.A."
    consultation.company_name = consultation.rtn = None
    assert display_name(consultation) == "—"

    consultation.person_type = PersonType.ANONIMO
    assert display_name(consultation) == "Anónimo"


def test_export_row_columns(consultation):
    row = build_export_row(consultation)
    assert dict(zip(EXPORT_HEADERS, row)) == {
        "ID": "6f1c2a5e-8d4b-4c55-9a0e-2b7d3f4e5a61",
        "Fecha": "05/03/2026",
        "Tipo de Persona": "Natural",
        "Nombre/Empresa": "María García",
        "Departamento": "Francisco Morazán",
        "Municipio": "Distrito Central",
        "Colonia/Aldea": "Colonia Kennedy",
        "Geocódigo": "08-01-0001",
        "Sectores": "Salud; Educación",
        "Mensaje": "'=HYPERLINK(\"http://example.com\") segunda línea",
        "Estado": "Activa",
    }


def test_export_row_uses_custom_locality_name(consultation):
    consultation.locality = None
    consultation.locality_id = None
    consultation.custom_locality_name = "Aldea El Paraíso"
    consultation.status = ConsultationStatus.ARCHIVED
    row = dict(zip(EXPORT_HEADERS, build_export_row(consultation)))
    assert row["Colonia/Aldea"] == "Aldea El Paraíso"
    assert row["Estado"] == "Archivada"


def test_csv_has_bom_and_quotes_every_field(consultation):
    content = render_csv([build_export_row(consultation)])
    assert content.startswith("\ufeff".encode("utf-8"))

    text = content.decode("utf-8-sig")
    first_line = text.splitlines()[0]
    assert first_line.startswith('"ID","Fecha"')

    rows = list(csv.reader(io.StringIO(text)))
    assert rows[0] == EXPORT_HEADERS
    assert rows[1][9].startswith("'=HYPERLINK")
    assert len(rows) == 2


def test_excel_workbook_layout(consultation):
    workbook = load_workbook(io.BytesIO(render_excel([build_export_row(consultation)])))
    assert workbook.sheetnames == [EXCEL_SHEET_NAME]

    sheet = workbook[EXCEL_SHEET_NAME]
    values = list(sheet.iter_rows(values_only=True))
    assert list(values[0]) == EXPORT_HEADERS
    assert values[1][1] == "05/03/2026"
    assert values[1][9].startswith("'=HYPERLINK")


def test_pdf_is_generated(consultation):
    content = render_pdf([build_export_row(consultation)] * 40, "Todas las fechas")
    assert content.startswith(b"%PDF")


def test_pdf_without_rows_is_generated():
    assert render_pdf([], "01/03/2026 - 05/03/2026").startswith(b"%PDF")


def test_export_file_name():
    assert export_file_name("csv", datetime(2026, 3, 5, tzinfo=UTC)) == "consultas_2026-03-05.csv"
