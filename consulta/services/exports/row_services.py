"""
Export rows shared by the CSV, Excel and PDF formatters.

Every cell goes through `sanitize_cell`, so the formula-injection and
newline rules hold regardless of the output library.
"""

# Standard library imports
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

# Local application imports
from consulta.models.consultations.consultation import Consultation, ConsultationStatus, PersonType

EXPORT_HEADERS = [
    "ID",
    "Fecha",
    "Tipo de Persona",
    "Nombre/Empresa",
    "Departamento",
    "Municipio",
    "Colonia/Aldea",
    "Geocódigo",
    "Sectores",
    "Mensaje",
    "Estado",
]

FORMULA_PREFIXES = ("=", "+", "-", "@")

PERSON_TYPE_LABELS = {
    PersonType.NATURAL: "Natural",
    PersonType.JURIDICA: "Jurídica",
    PersonType.ANONIMO: "Anónimo",
}

STATUS_LABELS = {
    ConsultationStatus.ACTIVE: "Activa",
    ConsultationStatus.ARCHIVED: "Archivada",
}


def sanitize_cell(value: Any) -> str:
    """
    Neutralize spreadsheet formulas and flatten line breaks.

    >>> sanitize_cell("=1+1")
    "'=1+1"
    """
    if value is None:
        return ""
    text = str(value)
    if text.startswith(FORMULA_PREFIXES):
        text = "'" + text
    return text.replace("\r", " ").replace("\n", " ")


def display_name(consultation: Consultation) -> str:
    match consultation.person_type:
        case PersonType.NATURAL:
            full_name = f"{consultation.first_name or ''} {consultation.last_name or ''}".strip()
            return full_name or "Anónimo"
        case PersonType.JURIDICA:
            return consultation.company_name or consultation.rtn or "—"
        case _:
            return "Anónimo"


def format_export_date(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).strftime("%d/%m/%Y")


def build_export_row(consultation: Consultation) -> list[str]:
    values = [
        consultation.id,
        format_export_date(consultation.created_at),
        PERSON_TYPE_LABELS[consultation.person_type],
        display_name(consultation),
        consultation.department.name if consultation.department else "",
        consultation.municipality.name if consultation.municipality else "",
        consultation.locality_label or "",
        consultation.geocode,
        "; ".join(consultation.selected_sectors),
        consultation.message,
        STATUS_LABELS[consultation.status],
    ]
    return [sanitize_cell(value) for value in values]


def build_export_rows(consultations: Iterable[Consultation]) -> list[list[str]]:
    return [build_export_row(consultation) for consultation in consultations]


def export_file_name(extension: str, today: datetime | None = None) -> str:
    today = today or datetime.now(UTC)
    return f"consultas_{today:%Y-%m-%d}.{extension}"
