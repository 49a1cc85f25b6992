# Standard library imports
from datetime import UTC, date, datetime
import re
from typing import Annotated, Any, Literal
from uuid import UUID

# Third-party imports
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Local application imports
from consulta.models.consultations.consultation import ConsultationStatus, PersonType
from consulta.models.locations.location import Zone
from consulta.schemas.common.response_schemas import CamelModel
from consulta.schemas.locations.location_schemas import LocationRef
from consulta.utils.validators.phone_validator import normalize_phone_number

OTHER_LOCALITY = "otro"


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _department_code(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return f"{value:02d}"
    if isinstance(value, str):
        value = value.strip()
        if value.isdigit() and len(value) == 1:
            return value.zfill(2)
    return value


def _locality_choice(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        if value.lower() == OTHER_LOCALITY:
            return OTHER_LOCALITY
    return value


def _coordinate_text(value: Any) -> Any:
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return _blank_to_none(value)


def _phone(value: Any) -> Any:
    value = _blank_to_none(value)
    if isinstance(value, str):
        return normalize_phone_number(value)
    return value


def normalize_sector_names(value: Any) -> list[str]:
    """Trim names, drop empties and duplicates, keep first-occurrence order."""
    if value is None:
        return []
    if isinstance(value, str):
        value = re.split(r"[;,]", value)
    names: list[str] = []
    for item in value:
        name = str(item).strip()
        if name and name not in names:
            names.append(name)
    return names


OptionalText = Annotated[str | None, BeforeValidator(_blank_to_none)]
PhoneText = Annotated[str | None, BeforeValidator(_phone)]
DepartmentCode = Annotated[str, BeforeValidator(_department_code), Field(min_length=1, max_length=2)]
LocalityChoice = Annotated[int | Literal["otro"] | None, BeforeValidator(_locality_choice)]
CoordinateText = Annotated[str | None, BeforeValidator(_coordinate_text)]
SectorNames = Annotated[list[str], BeforeValidator(normalize_sector_names)]


class _InputModel(BaseModel):
    # Unknown keys such as a client supplied `geocode` are dropped
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class ConsultationHeader(_InputModel):
    """Person, contact and location fields shared by single and multi submissions."""

    person_type: PersonType

    # Natural person
    first_name: OptionalText = Field(None, max_length=80)
    last_name: OptionalText = Field(None, max_length=80)
    identity: OptionalText = Field(None, max_length=20)
    email: OptionalText = Field(None, max_length=254)

    # Legal entity
    company_name: OptionalText = Field(None, max_length=200)
    rtn: OptionalText = Field(None, max_length=20)
    legal_representative: OptionalText = Field(None, max_length=120)
    company_contact: OptionalText = Field(None, max_length=254)

    # Contact
    mobile: PhoneText = Field(None, max_length=20)
    phone: PhoneText = Field(None, max_length=20)
    alt_email: OptionalText = Field(None, max_length=254)

    # Location
    department_id: DepartmentCode
    municipality_id: int = Field(gt=0)
    # Taken from the linked locality when omitted
    zone: Zone | None = None
    locality_id: LocalityChoice = None
    custom_locality_name: OptionalText = Field(None, max_length=80)
    latitude: CoordinateText = None
    longitude: CoordinateText = None

    status: ConsultationStatus = ConsultationStatus.ACTIVE

    @property
    def linked_locality_id(self) -> int | None:
        return self.locality_id if isinstance(self.locality_id, int) else None


class ConsultationCreate(ConsultationHeader):
    message: str
    selected_sectors: SectorNames = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)


class ConsultationUpdate(_InputModel):
    """Partial edit. Only the keys present in the request are applied."""

    person_type: PersonType | None = None
    first_name: OptionalText = Field(None, max_length=80)
    last_name: OptionalText = Field(None, max_length=80)
    identity: OptionalText = Field(None, max_length=20)
    email: OptionalText = Field(None, max_length=254)
    company_name: OptionalText = Field(None, max_length=200)
    rtn: OptionalText = Field(None, max_length=20)
    legal_representative: OptionalText = Field(None, max_length=120)
    company_contact: OptionalText = Field(None, max_length=254)
    mobile: PhoneText = Field(None, max_length=20)
    phone: PhoneText = Field(None, max_length=20)
    alt_email: OptionalText = Field(None, max_length=254)
    department_id: Annotated[str | None, BeforeValidator(_department_code)] = Field(None, max_length=2)
    municipality_id: int | None = Field(None, gt=0)
    zone: Zone | None = None
    locality_id: LocalityChoice = None
    custom_locality_name: OptionalText = Field(None, max_length=80)
    latitude: CoordinateText = None
    longitude: CoordinateText = None
    message: str | None = None
    selected_sectors: SectorNames | None = None
    images: list[str] | None = None
    status: ConsultationStatus | None = None


class ConsultationItem(_InputModel):
    sector: str = Field(min_length=1)
    message: str = Field(min_length=1)
    images: list[str] = Field(min_length=1)


class ConsultationMultiCreate(_InputModel):
    header: ConsultationHeader
    items: list[ConsultationItem] = Field(min_length=1)


class ConsultationStatusUpdate(_InputModel):
    status: ConsultationStatus


class ConsultationResponse(CamelModel):
    id: UUID
    person_type: PersonType

    first_name: str | None = None
    last_name: str | None = None
    identity: str | None = None
    email: str | None = None

    company_name: str | None = None
    rtn: str | None = None
    legal_representative: str | None = None
    company_contact: str | None = None

    mobile: str | None = None
    phone: str | None = None
    alt_email: str | None = None

    department_id: str
    municipality_id: int
    zone: Zone
    locality_id: int | None = None
    custom_locality_name: str | None = None
    geocode: str
    latitude: str | None = None
    longitude: str | None = None

    department: LocationRef | None = None
    municipality: LocationRef | None = None
    locality: LocationRef | None = None

    message: str
    selected_sectors: list[str]
    images: list[str] = Field(default_factory=list)
    status: ConsultationStatus
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_utc(cls, value: datetime) -> datetime:
        # SQLite hands back naive values, every stored timestamp is UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @field_validator("images", mode="before")
    @classmethod
    def images_or_empty(cls, value: Any) -> Any:
        return value or []


class ConsultationListResponse(CamelModel):
    consultations: list[ConsultationResponse]
    total: int


class ConsultationStatusResponse(CamelModel):
    ok: bool = True
    id: UUID
    status: ConsultationStatus


class ConsultationMultiCreateResponse(CamelModel):
    created_ids: list[UUID]


class ConsultationFilters(BaseModel):
    """Filters shared by the admin list, dashboard breakdowns and exports."""

    date_from: date | None = None
    date_to: date | None = None
    department_id: str | None = None
    municipality_id: int | None = None
    locality_id: int | None = None
    sector: str | None = None
    person_type: PersonType | None = None
    status: ConsultationStatus | None = None

    def period_label(self) -> str:
        if self.date_from and self.date_to:
            return f"{self.date_from:%d/%m/%Y} - {self.date_to:%d/%m/%Y}"
        if self.date_from:
            return f"Desde {self.date_from:%d/%m/%Y}"
        if self.date_to:
            return f"Hasta {self.date_to:%d/%m/%Y}"
        return "Todas las fechas"
