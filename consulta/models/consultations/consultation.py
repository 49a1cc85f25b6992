# Standard library imports
import enum
import uuid

# Third-party imports
from sqlalchemy import JSON, Enum as SQLEnum, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

# Local application imports
from consulta.models.base import Base
from consulta.models.locations.location import Department, Locality, Municipality, Zone
from consulta.models.mixins.uuid_timestamp import UUIDTimeStampMixin


class PersonType(str, enum.Enum):
    NATURAL = "natural"
    JURIDICA = "juridica"
    ANONIMO = "anonimo"


class ConsultationStatus(str, enum.Enum):
    ACTIVE = "active"
    ARCHIVED = "archived"


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class ConsultationSector(Base):
    """One entry of a consultation's ordered sector list (names, not sector ids)."""

    __tablename__ = "consultation_sectors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    consultation_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("consultations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)


class Consultation(Base, UUIDTimeStampMixin):
    __tablename__ = "consultations"

    person_type: Mapped[PersonType] = mapped_column(
        SQLEnum(PersonType, name="person_type", native_enum=False, values_callable=_enum_values),
        nullable=False,
        index=True,
    )

    # Natural person
    first_name: Mapped[str | None] = mapped_column(String(80), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(80), nullable=True)
    identity: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email: Mapped[str | None] = mapped_column(String(254), nullable=True)

    # Legal entity
    company_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    rtn: Mapped[str | None] = mapped_column(String(20), nullable=True)
    legal_representative: Mapped[str | None] = mapped_column(String(120), nullable=True)
    company_contact: Mapped[str | None] = mapped_column(String(254), nullable=True)

    # Contact
    mobile: Mapped[str | None] = mapped_column(String(20), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    alt_email: Mapped[str | None] = mapped_column(String(254), nullable=True)

    # Location, geocode is always derived server-side
    department_id: Mapped[str] = mapped_column(String(2), ForeignKey("departments.id"), nullable=False, index=True)
    municipality_id: Mapped[int] = mapped_column(Integer, ForeignKey("municipalities.id"), nullable=False, index=True)
    zone: Mapped[Zone] = mapped_column(
        SQLEnum(Zone, name="zone", native_enum=False, values_callable=_enum_values),
        nullable=False,
    )
    locality_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("localities.id"), nullable=True, index=True)
    custom_locality_name: Mapped[str | None] = mapped_column(String(80), nullable=True)
    geocode: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    latitude: Mapped[str | None] = mapped_column(String(32), nullable=True)
    longitude: Mapped[str | None] = mapped_column(String(32), nullable=True)

    # Content
    message: Mapped[str] = mapped_column(Text, nullable=False)
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    status: Mapped[ConsultationStatus] = mapped_column(
        SQLEnum(ConsultationStatus, name="consultation_status", native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=ConsultationStatus.ACTIVE,
        index=True,
    )

    sectors: Mapped[list[ConsultationSector]] = relationship(
        ConsultationSector,
        order_by=ConsultationSector.position,
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    department: Mapped[Department] = relationship(Department, lazy="selectin")
    municipality: Mapped[Municipality] = relationship(Municipality, lazy="selectin")
    locality: Mapped[Locality | None] = relationship(Locality, lazy="selectin")

    @property
    def selected_sectors(self) -> list[str]:
        return [sector.name for sector in self.sectors]

    @selected_sectors.setter
    def selected_sectors(self, names: list[str]) -> None:
        self.sectors = [ConsultationSector(position=index, name=name) for index, name in enumerate(names)]

    @property
    def locality_label(self) -> str | None:
        """Linked locality name, falling back to the citizen-supplied one."""
        if self.locality is not None:
            return self.locality.name
        return self.custom_locality_name

    def __str__(self) -> str:
        return f"Consultation: {self.id} ({self.person_type.value}) - {self.geocode}"
