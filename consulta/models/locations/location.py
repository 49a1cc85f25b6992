# Standard library imports
import enum

# Third-party imports
from sqlalchemy import Enum as SQLEnum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

# Local application imports
from consulta.models.base import Base


class Zone(str, enum.Enum):
    URBANO = "urbano"
    RURAL = "rural"


class Department(Base):
    """Top level of the reference hierarchy, keyed by its 2-character code."""

    __tablename__ = "departments"

    id: Mapped[str] = mapped_column(String(2), primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    geocode: Mapped[str] = mapped_column(String(16), nullable=False)
    latitude: Mapped[str | None] = mapped_column(String(32), nullable=True)
    longitude: Mapped[str | None] = mapped_column(String(32), nullable=True)

    municipalities: Mapped[list["Municipality"]] = relationship("Municipality", back_populates="department")

    def __str__(self) -> str:
        return f"Department: {self.id} - {self.name}"


class Municipality(Base):
    __tablename__ = "municipalities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    department_id: Mapped[str] = mapped_column(
        String(2),
        ForeignKey("departments.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    geocode: Mapped[str] = mapped_column(String(16), nullable=False)
    latitude: Mapped[str | None] = mapped_column(String(32), nullable=True)
    longitude: Mapped[str | None] = mapped_column(String(32), nullable=True)

    department: Mapped[Department] = relationship("Department", back_populates="municipalities")
    localities: Mapped[list["Locality"]] = relationship("Locality", back_populates="municipality")

    def __str__(self) -> str:
        return f"Municipality: {self.id} - {self.name}"


class Locality(Base):
    """Colonia/barrio (urbano) or aldea/caserío (rural)."""

    __tablename__ = "localities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(160), nullable=False, index=True)
    municipality_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("municipalities.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    area: Mapped[Zone] = mapped_column(
        SQLEnum(Zone, name="zone", native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    geocode: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    latitude: Mapped[str | None] = mapped_column(String(32), nullable=True)
    longitude: Mapped[str | None] = mapped_column(String(32), nullable=True)

    municipality: Mapped[Municipality] = relationship("Municipality", back_populates="localities")

    def __str__(self) -> str:
        return f"Locality: {self.id} - {self.name} ({self.area.value})"
