# Standard library imports
from datetime import datetime
import enum

# Third-party imports
from sqlalchemy import Boolean, DateTime, Enum as SQLEnum, String, text
from sqlalchemy.orm import Mapped, mapped_column, validates

# Local application imports
from consulta.models.base import Base
from consulta.models.mixins.uuid_timestamp import UUIDTimeStampMixin


class UserRole(str, enum.Enum):
    CIUDADANO = "ciudadano"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"
    PLANIFICADOR = "planificador"


class User(UUIDTimeStampMixin, Base):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(64),
        index=True,
        unique=True,
        nullable=False,
        comment="Login name, matched case-insensitively",
    )
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole, name="user_role", native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=UserRole.CIUDADANO,
    )
    active: Mapped[bool] = mapped_column(Boolean, default=True, server_default=text("true"), nullable=False)

    email: Mapped[str | None] = mapped_column(String(254), nullable=True)
    full_name: Mapped[str | None] = mapped_column(String(120), nullable=True)

    last_login: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Last successful login timestamp",
    )

    @validates("username")
    def validate_username(self, key: str, value: str) -> str:
        value = (value or "").strip()
        if not value:
            raise ValueError("Username can not be empty")
        return value

    def __str__(self) -> str:
        return f"User: {self.username} ({self.role.value})"
