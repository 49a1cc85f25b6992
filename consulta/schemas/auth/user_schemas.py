# Standard library imports
from datetime import UTC, datetime
from uuid import UUID

# Third-party imports
from pydantic import ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

# Local application imports
from consulta.models.auth.user import UserRole
from consulta.schemas.common.response_schemas import CamelModel


class UserSchema(CamelModel):
    """
    Public representation of a user. The password hash is never exposed.
    """

    id: UUID
    username: str
    role: UserRole
    active: bool
    email: str | None = None
    full_name: str | None = None
    created_at: datetime
    last_login: datetime | None = None

    @field_validator("created_at", "last_login")
    @classmethod
    def ensure_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


# ============================
# ----- Request schemas ------
# ============================


class UserCreateRequest(CamelModel):
    username: str = Field(min_length=3, max_length=64)
    password: str = Field(min_length=6, max_length=128)
    email: EmailStr
    full_name: str | None = Field(None, max_length=120)
    role: UserRole = UserRole.CIUDADANO
    active: bool = True

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "username": "planificacion",
                "password": "secret123",
                "email": "planificacion@consulta.hn",
                "fullName": "Unidad de Planificación",
                "role": "planificador",
            }
        },
    )

    @field_validator("username")
    @classmethod
    def strip_username(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 3:
            raise ValueError("El nombre de usuario debe tener al menos 3 caracteres")
        return value


class UserPasswordUpdateRequest(CamelModel):
    password: str = Field(min_length=6, max_length=128)


class UserStatusUpdateRequest(CamelModel):
    active: bool


class ProfilePasswordUpdateRequest(CamelModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6, max_length=128)
