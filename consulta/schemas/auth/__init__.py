# Local application imports
from consulta.schemas.auth.token_schemas import LoginRequest, TokenPayload
from consulta.schemas.auth.user_schemas import (
    ProfilePasswordUpdateRequest,
    UserCreateRequest,
    UserPasswordUpdateRequest,
    UserSchema,
    UserStatusUpdateRequest,
)

__all__ = [
    "LoginRequest",
    "ProfilePasswordUpdateRequest",
    "TokenPayload",
    "UserCreateRequest",
    "UserPasswordUpdateRequest",
    "UserSchema",
    "UserStatusUpdateRequest",
]
