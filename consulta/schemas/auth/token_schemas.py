# Third-party imports
from pydantic import BaseModel, Field

# ============================
# ----- Request schemas ------
# ============================


class LoginRequest(BaseModel):
    """Request model for the cookie based login."""

    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)

    model_config = {"json_schema_extra": {"example": {"username": "admin", "password": "password@1234"}}}


# ============================
# ----- Token schemas ------
# ============================


class TokenPayload(BaseModel):
    """Claims carried by an access token."""

    sub: str
    username: str
    role: str
    jti: str
    iat: int
    exp: int
