# Standard library imports
from datetime import UTC, datetime, timedelta
from uuid import uuid4

# Third-party imports
import jwt

# Local application imports
from consulta.models.auth.user import User
from consulta.schemas.auth.token_schemas import TokenPayload
from consulta.settings import settings


class InvalidTokenError(Exception):
    """The token is missing, malformed, badly signed or expired."""


def create_access_token(user: User, expires_delta: timedelta | None = None) -> tuple[str, str]:
    """
    Create a signed JWT access token for the given user.

    Args:
        user: The authenticated user
        expires_delta: Optional custom expiration time

    Returns:
        Tuple of (token, jti)
    """
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))

    # Generate a unique JWT ID
    jti = str(uuid4())

    to_encode = {
        "sub": str(user.id),  # Standard JWT claim for subject
        "username": user.username,
        "role": user.role.value,
        "exp": expire,  # Expiration time
        "iat": now,  # Issued at time
        "jti": jti,  # JWT ID for tracking
    }

    token = jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

    return token, jti


def decode_access_token(token: str) -> TokenPayload:
    """
    Verify and decode an access token.

    Raises:
        InvalidTokenError: If the token can not be trusted
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["sub", "exp", "iat"]},
        )
        return TokenPayload.model_validate(payload)
    except jwt.ExpiredSignatureError as exc:
        raise InvalidTokenError("Token has expired") from exc
    except jwt.PyJWTError as exc:
        raise InvalidTokenError("Invalid token") from exc
    except ValueError as exc:
        raise InvalidTokenError("Invalid token payload") from exc
