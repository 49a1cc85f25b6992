# Standard library imports
from uuid import UUID

# Third-party imports
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
import redis.asyncio as redis
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from consulta.core.db import get_async_session
from consulta.core.monitoring.logging import get_request_logger
from consulta.models.auth.user import User
from consulta.services.auth.rate_limit_services import RateLimiter
from consulta.services.auth.token_services import InvalidTokenError, decode_access_token
from consulta.services.auth.user_services import get_user_by_id
from consulta.services.storage.image_storage import ImageStorageService
from consulta.settings import settings

# Bearer header is accepted as a fallback to the auth cookie
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/login", auto_error=False)

AUTH_ERROR_NOT_AUTHENTICATED = "No autenticado"


def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=AUTH_ERROR_NOT_AUTHENTICATED,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_request_token(request: Request, bearer_token: str | None = Depends(oauth2_scheme)) -> str | None:
    return request.cookies.get(settings.AUTH_COOKIE_NAME) or bearer_token


async def get_current_user_optional(
    request: Request,
    token: str | None = Depends(get_request_token),
    db: AsyncSession = Depends(get_async_session),
) -> User | None:
    """Get current user if a valid token is provided, otherwise return None"""
    if not token:
        return None

    try:
        payload = decode_access_token(token)
        user_id = UUID(payload.sub)
    except (InvalidTokenError, ValueError) as exc:
        get_request_logger(__name__, request).info(f"Rejected token: {exc}")
        return None

    user = await get_user_by_id(db, user_id)
    if user is None or not user.active:
        return None
    return user


async def get_current_user(user: User | None = Depends(get_current_user_optional)) -> User:
    """Get current user from the auth cookie or bearer token"""
    if user is None:
        raise _credentials_exception()
    return user


def get_redis(request: Request) -> redis.Redis:
    return request.app.state.redis


def get_login_rate_limiter(client: redis.Redis = Depends(get_redis)) -> RateLimiter:
    return RateLimiter(
        client,
        scope="login",
        limit=settings.LOGIN_RATE_LIMIT_ATTEMPTS,
        window_seconds=settings.LOGIN_RATE_LIMIT_WINDOW_SECONDS,
    )


def get_upload_rate_limiter(client: redis.Redis = Depends(get_redis)) -> RateLimiter:
    return RateLimiter(
        client,
        scope="upload",
        limit=settings.UPLOAD_RATE_LIMIT_ATTEMPTS,
        window_seconds=settings.UPLOAD_RATE_LIMIT_WINDOW_SECONDS,
    )


def get_user_creation_rate_limiter(client: redis.Redis = Depends(get_redis)) -> RateLimiter:
    return RateLimiter(
        client,
        scope="user_creation",
        limit=settings.USER_CREATION_RATE_LIMIT_ATTEMPTS,
        window_seconds=settings.USER_CREATION_RATE_LIMIT_WINDOW_SECONDS,
    )


def get_image_storage(request: Request) -> ImageStorageService:
    return request.app.state.image_storage


def get_client_identifier(request: Request) -> str:
    return request.client.host if request.client else "unknown"
