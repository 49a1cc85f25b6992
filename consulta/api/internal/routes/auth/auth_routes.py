# Third-party imports
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from consulta.core.db import get_async_session
from consulta.core.monitoring.logging import get_request_logger
from consulta.dependancies.common import get_client_identifier, get_current_user, get_login_rate_limiter
from consulta.models.auth.user import User
from consulta.schemas.auth import LoginRequest, ProfilePasswordUpdateRequest, UserSchema
from consulta.schemas.common import OperationResult
from consulta.services.auth.rate_limit_services import RateLimiter
from consulta.services.auth.token_services import create_access_token
from consulta.services.auth.user_services import authenticate_user, update_user_password
from consulta.settings import settings
from consulta.utils.password_utils import verify_password

router = APIRouter(tags=["Authentication"])

AUTH_ERROR_INVALID_CREDENTIALS = "Usuario o contraseña incorrectos"
AUTH_ERROR_TOO_MANY_ATTEMPTS = "Demasiados intentos de inicio de sesión. Intente de nuevo más tarde."


def _set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=settings.ENVIRONMENT == "production",
        path="/",
    )


@router.post("/login", response_model=UserSchema)
async def login(
    request: Request,
    response: Response,
    credentials: LoginRequest,
    limiter: RateLimiter = Depends(get_login_rate_limiter),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Cookie based login.

    Failed attempts are counted per client; once the limit is reached every
    further attempt in the window is refused before credentials are checked.
    """
    client_id = get_client_identifier(request)
    logger = get_request_logger(__name__, request, client=client_id)

    limit_status = await limiter.check(client_id)
    if not limit_status.allowed:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=AUTH_ERROR_TOO_MANY_ATTEMPTS,
            headers={"Retry-After": str(limit_status.retry_after)},
        )

    user = await authenticate_user(db, credentials.username, credentials.password)
    if user is None:
        attempts = await limiter.hit(client_id)
        logger.warning(f"Login failed: attempts={attempts}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=AUTH_ERROR_INVALID_CREDENTIALS)

    token, jti = create_access_token(user)
    _set_auth_cookie(response, token)
    logger.info(f"Login succeeded: user_id={user.id} jti={jti}")
    return user


@router.post("/logout", response_model=OperationResult)
async def logout(request: Request, response: Response):
    """Clear the auth cookie"""
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        httponly=True,
        samesite="lax",
        secure=settings.ENVIRONMENT == "production",
        path="/",
    )
    get_request_logger(__name__, request).info("Logout")
    return OperationResult(id="logout")


@router.get("/user", response_model=UserSchema)
async def current_user_profile(current_user: User = Depends(get_current_user)):
    """Return the authenticated user"""
    return current_user


@router.put("/profile/password", response_model=OperationResult)
async def change_own_password(
    request: Request,
    password_data: ProfilePasswordUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    """Change the password of the authenticated user"""
    if not verify_password(password_data.current_password, current_user.hashed_password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="La contraseña actual es incorrecta")

    try:
        await update_user_password(db, current_user, password_data.new_password)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    get_request_logger(__name__, request, user_id=current_user.id).info("Own password changed")
    return OperationResult(id=str(current_user.id))
