# Standard library imports
from uuid import UUID

# Third-party imports
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from consulta.api.internal.utils.permissions import require_user_manager
from consulta.core.db import get_async_session
from consulta.core.monitoring.logging import get_request_logger
from consulta.dependancies.common import get_client_identifier, get_user_creation_rate_limiter
from consulta.models.auth.user import User
from consulta.schemas.auth import (
    UserCreateRequest,
    UserPasswordUpdateRequest,
    UserSchema,
    UserStatusUpdateRequest,
)
from consulta.schemas.common import OperationResult
from consulta.services.auth.rate_limit_services import RateLimiter
from consulta.services.auth.user_services import (
    UserAlreadyExistsError,
    create_user,
    delete_user,
    get_user_by_id,
    is_protected_user,
    list_users,
    update_user_password,
    update_user_status,
)

router = APIRouter(prefix="/users", tags=["Users"])

ERROR_PROTECTED_USER = "Este usuario está protegido y no puede modificarse"


async def _get_user_or_404(db: AsyncSession, user_id: UUID) -> User:
    user = await get_user_by_id(db, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="Usuario no encontrado")
    return user


@router.get("", response_model=list[UserSchema])
async def list_all_users(
    _: User = Depends(require_user_manager),
    db: AsyncSession = Depends(get_async_session),
):
    """List all users"""
    return await list_users(db)


@router.post("", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
async def create_new_user(
    request: Request,
    user_data: UserCreateRequest,
    current_user: User = Depends(require_user_manager),
    limiter: RateLimiter = Depends(get_user_creation_rate_limiter),
    db: AsyncSession = Depends(get_async_session),
):
    """Create a user (super admin only)"""
    logger = get_request_logger(__name__, request, user_id=current_user.id)
    client_id = get_client_identifier(request)

    limit_status = await limiter.check(client_id)
    if not limit_status.allowed:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Demasiados intentos de creación de usuario. Intente de nuevo más tarde.",
            headers={"Retry-After": str(limit_status.retry_after)},
        )

    try:
        user = await create_user(db, user_data)
    except UserAlreadyExistsError:
        await limiter.hit(client_id)
        raise HTTPException(status_code=400, detail="El nombre de usuario ya existe")
    except ValueError as exc:
        await limiter.hit(client_id)
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    logger.info(f"User created: id={user.id} role={user.role.value}")
    return user


@router.delete("/{user_id}", response_model=OperationResult)
async def remove_user(
    request: Request,
    user_id: UUID,
    current_user: User = Depends(require_user_manager),
    db: AsyncSession = Depends(get_async_session),
):
    """Delete a user. Super admins can not delete themselves"""
    if user_id == current_user.id:
        raise HTTPException(status_code=400, detail="No puede eliminar su propio usuario")

    user = await _get_user_or_404(db, user_id)
    if is_protected_user(user):
        raise HTTPException(status_code=403, detail=ERROR_PROTECTED_USER)

    await delete_user(db, user)
    get_request_logger(__name__, request, user_id=current_user.id).info(f"User deleted: id={user_id}")
    return OperationResult(id=str(user_id))


@router.put("/{user_id}/password", response_model=OperationResult)
async def reset_user_password(
    request: Request,
    user_id: UUID,
    password_data: UserPasswordUpdateRequest,
    current_user: User = Depends(require_user_manager),
    db: AsyncSession = Depends(get_async_session),
):
    """Set a new password for a user"""
    user = await _get_user_or_404(db, user_id)
    if is_protected_user(user) and user.id != current_user.id:
        raise HTTPException(status_code=403, detail=ERROR_PROTECTED_USER)

    try:
        await update_user_password(db, user, password_data.password)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    get_request_logger(__name__, request, user_id=current_user.id).info(f"User password reset: id={user_id}")
    return OperationResult(id=str(user_id))


@router.put("/{user_id}/status", response_model=UserSchema)
async def change_user_status(
    request: Request,
    user_id: UUID,
    status_data: UserStatusUpdateRequest,
    current_user: User = Depends(require_user_manager),
    db: AsyncSession = Depends(get_async_session),
):
    """Activate or deactivate a user"""
    if user_id == current_user.id:
        raise HTTPException(status_code=400, detail="No puede cambiar el estado de su propio usuario")

    user = await _get_user_or_404(db, user_id)
    if is_protected_user(user):
        raise HTTPException(status_code=403, detail=ERROR_PROTECTED_USER)

    user = await update_user_status(db, user, status_data.active)
    get_request_logger(__name__, request, user_id=current_user.id).info(
        f"User status changed: id={user_id} active={status_data.active}"
    )
    return user
