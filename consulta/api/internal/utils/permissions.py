"""
Role based access.

Each permission is an exhaustive match over UserRole, so adding a role
without deciding its access fails type checking at `assert_never`.
"""

# Standard library imports
from collections.abc import Callable
from typing import assert_never

# Third-party imports
from fastapi import Depends, HTTPException, Request, status

# Local application imports
from consulta.core.monitoring.logging import get_request_logger
from consulta.dependancies.common import get_current_user
from consulta.models.auth.user import User, UserRole

AUTH_ERROR_FORBIDDEN = "No tiene permisos para realizar esta acción"


def can_read_consultations(role: UserRole) -> bool:
    match role:
        case UserRole.ADMIN | UserRole.SUPER_ADMIN | UserRole.PLANIFICADOR:
            return True
        case UserRole.CIUDADANO:
            return False
        case _:
            assert_never(role)


def can_manage_consultations(role: UserRole) -> bool:
    match role:
        case UserRole.ADMIN | UserRole.SUPER_ADMIN:
            return True
        case UserRole.PLANIFICADOR | UserRole.CIUDADANO:
            return False
        case _:
            assert_never(role)


def can_manage_users(role: UserRole) -> bool:
    match role:
        case UserRole.SUPER_ADMIN:
            return True
        case UserRole.ADMIN | UserRole.PLANIFICADOR | UserRole.CIUDADANO:
            return False
        case _:
            assert_never(role)


def require_permission(permission: Callable[[UserRole], bool]) -> Callable[..., User]:
    """Dependency factory: the current user, provided their role passes `permission`."""

    def dependency(request: Request, current_user: User = Depends(get_current_user)) -> User:
        if not permission(current_user.role):
            get_request_logger(__name__, request, user_id=current_user.id).warning(
                f"Forbidden: role={current_user.role.value} path={request.url.path}"
            )
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=AUTH_ERROR_FORBIDDEN)
        return current_user

    return dependency


require_consultation_reader = require_permission(can_read_consultations)
require_consultation_manager = require_permission(can_manage_consultations)
require_user_manager = require_permission(can_manage_users)
