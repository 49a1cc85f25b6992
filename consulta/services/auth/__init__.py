# Local application imports
from consulta.services.auth.rate_limit_services import RateLimiter, RateLimitStatus
from consulta.services.auth.token_services import InvalidTokenError, create_access_token, decode_access_token
from consulta.services.auth.user_services import (
    UserAlreadyExistsError,
    authenticate_user,
    create_user,
    delete_user,
    ensure_default_admin,
    get_user_by_id,
    get_user_by_username,
    is_protected_user,
    list_users,
    update_user_password,
    update_user_status,
)

__all__ = [
    "InvalidTokenError",
    "RateLimitStatus",
    "RateLimiter",
    "UserAlreadyExistsError",
    "authenticate_user",
    "create_access_token",
    "create_user",
    "decode_access_token",
    "delete_user",
    "ensure_default_admin",
    "get_user_by_id",
    "get_user_by_username",
    "is_protected_user",
    "list_users",
    "update_user_password",
    "update_user_status",
]
