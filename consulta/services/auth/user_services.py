# Standard library imports
from collections.abc import Sequence
from datetime import UTC, datetime
from functools import lru_cache
from uuid import UUID

# Third-party imports
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from consulta.core.monitoring.logging import get_logger
from consulta.models.auth.user import User, UserRole
from consulta.schemas.auth.user_schemas import UserCreateRequest
from consulta.settings import settings
from consulta.utils.password_utils import get_password_hash, verify_password

logger = get_logger(__name__)


class UserAlreadyExistsError(Exception):
    pass


@lru_cache
def _dummy_password_hash() -> str:
    # Compared against when the username is unknown so both paths cost a bcrypt check
    return get_password_hash("consulta-dummy-password")


def is_protected_user(user: User) -> bool:
    protected = {name.lower() for name in settings.PROTECTED_USERNAMES}
    return user.username.lower() in protected


async def get_user_by_id(db: AsyncSession, user_id: UUID) -> User | None:
    return await db.get(User, user_id)


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    result = await db.execute(select(User).where(func.lower(User.username) == username.strip().lower()))
    return result.scalar_one_or_none()


async def authenticate_user(db: AsyncSession, username: str, password: str) -> User | None:
    """
    Authenticate a user by username and password.

    Returns None for an unknown username, an inactive account or a wrong
    password alike, so callers can answer with one uniform message.
    """
    user = await get_user_by_username(db, username)
    if user is None:
        verify_password(password, _dummy_password_hash())
        return None
    if not verify_password(password, user.hashed_password):
        return None
    if not user.active:
        return None

    user.last_login = datetime.now(UTC)
    await db.commit()
    return user


async def list_users(db: AsyncSession) -> Sequence[User]:
    result = await db.execute(select(User).order_by(User.created_at, User.username))
    return result.scalars().all()


async def create_user(db: AsyncSession, user_data: UserCreateRequest) -> User:
    """
    Create a user with a freshly hashed password.

    Raises:
        UserAlreadyExistsError: If the username is taken (case-insensitive)
        ValueError: If the password already looks like a bcrypt hash
    """
    if await get_user_by_username(db, user_data.username) is not None:
        raise UserAlreadyExistsError(user_data.username)

    user = User(
        username=user_data.username,
        hashed_password=get_password_hash(user_data.password),
        email=str(user_data.email),
        full_name=user_data.full_name,
        role=user_data.role,
        active=user_data.active,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def delete_user(db: AsyncSession, user: User) -> None:
    await db.delete(user)
    await db.commit()


async def update_user_password(db: AsyncSession, user: User, new_password: str) -> bool:
    """
    Update a user's password in the database.

    Args:
        db: The current database session.
        user: The user whose password is being changed.
        new_password: The new password to set for the user.

    Returns:
        True if the password is successfully updated.
    """
    user.hashed_password = get_password_hash(new_password)

    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    return True


async def update_user_status(db: AsyncSession, user: User, active: bool) -> User:
    user.active = active
    await db.commit()
    await db.refresh(user)
    return user


async def ensure_default_admin(db: AsyncSession) -> User:
    """Create the configured super admin if no user with that username exists."""
    existing_admin = await get_user_by_username(db, settings.ADMIN_USERNAME)
    if existing_admin is not None:
        logger.info("Admin user already exists.")
        return existing_admin

    admin_user = User(
        username=settings.ADMIN_USERNAME,
        hashed_password=get_password_hash(settings.ADMIN_PASSWORD),
        email=settings.ADMIN_EMAIL,
        full_name=settings.ADMIN_FULL_NAME,
        role=UserRole.SUPER_ADMIN,
        active=True,
    )
    db.add(admin_user)
    await db.commit()
    logger.info("Admin user created.")
    return admin_user
