# Standard library imports
from pathlib import Path
from typing import Annotated, Any, Literal

# Third-party imports
from pydantic import AnyUrl, BeforeValidator, computed_field
from pydantic_core import MultiHostUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR: Path = Path(__file__).resolve().parent.parent


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


def parse_list(v: Any) -> list[str] | Any:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    return v


class CommonSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # General settings
    API_PREFIX: str = "/api"
    ENVIRONMENT: Literal["dev", "staging", "production"] = "dev"
    DEBUG_MODE: bool = False
    PROJECT_NAME: str = "Consulta Ciudadana Honduras"
    VERSION: str = "1.0.0"

    # Database settings
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "consulta"
    # Full SQLAlchemy URL, takes precedence over the POSTGRES_* values
    # (e.g. sqlite+aiosqlite:///./consulta.db for local development)
    DATABASE_URL: str | None = None
    DATABASE_ECHO: bool = False
    AUTO_CREATE_TABLES: bool = False

    @property
    def SQLALCHEMY_ASYNC_DATABASE_URI(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return str(
            MultiHostUrl.build(
                scheme="postgresql+asyncpg",  # async driver for async queries
                username=self.POSTGRES_USER,
                password=self.POSTGRES_PASSWORD,
                host=self.POSTGRES_SERVER,
                port=self.POSTGRES_PORT,
                path=self.POSTGRES_DB,
            )
        )

    # CORS settings
    BACKEND_CORS_ORIGINS: Annotated[list[AnyUrl] | str, BeforeValidator(parse_cors)] = [
        AnyUrl("http://localhost:3000/"),
        AnyUrl("http://localhost:5000/"),
        AnyUrl("http://localhost:5173/"),
    ]

    @computed_field  # type: ignore[prop-decorator, misc]
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]

    # Optional settings
    SENTRY_DSN: str | None = None

    # JWT settings
    JWT_ALGORITHM: str = "HS256"
    JWT_SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days
    AUTH_COOKIE_NAME: str = "token"
    BCRYPT_ROUNDS: int = 12

    # Accounts that can not be deleted or deactivated through the API
    PROTECTED_USERNAMES: Annotated[list[str] | str, BeforeValidator(parse_list)] = ["SPE"]

    # Redis settings
    REDIS_URL: str = "redis://localhost:6379/0"

    # Rate limiting
    LOGIN_RATE_LIMIT_ATTEMPTS: int = 5
    LOGIN_RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60
    UPLOAD_RATE_LIMIT_ATTEMPTS: int = 10
    UPLOAD_RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60
    USER_CREATION_RATE_LIMIT_ATTEMPTS: int = 3
    USER_CREATION_RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60

    # Admin settings
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "password@1234"
    ADMIN_EMAIL: str = "admin@consulta.hn"
    ADMIN_FULL_NAME: str = "Administrador"

    # Image upload settings
    UPLOAD_DIR: Path = BASE_DIR.parent / "uploads"
    ALLOWED_IMAGE_TYPES: list[str] = [
        "image/jpeg",
        "image/png",
        "image/webp",
    ]
    MAX_IMAGE_SIZE: int = 15 * 1024 * 1024  # 15 MB
    MAX_IMAGES_PER_UPLOAD: int = 3
    IMAGE_MAX_DIMENSIONS: tuple[int, int] = (1920, 1080)
    IMAGE_JPEG_QUALITY: int = 85

    # Export settings
    EXPORT_MAX_ROWS: int = 10000

    # Pagination configurations
    PAGINATION_CONFIGS: dict[str, dict[str, int]] = {
        "consultations": {
            "default_limit": 50,
            "max_limit": 1000,
            "min_limit": 1,
            "default_offset": 0,
        },
    }
