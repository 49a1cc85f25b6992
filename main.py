# Standard library imports
from contextlib import asynccontextmanager

# Third-party imports
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
import redis.asyncio as redis

# Local application imports
from consulta.api import router as api_router
from consulta.api.internal.utils.exceptions import register_exception_handlers
from consulta.core.caching.redis import create_redis_client
from consulta.core.db import Database, run_with_new_session
from consulta.core.middlewares import RequestIDMiddleware
from consulta.core.monitoring import get_logger, init_sentry
from consulta.services.auth.user_services import ensure_default_admin
from consulta.services.storage.image_storage import ImageStorageService
from consulta.settings import settings

# Set up the main application logger
logger = get_logger("consulta")


# ---- FASTAPI APP CREATION ----
def custom_generate_unique_id(route: APIRoute) -> str:
    # Handle routes without tags
    if route.tags and len(route.tags) > 0:
        return f"{route.tags[0]}-{route.name}"
    else:
        return route.name or "unnamed_route"


def create_app(
    database: Database | None = None,
    redis_client: redis.Redis | None = None,
    image_storage: ImageStorageService | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    The database, Redis client and image storage are built from settings
    unless given explicitly, which lets tests run against SQLite and a fake
    Redis without touching module globals.
    """
    init_sentry()

    database = database or Database(settings.SQLALCHEMY_ASYNC_DATABASE_URI, echo=settings.DATABASE_ECHO)
    redis_client = redis_client if redis_client is not None else create_redis_client()
    image_storage = image_storage or ImageStorageService(settings.UPLOAD_DIR)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger.info("Starting up FastAPI application")

        if settings.AUTO_CREATE_TABLES:
            await database.create_all()

        try:
            admin = await run_with_new_session(database, ensure_default_admin)
            logger.info(f"Admin user ready with ID: {admin.id}")
        except Exception as e:
            logger.error(f"Failed to create admin user: {e}")

        yield

        # Shutdown
        logger.info("Shutting down FastAPI application")
        await redis_client.aclose()
        await database.dispose()

    docs_enabled = settings.ENVIRONMENT != "production"
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Backend de consultas ciudadanas de Honduras",
        openapi_url=f"{settings.API_PREFIX}/openapi.json" if docs_enabled else None,
        docs_url=f"{settings.API_PREFIX}/docs" if docs_enabled else None,
        redoc_url=f"{settings.API_PREFIX}/redoc" if docs_enabled else None,
        generate_unique_id_function=custom_generate_unique_id,
        lifespan=lifespan,
    )
    app.state.database = database
    app.state.redis = redis_client
    app.state.image_storage = image_storage

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.all_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "version": settings.VERSION}

    # Test database connection endpoint
    @app.get("/health/db")
    async def database_health(request: Request):
        try:
            result = await request.app.state.database.ping()
            return {"status": "database_connected", "result": result}
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return {"status": "database_error", "error": str(e)}

    app.include_router(api_router)

    return app


# Create the app instance
app = create_app()
