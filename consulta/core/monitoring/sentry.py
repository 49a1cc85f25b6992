# Standard library imports
import logging

# Third-party imports
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

# Local application imports
from consulta.core.monitoring.logging import get_logger
from consulta.settings import settings

logger = get_logger(__name__)


def init_sentry() -> bool:
    """
    Initialize Sentry with the logging and FastAPI integrations.

    Only active in production with a configured DSN. Returns True when
    Sentry was initialized by this call.
    """
    if settings.ENVIRONMENT != "production" or not settings.SENTRY_DSN:
        return False

    if sentry_sdk.get_client().is_active():
        logger.info("Sentry already initialized")
        return False

    logger.info(f"Initializing Sentry in {settings.ENVIRONMENT} environment")
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        integrations=[
            LoggingIntegration(
                level=logging.WARNING,  # Capture warnings and above as breadcrumbs
                event_level=logging.ERROR,  # Send errors as events
            ),
            FastApiIntegration(),
        ],
        environment=settings.ENVIRONMENT,
        traces_sample_rate=1.0,  # tweak for performance
        send_default_pii=False,
    )
    return True
