# Local application imports
from consulta.core.monitoring.logging import get_contextual_logger, get_logger, get_request_logger
from consulta.core.monitoring.sentry import init_sentry

__all__ = ["get_contextual_logger", "get_logger", "get_request_logger", "init_sentry"]
