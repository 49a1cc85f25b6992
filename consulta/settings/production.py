# Local application imports
from consulta.settings.common import CommonSettings


class ProductionSettings(CommonSettings):
    DEBUG_MODE: bool = False
    SENTRY_DSN: str | None = None
