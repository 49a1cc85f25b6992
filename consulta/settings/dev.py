# Local application imports
from consulta.settings.common import CommonSettings


class DevSettings(CommonSettings):
    DEBUG_MODE: bool = True
    AUTO_CREATE_TABLES: bool = True
