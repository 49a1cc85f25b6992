# Local application imports
from consulta.core.db.database import Database
from consulta.core.db.get_async_session import get_async_session, get_database
from consulta.core.db.run_with_new_session import run_with_new_session

__all__ = [
    "Database",
    "get_async_session",
    "get_database",
    "run_with_new_session",
]
