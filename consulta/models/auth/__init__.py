# Local application imports
from consulta.models.auth.user import User, UserRole

__all__ = ["User", "UserRole"]
