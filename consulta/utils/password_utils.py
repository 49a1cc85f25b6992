# Standard library imports
import re

# Third-party imports
import bcrypt

# Local application imports
from consulta.settings import settings

BCRYPT_HASH_PATTERN = re.compile(r"^\$2[aby]\$\d{2}\$[./A-Za-z0-9]{53}$")


def looks_like_bcrypt_hash(value: str) -> bool:
    return BCRYPT_HASH_PATTERN.match(value) is not None


def get_password_hash(password: str) -> str:
    """
    Generate a hashed password.

    Raises:
        ValueError: If the value already looks like a bcrypt hash
    """
    if looks_like_bcrypt_hash(password):
        raise ValueError("La contraseña parece ya un hash bcrypt. Envíe la contraseña en texto plano.")
    pwd_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    hashed_password = bcrypt.hashpw(password=pwd_bytes, salt=salt)
    return hashed_password.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain text password against its hashed version.
    """
    password_byte_enc = plain_password.encode("utf-8")
    hashed_password_bytes = hashed_password.encode("utf-8")
    try:
        return bcrypt.checkpw(password=password_byte_enc, hashed_password=hashed_password_bytes)
    except ValueError:
        # Stored value is not a valid bcrypt hash
        return False
