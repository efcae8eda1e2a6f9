import secrets
import logging
import bcrypt
from app.core.config import settings

logger = logging.getLogger(__name__)

SESSION_TOKEN_BYTES = 32


def hash_password(password: str) -> str:
    """
    Hash a plaintext password with bcrypt.

    Args:
        password: The plaintext password

    Returns:
        The bcrypt hash as a UTF-8 string, salt and cost factor included
    """
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """
    Check a plaintext password against a stored bcrypt hash.

    Returns False instead of raising when the stored hash is malformed.
    """
    if not password or not password_hash:
        return False

    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        logger.error("Stored password hash is not a valid bcrypt hash")
        return False


def generate_session_token() -> str:
    """Generate an opaque, URL-safe session identifier"""
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)
