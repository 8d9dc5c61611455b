"""
JWT token utilities for the admin gate.
"""

from datetime import datetime, timedelta
from typing import Optional

from jose import JWTError, jwt

from waitlist.config import Settings

ADMIN_SUBJECT = "admin"
ADMIN_TOKEN_TYPE = "admin"


def create_admin_token(settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed, expiring admin token.

    Args:
        settings: Settings holding the signing key and default lifetime
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.admin_token_expire_minutes)
    expire = datetime.utcnow() + expires_delta

    to_encode = {
        "sub": ADMIN_SUBJECT,
        "exp": expire,
        "type": ADMIN_TOKEN_TYPE,
    }

    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_admin_token(settings: Settings, token: str) -> bool:
    """
    Check that a token is a valid, unexpired admin token.

    Returns:
        True if valid, False otherwise
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return False

    return payload.get("sub") == ADMIN_SUBJECT and payload.get("type") == ADMIN_TOKEN_TYPE
