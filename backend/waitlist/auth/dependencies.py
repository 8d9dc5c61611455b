"""
Authentication dependencies for FastAPI.
"""

import secrets
from typing import Optional

from fastapi import Depends, Header, Request

from waitlist.auth.jwt import create_admin_token, decode_admin_token
from waitlist.config import Settings
from waitlist.errors import AuthorizationError, InvalidCredentialsError


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def authenticate_admin(settings: Settings, username: Optional[str], password: Optional[str]) -> str:
    """
    Check the shared admin credentials and issue a token.

    Raises:
        InvalidCredentialsError: if username or password does not match
    """
    username_ok = secrets.compare_digest(
        (username or "").encode(), settings.admin_username.encode()
    )
    password_ok = secrets.compare_digest(
        (password or "").encode(), settings.admin_password.encode()
    )
    if not (username_ok and password_ok):
        raise InvalidCredentialsError("Invalid username or password")

    return create_admin_token(settings)


async def verify_admin_token(
    x_admin_token: Optional[str] = Header(None, alias="X-Admin-Token"),
    settings: Settings = Depends(get_app_settings),
) -> None:
    """
    Require a valid X-Admin-Token header.

    Raises 403 if the header is missing, malformed or expired.
    """
    if not x_admin_token:
        raise AuthorizationError("Admin token required")

    if not decode_admin_token(settings, x_admin_token):
        raise AuthorizationError("Invalid or expired admin token")
