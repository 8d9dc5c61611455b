"""
Admin API endpoints.

A single shared account logs in here and receives a short-lived token to
send as the ``X-Admin-Token`` header on queue mutations.
"""

from fastapi import APIRouter, Depends

from waitlist.auth.dependencies import authenticate_admin, get_app_settings
from waitlist.config import Settings
from waitlist.schemas.auth import AdminLogin, LoginResponse

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    data: AdminLogin,
    settings: Settings = Depends(get_app_settings),
):
    """
    Login with the admin username and password.

    Returns an admin token on success, 401 otherwise.
    """
    token = authenticate_admin(settings, data.username, data.password)
    print("Admin: login succeeded", flush=True)

    return LoginResponse(
        token=token,
        expires_in=settings.admin_token_expire_minutes * 60,
    )
