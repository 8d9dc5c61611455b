"""
Pydantic schemas for the admin login endpoint.
"""

from typing import Optional

from pydantic import BaseModel


class AdminLogin(BaseModel):
    """Schema for admin login."""
    username: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    """Schema for a successful login."""
    success: bool = True
    token: str
    expires_in: int  # seconds
