"""
Pydantic schemas for queue endpoints.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


# Request schemas

class JoinRequest(BaseModel):
    """Schema for joining the queue. Name is checked by the service."""
    name: Optional[str] = None
    phone: Optional[str] = None


class EntryIdRequest(BaseModel):
    """Schema for admin actions on a single entry."""
    id: int


# Response schemas

class QueueEntryResponse(BaseModel):
    """Schema for a queue entry in responses."""
    id: int
    name: str
    phone: Optional[str] = None
    status: str
    created_at: datetime

    class Config:
        from_attributes = True


class PositionResponse(BaseModel):
    """Where an entry currently stands."""
    id: int
    status: str
    position: Optional[int] = None  # None once called or cancelled


class SuccessResponse(BaseModel):
    """Schema for simple acknowledgements."""
    success: bool = True
