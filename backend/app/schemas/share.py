"""
Pydantic schemas for shared trip links.
"""
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class SharedLinkCreate(BaseModel):
    """Schema for share link creation."""
    expires_in_days: Optional[int] = None


class SharedLinkResponse(BaseModel):
    """Schema for share link response."""
    id: int
    trip_id: int
    token: str
    expires_at: Optional[datetime] = None
    created_at: datetime
    share_path: str

    class Config:
        from_attributes = True
