"""
Pydantic schemas for Trip entity.
"""
from pydantic import BaseModel
from typing import List, Optional, Any, Dict
from datetime import date, datetime
from decimal import Decimal
from app.models.trip import TripType


class TripBase(BaseModel):
    """Base trip schema."""
    name: str
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_public: bool = False
    currency: str = "USD"
    budget: Optional[Decimal] = None


class TripCreate(TripBase):
    """Schema for trip creation. Dates are optional here so the form rules report them."""
    trip_type: Optional[TripType] = None
    meta: Optional[Dict[str, Any]] = None


class TripUpdate(BaseModel):
    """Schema for trip update."""
    name: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_public: Optional[bool] = None
    currency: Optional[str] = None
    budget: Optional[Decimal] = None
    meta: Optional[Dict[str, Any]] = None


class TripResponse(TripBase):
    """Schema for trip response."""
    id: int
    user_id: Optional[int] = None
    cover_photo_url: Optional[str] = None
    total_estimated_cost: Optional[Decimal] = None
    meta: Optional[Dict[str, Any]] = None
    trip_type: TripType
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TripDetailResponse(TripResponse):
    """Trip plus the caller's role on it."""
    role: str


class CoverPhotoResponse(BaseModel):
    """Stored cover photo location."""
    cover_photo_url: str
    public_url: str


class TripListResponse(BaseModel):
    """Filtered and sorted trip list."""
    total: int
    trips: List[TripResponse]
