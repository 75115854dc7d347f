"""
Pydantic schemas for accommodations.
"""
from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime
from decimal import Decimal


class AccommodationResponse(BaseModel):
    """Schema for catalog accommodation response."""
    id: int
    city_id: Optional[int] = None
    provider: Optional[str] = None
    name: Optional[str] = None
    price_per_night: Optional[Decimal] = None
    currency: str
    currency_id: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True


class TripAccommodationForm(BaseModel):
    """Form payload for adding or editing a stay."""
    accommodation_id: Optional[int] = None
    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    notes: Optional[str] = None


class TripAccommodationResponse(BaseModel):
    """Schema for a trip stay."""
    id: int
    trip_id: int
    accommodation_id: int
    check_in_date: date
    check_out_date: date
    notes: Optional[str] = None
    nights: int
    accommodation: Optional[AccommodationResponse] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AccommodationCountResponse(BaseModel):
    """Number of stays booked on a trip."""
    trip_id: int
    count: int
