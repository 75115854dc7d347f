"""
Pydantic schemas for cities, activities, trip stops and trip activities.
"""
from pydantic import BaseModel
from typing import List, Optional, Any, Dict
from datetime import date, datetime, time as dt_time
from decimal import Decimal
from app.schemas.trip import TripResponse


class CityResponse(BaseModel):
    """Schema for city response."""
    id: int
    name: str
    country: Optional[str] = None
    iso_country_code: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    population: Optional[int] = None
    cost_index: Optional[Decimal] = None
    avg_daily_hotel: Optional[Decimal] = None
    popularity_score: int = 0
    currency_id: Optional[int] = None

    class Config:
        from_attributes = True


class ActivityResponse(BaseModel):
    """Schema for catalog activity response."""
    id: int
    city_id: Optional[int] = None
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    cost: Optional[Decimal] = None
    duration_minutes: Optional[int] = None
    vendor: Optional[str] = None
    currency_id: Optional[int] = None

    class Config:
        from_attributes = True


class TripActivityCreate(BaseModel):
    """Schema for scheduling an activity on a stop."""
    activity_id: Optional[int] = None
    scheduled_date: Optional[date] = None
    start_time: Optional[dt_time] = None
    notes: Optional[str] = None


class TripActivityUpdate(BaseModel):
    """Schema for trip activity update."""
    activity_id: Optional[int] = None
    name: Optional[str] = None
    scheduled_date: Optional[date] = None
    start_time: Optional[dt_time] = None
    duration_minutes: Optional[int] = None
    cost: Optional[Decimal] = None
    notes: Optional[str] = None


class TripActivityResponse(BaseModel):
    """Schema for trip activity response."""
    id: int
    trip_stop_id: int
    activity_id: Optional[int] = None
    name: str
    scheduled_date: Optional[date] = None
    start_time: Optional[dt_time] = None
    duration_minutes: Optional[int] = None
    cost: Optional[Decimal] = None
    notes: Optional[str] = None
    activity: Optional[ActivityResponse] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class StopCreate(BaseModel):
    """Schema for adding a city to a trip."""
    city_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None


class StopUpdate(BaseModel):
    """Schema for trip stop update."""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None
    local_transport_cost: Optional[Decimal] = None
    accommodation_estimate: Optional[Decimal] = None


class StopReorder(BaseModel):
    """New stop order, first id becomes seq 1."""
    stop_ids: List[int]


class TripStopResponse(BaseModel):
    """Schema for trip stop response."""
    id: int
    trip_id: int
    seq: int
    city_id: int
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    local_transport_cost: Optional[Decimal] = None
    accommodation_estimate: Optional[Decimal] = None
    notes: Optional[str] = None
    meta: Optional[Dict[str, Any]] = None
    city: Optional[CityResponse] = None
    activities: List[TripActivityResponse] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TripItineraryResponse(BaseModel):
    """A trip with its ordered stops."""
    trip: TripResponse
    stops: List[TripStopResponse]


class TripStatsResponse(BaseModel):
    """Counts and activity cost of a trip."""
    stops_count: int
    activities_count: int
    total_cost: Decimal


class CloneTripRequest(BaseModel):
    """Overrides applied when copying a suggested trip."""
    name: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
