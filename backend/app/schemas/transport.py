"""
Pydantic schemas for transport costs and trip transport legs.
"""
from pydantic import BaseModel
from typing import Optional, Any, Dict
from datetime import datetime
from decimal import Decimal


class CitySummary(BaseModel):
    """City name and country joined onto transport rows."""
    name: str
    country: Optional[str] = None

    class Config:
        from_attributes = True


class CurrencySummary(BaseModel):
    """Currency code and symbol joined onto transport rows."""
    code: str
    symbol: Optional[str] = None

    class Config:
        from_attributes = True


class TransportCostCreate(BaseModel):
    """Schema for reference transport cost creation."""
    from_city_id: int
    to_city_id: int
    mode: str
    avg_cost: Optional[Decimal] = None
    avg_duration_minutes: Optional[int] = None
    provider: Optional[str] = None
    currency_id: Optional[int] = None
    meta: Optional[Dict[str, Any]] = None


class TransportCostResponse(BaseModel):
    """Schema for reference transport cost response."""
    id: int
    from_city_id: Optional[int] = None
    to_city_id: Optional[int] = None
    mode: str
    avg_cost: Optional[Decimal] = None
    avg_duration_minutes: Optional[int] = None
    provider: Optional[str] = None
    currency_id: Optional[int] = None
    from_city: Optional[CitySummary] = None
    to_city: Optional[CitySummary] = None
    currency: Optional[CurrencySummary] = None

    class Config:
        from_attributes = True


class TransportMode(BaseModel):
    """Selectable transport mode."""
    id: str
    name: str
    icon: str
    description: str


class TransportDetailForm(BaseModel):
    """Form payload for a transport leg; required fields are checked by the form rules."""
    from_city_id: Optional[int] = None
    to_city_id: Optional[int] = None
    transport_mode: Optional[str] = None
    provider: Optional[str] = None
    departure_time: Optional[datetime] = None
    arrival_time: Optional[datetime] = None
    cost: Optional[Decimal] = None
    currency_id: Optional[int] = None
    booking_reference: Optional[str] = None
    notes: Optional[str] = None


class TransportDetailResponse(BaseModel):
    """Schema for a transport leg response."""
    id: int
    trip_id: int
    from_city_id: int
    to_city_id: int
    transport_mode: str
    provider: str
    departure_time: datetime
    arrival_time: datetime
    cost: Decimal
    currency_id: int
    booking_reference: Optional[str] = None
    notes: Optional[str] = None
    from_city: Optional[CitySummary] = None
    to_city: Optional[CitySummary] = None
    currency: Optional[CurrencySummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TripTransportCost(BaseModel):
    """Total transport cost of a trip in one currency."""
    trip_id: int
    currency: str
    total_cost: Decimal
