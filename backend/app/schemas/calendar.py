"""
Pydantic schemas for the trip calendar view.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import date
from app.schemas.itinerary import TripActivityResponse


class CalendarStop(BaseModel):
    """Stop summary shown on a calendar day."""
    id: int
    seq: int
    city_name: str
    start_date: date
    end_date: date


class CalendarDay(BaseModel):
    """One cell of the month grid."""
    date: date
    is_current_month: bool
    is_today: bool
    is_selected: bool
    has_trips: bool
    stops: List[CalendarStop] = []


class CalendarMonthResponse(BaseModel):
    """Month grid of a trip, weeks start on Sunday."""
    trip_id: int
    year: int
    month: int
    selected_date: Optional[date] = None
    weeks: List[List[CalendarDay]]


class CalendarDayResponse(BaseModel):
    """Activities scheduled on the stops covering one date."""
    trip_id: int
    date: date
    stops: List[CalendarStop]
    activities: List[TripActivityResponse]
