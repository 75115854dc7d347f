"""
Calendar routes for the monthly trip view.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from datetime import date
from app.db.session import get_db
from app.models.user import User
from app.schemas.calendar import CalendarMonthResponse, CalendarDayResponse
from app.api.dependencies import get_current_user
from app.api.routes.trips import check_trip_access
from app.services import calendar_service, itinerary_service

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("/{trip_id}/month", response_model=CalendarMonthResponse)
async def get_month(
    trip_id: int,
    year: Optional[int] = Query(None, ge=1, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    selected: Optional[date] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Month grid of the trip's stops.

    Defaults to the month of the trip's start date, or the current month
    when the trip has no dates.
    """
    trip = check_trip_access(trip_id, current_user, db)
    anchor = trip.start_date or date.today()
    year = year or anchor.year
    month = month or anchor.month

    stops = itinerary_service.get_trip_stops(trip_id, db)
    return {
        "trip_id": trip_id,
        "year": year,
        "month": month,
        "selected_date": selected,
        "weeks": calendar_service.build_month_grid(year, month, stops, selected=selected)
    }


@router.get("/{trip_id}/days/{day}", response_model=CalendarDayResponse)
async def get_day(
    trip_id: int,
    day: date,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Stops and activities for one date."""
    check_trip_access(trip_id, current_user, db)
    stops = itinerary_service.get_trip_stops(trip_id, db)
    return {
        "trip_id": trip_id,
        "date": day,
        "stops": calendar_service.stops_for_date(stops, day),
        "activities": calendar_service.activities_for_date(stops, day)
    }
