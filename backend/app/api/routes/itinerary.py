"""
Itinerary routes: trip stops and scheduled activities.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.models.user import User
from app.schemas.itinerary import (
    StopCreate, StopUpdate, StopReorder, TripStopResponse,
    TripActivityCreate, TripActivityUpdate, TripActivityResponse,
    TripItineraryResponse, TripStatsResponse
)
from app.api.dependencies import get_current_user
from app.api.routes.trips import check_trip_access
from app.core.exceptions import NotFoundError
from app.services import itinerary_service

router = APIRouter(prefix="/trips", tags=["itinerary"])


def _get_stop_in_trip(trip_id: int, stop_id: int, db: Session):
    stop = itinerary_service.get_trip_stop(stop_id, db)
    if stop.trip_id != trip_id:
        raise NotFoundError("Trip stop", stop_id)
    return stop


def _get_activity_in_trip(trip_id: int, trip_activity_id: int, db: Session):
    trip_activity = itinerary_service.get_trip_activity(trip_activity_id, db)
    if trip_activity.trip_stop.trip_id != trip_id:
        raise NotFoundError("Trip activity", trip_activity_id)
    return trip_activity


@router.get("/{trip_id}/itinerary", response_model=TripItineraryResponse)
async def get_itinerary(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Trip with its stops in order."""
    check_trip_access(trip_id, current_user, db)
    return itinerary_service.get_trip_with_stops(trip_id, db)


@router.get("/{trip_id}/stats", response_model=TripStatsResponse)
async def get_trip_stats(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user, db)
    return itinerary_service.get_trip_stats(trip_id, db)


@router.post("/{trip_id}/stops", response_model=TripStopResponse, status_code=status.HTTP_201_CREATED)
async def add_stop(
    trip_id: int,
    stop_data: StopCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add a city to the end of the trip."""
    check_trip_access(trip_id, current_user, db, action="edit")
    stop = itinerary_service.add_city_to_trip(
        trip_id,
        stop_data.city_id,
        stop_data.start_date,
        stop_data.end_date,
        stop_data.notes,
        db
    )
    return itinerary_service.get_trip_stop(stop.id, db)


@router.post("/{trip_id}/stops/reorder", response_model=List[TripStopResponse])
async def reorder_stops(
    trip_id: int,
    reorder: StopReorder,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Renumber stops in the given order."""
    check_trip_access(trip_id, current_user, db, action="edit")
    return itinerary_service.reorder_trip_stops(trip_id, reorder.stop_ids, db)


@router.get("/{trip_id}/stops/{stop_id}", response_model=TripStopResponse)
async def get_stop(
    trip_id: int,
    stop_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user, db)
    return _get_stop_in_trip(trip_id, stop_id, db)


@router.put("/{trip_id}/stops/{stop_id}", response_model=TripStopResponse)
async def update_stop(
    trip_id: int,
    stop_id: int,
    stop_data: StopUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user, db, action="edit")
    _get_stop_in_trip(trip_id, stop_id, db)
    itinerary_service.update_trip_stop(stop_id, stop_data.model_dump(exclude_unset=True), db)
    return itinerary_service.get_trip_stop(stop_id, db)


@router.delete("/{trip_id}/stops/{stop_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_stop(
    trip_id: int,
    stop_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove a stop and its scheduled activities."""
    check_trip_access(trip_id, current_user, db, action="edit")
    _get_stop_in_trip(trip_id, stop_id, db)
    itinerary_service.delete_trip_stop(stop_id, db)
    return None


@router.post(
    "/{trip_id}/stops/{stop_id}/activities",
    response_model=TripActivityResponse,
    status_code=status.HTTP_201_CREATED
)
async def add_activity(
    trip_id: int,
    stop_id: int,
    activity_data: TripActivityCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Schedule a catalog activity on a stop."""
    check_trip_access(trip_id, current_user, db, action="edit")
    _get_stop_in_trip(trip_id, stop_id, db)
    trip_activity = itinerary_service.add_activity_to_stop(
        stop_id,
        activity_data.activity_id,
        activity_data.scheduled_date,
        activity_data.start_time,
        activity_data.notes,
        db
    )
    return itinerary_service.get_trip_activity(trip_activity.id, db)


@router.put("/{trip_id}/activities/{trip_activity_id}", response_model=TripActivityResponse)
async def update_activity(
    trip_id: int,
    trip_activity_id: int,
    activity_data: TripActivityUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user, db, action="edit")
    _get_activity_in_trip(trip_id, trip_activity_id, db)
    itinerary_service.update_trip_activity(trip_activity_id, activity_data.model_dump(exclude_unset=True), db)
    return itinerary_service.get_trip_activity(trip_activity_id, db)


@router.delete("/{trip_id}/activities/{trip_activity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_activity(
    trip_id: int,
    trip_activity_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user, db, action="edit")
    _get_activity_in_trip(trip_id, trip_activity_id, db)
    itinerary_service.delete_trip_activity(trip_activity_id, db)
    return None
