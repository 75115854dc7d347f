"""
Trip accommodation routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.models.user import User
from app.schemas.accommodation import (
    TripAccommodationForm, TripAccommodationResponse, AccommodationCountResponse
)
from app.api.dependencies import get_current_user
from app.api.routes.trips import check_trip_access
from app.core.exceptions import NotFoundError
from app.services import accommodation_service

router = APIRouter(prefix="/trips", tags=["accommodations"])


def _get_stay_in_trip(trip_id: int, stay_id: int, db: Session):
    stay = accommodation_service.get_trip_accommodation(stay_id, db)
    if stay.trip_id != trip_id:
        raise NotFoundError("Trip accommodation", stay_id)
    return stay


@router.get("/{trip_id}/accommodations", response_model=List[TripAccommodationResponse])
async def list_accommodations(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Stays of the trip by check-in date."""
    check_trip_access(trip_id, current_user, db)
    stays = accommodation_service.get_trip_accommodations(trip_id, db)
    return [accommodation_service.stay_to_dict(stay) for stay in stays]


@router.get("/{trip_id}/accommodations/count", response_model=AccommodationCountResponse)
async def count_accommodations(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user, db)
    return {"trip_id": trip_id, "count": accommodation_service.count_trip_accommodations(trip_id, db)}


@router.post(
    "/{trip_id}/accommodations",
    response_model=TripAccommodationResponse,
    status_code=status.HTTP_201_CREATED
)
async def add_accommodation(
    trip_id: int,
    form: TripAccommodationForm,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user, db, action="edit")
    stay = accommodation_service.add_trip_accommodation(trip_id, form, db)
    return accommodation_service.stay_to_dict(accommodation_service.get_trip_accommodation(stay.id, db))


@router.put("/{trip_id}/accommodations/{stay_id}", response_model=TripAccommodationResponse)
async def update_accommodation(
    trip_id: int,
    stay_id: int,
    form: TripAccommodationForm,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user, db, action="edit")
    stay = _get_stay_in_trip(trip_id, stay_id, db)
    stay = accommodation_service.update_trip_accommodation(stay, form, db)
    return accommodation_service.stay_to_dict(stay)


@router.delete("/{trip_id}/accommodations/{stay_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_accommodation(
    trip_id: int,
    stay_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user, db, action="edit")
    stay = _get_stay_in_trip(trip_id, stay_id, db)
    accommodation_service.delete_trip_accommodation(stay, db)
    return None
