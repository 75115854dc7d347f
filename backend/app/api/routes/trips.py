"""
Trip management routes.
"""
from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session
from typing import Optional
from app.db.session import get_db
from app.models.user import User
from app.models.trip import Trip
from app.schemas.trip import (
    TripCreate, TripUpdate, TripResponse, TripDetailResponse,
    TripListResponse, CoverPhotoResponse
)
from app.api.dependencies import get_current_user
from app.core.exceptions import NotFoundError
from app.core.permissions import can_view_trip, can_edit_trip, can_delete_trip, get_trip_role
from app.services import trip_service, storage_service

router = APIRouter(prefix="/trips", tags=["trips"])


def check_trip_access(trip_id: int, user: User, db: Session, action: str = "view") -> Trip:
    """Load a trip and check the user may view, edit or delete it."""
    try:
        trip = trip_service.get_trip(trip_id, db)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Trip not found"
        )

    checks = {"view": can_view_trip, "edit": can_edit_trip, "delete": can_delete_trip}
    if not checks[action](trip, user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied to this trip"
        )

    return trip


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new trip."""
    return trip_service.create_trip(trip_data, current_user, db)


@router.get("", response_model=TripListResponse)
async def list_trips(
    search: Optional[str] = None,
    filter_by: str = Query("all", alias="filter"),
    sort_by: str = Query("created-desc", alias="sort"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the current user's trips with search, filter and sort."""
    trips = trip_service.list_user_trips(current_user.id, db)
    trips = trip_service.filter_and_sort_trips(trips, search=search, filter_by=filter_by, sort_by=sort_by)
    return {"total": len(trips), "trips": trips}


@router.get("/{trip_id}", response_model=TripDetailResponse)
async def get_trip(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get trip details with the caller's role."""
    trip = check_trip_access(trip_id, current_user, db)
    return TripDetailResponse(
        **TripResponse.model_validate(trip).model_dump(),
        role=get_trip_role(trip, current_user)
    )


@router.put("/{trip_id}", response_model=TripResponse)
async def update_trip(
    trip_id: int,
    trip_data: TripUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update a trip."""
    trip = check_trip_access(trip_id, current_user, db, action="edit")
    return trip_service.update_trip(trip, trip_data, db)


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trip(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Soft-delete a trip."""
    trip = check_trip_access(trip_id, current_user, db, action="delete")
    trip_service.soft_delete_trip(trip, db)
    return None


@router.post("/{trip_id}/cover", response_model=CoverPhotoResponse)
async def upload_cover_photo(
    trip_id: int,
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Upload a cover photo for the trip."""
    trip = check_trip_access(trip_id, current_user, db, action="edit")
    content = await file.read()
    trip = trip_service.set_cover_photo(trip, file.filename, file.content_type, content, db)
    return {
        "cover_photo_url": trip.cover_photo_url,
        "public_url": storage_service.get_public_url(trip.cover_photo_url)
    }
