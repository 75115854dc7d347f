"""
Share link routes: owner management and public token access.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from app.db.session import get_db
from app.models.user import User
from app.models.shared_link import SharedLink
from app.schemas.share import SharedLinkCreate, SharedLinkResponse
from app.schemas.itinerary import TripItineraryResponse, CloneTripRequest
from app.schemas.trip import TripResponse
from app.api.dependencies import get_current_user
from app.api.routes.trips import check_trip_access
from app.services import itinerary_service, share_service

router = APIRouter(tags=["sharing"])


def _link_response(link: SharedLink) -> dict:
    return {
        "id": link.id,
        "trip_id": link.trip_id,
        "token": link.token,
        "expires_at": link.expires_at,
        "created_at": link.created_at,
        "share_path": share_service.share_path(link)
    }


@router.post("/trips/{trip_id}/share", response_model=SharedLinkResponse, status_code=status.HTTP_201_CREATED)
async def create_share_link(
    trip_id: int,
    link_data: Optional[SharedLinkCreate] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a link anyone can use to view the trip."""
    trip = check_trip_access(trip_id, current_user, db, action="edit")
    expires_in_days = link_data.expires_in_days if link_data else None
    link = share_service.create_shared_link(trip, db, expires_in_days=expires_in_days)
    return _link_response(link)


@router.get("/trips/{trip_id}/share", response_model=List[SharedLinkResponse])
async def list_share_links(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user, db, action="edit")
    return [_link_response(link) for link in share_service.get_shared_links(trip_id, db)]


@router.delete("/trips/{trip_id}/share/{link_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_share_link(
    trip_id: int,
    link_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user, db, action="edit")
    share_service.delete_shared_link(trip_id, link_id, db)
    return None


@router.get("/shared/{token}", response_model=TripItineraryResponse)
async def view_shared_trip(token: str, db: Session = Depends(get_db)):
    """Read-only itinerary behind a share token. No login required."""
    trip = share_service.resolve_shared_trip(token, db)
    return itinerary_service.get_trip_with_stops(trip.id, db)


@router.post("/shared/{token}/copy", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def copy_shared_trip(
    token: str,
    overrides: Optional[CloneTripRequest] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Copy a shared trip into the current user's trips."""
    overrides = overrides or CloneTripRequest()
    return share_service.copy_shared_trip(token, current_user, db, **overrides.model_dump())
