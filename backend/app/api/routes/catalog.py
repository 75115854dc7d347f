"""
Catalog routes: city and activity search, accommodations per city and suggested trips.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from app.db.session import get_db
from app.models.user import User
from app.schemas.itinerary import CityResponse, ActivityResponse, CloneTripRequest
from app.schemas.accommodation import AccommodationResponse
from app.schemas.trip import TripResponse
from app.api.dependencies import get_current_user
from app.services import itinerary_service, accommodation_service

router = APIRouter(tags=["catalog"])


@router.get("/cities/search", response_model=List[CityResponse])
async def search_cities(
    q: str = Query(..., min_length=1),
    limit: int = Query(10, ge=1, le=50),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Cities matching name or country."""
    return itinerary_service.search_cities(q, db, limit=limit)


@router.get("/cities/popular", response_model=List[CityResponse])
async def popular_cities(
    limit: int = Query(20, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return itinerary_service.get_popular_cities(db, limit=limit)


@router.get("/cities/{city_id}", response_model=CityResponse)
async def get_city(
    city_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return itinerary_service.get_city(city_id, db)


@router.get("/cities/{city_id}/activities", response_model=List[ActivityResponse])
async def city_activities(
    city_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    itinerary_service.get_city(city_id, db)
    return itinerary_service.get_city_activities(city_id, db)


@router.get("/cities/{city_id}/accommodations", response_model=List[AccommodationResponse])
async def city_accommodations(
    city_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    itinerary_service.get_city(city_id, db)
    return accommodation_service.get_city_accommodations(city_id, db)


@router.get("/activities/search", response_model=List[ActivityResponse])
async def search_activities(
    q: str = Query(..., min_length=1),
    city_id: Optional[int] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return itinerary_service.search_activities(q, db, city_id=city_id)


@router.get("/suggestions", response_model=List[TripResponse])
async def trip_suggestions(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Public trips authored by admins."""
    return itinerary_service.get_admin_trip_suggestions(db)


@router.post("/suggestions/{trip_id}/clone", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def clone_suggestion(
    trip_id: int,
    overrides: Optional[CloneTripRequest] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Copy a suggested trip into the current user's trips."""
    overrides = overrides or CloneTripRequest()
    return itinerary_service.clone_admin_trip(trip_id, current_user, db, **overrides.model_dump())
