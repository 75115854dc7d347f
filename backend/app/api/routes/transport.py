"""
Transport routes: reference costs, modes and trip transport legs.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from app.db.session import get_db
from app.models.user import User
from app.schemas.transport import (
    TransportCostCreate, TransportCostResponse, TransportMode,
    TransportDetailForm, TransportDetailResponse, TripTransportCost
)
from app.api.dependencies import get_current_user, get_current_admin
from app.api.routes.trips import check_trip_access
from app.core.exceptions import NotFoundError
from app.services import transport_service

router = APIRouter(tags=["transport"])


def _get_detail_in_trip(trip_id: int, detail_id: int, db: Session):
    detail = transport_service.get_transport_detail(detail_id, db)
    if detail.trip_id != trip_id:
        raise NotFoundError("Transport detail", detail_id)
    return detail


@router.get("/transport/modes", response_model=List[TransportMode])
async def list_transport_modes():
    return transport_service.get_transport_modes()


@router.get("/transport/costs", response_model=List[TransportCostResponse])
async def list_transport_costs(
    from_city_id: Optional[int] = None,
    to_city_id: Optional[int] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Reference costs, optionally between two cities."""
    if from_city_id and to_city_id:
        return transport_service.get_transport_costs(from_city_id, to_city_id, db)
    return transport_service.get_all_transport_costs(db)


@router.post("/transport/costs", response_model=TransportCostResponse, status_code=status.HTTP_201_CREATED)
async def create_transport_cost(
    cost_data: TransportCostCreate,
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    return transport_service.add_transport_cost(cost_data, db)


@router.get("/trips/{trip_id}/transport", response_model=List[TransportDetailResponse])
async def list_trip_transport(
    trip_id: int,
    from_city_id: Optional[int] = None,
    to_city_id: Optional[int] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Transport legs of a trip by departure, optionally between two cities."""
    check_trip_access(trip_id, current_user, db)
    if from_city_id and to_city_id:
        return transport_service.get_transport_between_cities(trip_id, from_city_id, to_city_id, db)
    return transport_service.get_trip_transport_details(trip_id, db)


@router.get("/trips/{trip_id}/transport/total", response_model=TripTransportCost)
async def trip_transport_total(
    trip_id: int,
    currency: str = Query("USD", min_length=3, max_length=3),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user, db)
    total = transport_service.calculate_trip_transport_cost(trip_id, db, target_currency=currency.upper())
    return {"trip_id": trip_id, "currency": currency.upper(), "total_cost": total}


@router.post(
    "/trips/{trip_id}/transport",
    response_model=TransportDetailResponse,
    status_code=status.HTTP_201_CREATED
)
async def add_trip_transport(
    trip_id: int,
    form: TransportDetailForm,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user, db, action="edit")
    return transport_service.add_transport_details(trip_id, form, db)


@router.put("/trips/{trip_id}/transport/{detail_id}", response_model=TransportDetailResponse)
async def update_trip_transport(
    trip_id: int,
    detail_id: int,
    form: TransportDetailForm,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user, db, action="edit")
    detail = _get_detail_in_trip(trip_id, detail_id, db)
    return transport_service.update_transport_details(detail, form, db)


@router.delete("/trips/{trip_id}/transport/{detail_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trip_transport(
    trip_id: int,
    detail_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user, db, action="edit")
    detail = _get_detail_in_trip(trip_id, detail_id, db)
    transport_service.delete_transport_details(detail, db)
    return None
