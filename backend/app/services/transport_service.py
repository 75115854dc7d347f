"""
Transport service: reference costs between cities and trip transport legs.
"""
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import or_, and_
from decimal import Decimal
from typing import Dict, List
import logging
from app.core.exceptions import NotFoundError
from app.core.utils import round_money
from app.models.city import City
from app.models.transport import TransportCost, TripTransportDetail
from app.schemas.transport import TransportCostCreate, TransportDetailForm
from app.services import currency_service
from app.services.validation import validate_transport_form, validate_transport_cost_form

logger = logging.getLogger(__name__)

TRANSPORT_MODES = [
    {"id": "plane", "name": "Plane", "icon": "✈️", "description": "Air travel between cities"},
    {"id": "train", "name": "Train", "icon": "🚂", "description": "Rail travel between cities"},
    {"id": "bus", "name": "Bus", "icon": "🚌", "description": "Bus travel between cities"},
    {"id": "car", "name": "Car", "icon": "🚗", "description": "Car rental or driving"},
    {"id": "ferry", "name": "Ferry", "icon": "⛴️", "description": "Water transport"},
    {"id": "walking", "name": "Walking", "icon": "🚶", "description": "Walking between nearby locations"},
    {"id": "bicycle", "name": "Bicycle", "icon": "🚲", "description": "Bicycle rental or cycling"},
    {"id": "other", "name": "Other", "icon": "🚀", "description": "Other transport methods"},
]


def _cost_query(db: Session):
    return db.query(TransportCost).options(
        joinedload(TransportCost.from_city),
        joinedload(TransportCost.to_city),
        joinedload(TransportCost.currency)
    )


def _detail_query(db: Session):
    return db.query(TripTransportDetail).options(
        joinedload(TripTransportDetail.from_city),
        joinedload(TripTransportDetail.to_city),
        joinedload(TripTransportDetail.currency)
    )


def get_transport_modes() -> List[Dict]:
    return TRANSPORT_MODES


def get_transport_costs(from_city_id: int, to_city_id: int, db: Session) -> List[TransportCost]:
    """Reference costs between two cities, in either direction."""
    return _cost_query(db).filter(
        or_(
            and_(TransportCost.from_city_id == from_city_id, TransportCost.to_city_id == to_city_id),
            and_(TransportCost.from_city_id == to_city_id, TransportCost.to_city_id == from_city_id)
        )
    ).order_by(TransportCost.avg_cost.asc()).all()


def get_all_transport_costs(db: Session) -> List[TransportCost]:
    return _cost_query(db).order_by(TransportCost.from_city_id.asc(), TransportCost.id.asc()).all()


def add_transport_cost(data: TransportCostCreate, db: Session) -> TransportCost:
    validate_transport_cost_form(data.from_city_id, data.to_city_id, data.mode, data.avg_cost)
    for city_id in (data.from_city_id, data.to_city_id):
        if not db.query(City).filter(City.id == city_id).first():
            raise NotFoundError("City", city_id)
    if data.currency_id is not None:
        currency_service.get_currency_or_404(data.currency_id, db)

    cost = TransportCost(
        from_city_id=data.from_city_id,
        to_city_id=data.to_city_id,
        mode=data.mode,
        avg_cost=data.avg_cost,
        avg_duration_minutes=data.avg_duration_minutes,
        provider=data.provider,
        currency_id=data.currency_id,
        meta=data.meta or {}
    )
    db.add(cost)
    db.commit()
    db.refresh(cost)
    return cost


def get_trip_transport_details(trip_id: int, db: Session) -> List[TripTransportDetail]:
    """Transport legs of a trip by departure time."""
    return _detail_query(db).filter(
        TripTransportDetail.trip_id == trip_id
    ).order_by(TripTransportDetail.departure_time.asc()).all()


def get_transport_detail(detail_id: int, db: Session) -> TripTransportDetail:
    detail = _detail_query(db).filter(TripTransportDetail.id == detail_id).first()
    if not detail:
        raise NotFoundError("Transport detail", detail_id)
    return detail


def get_transport_between_cities(trip_id: int, from_city_id: int, to_city_id: int, db: Session) -> List[TripTransportDetail]:
    return _detail_query(db).filter(
        TripTransportDetail.trip_id == trip_id,
        TripTransportDetail.from_city_id == from_city_id,
        TripTransportDetail.to_city_id == to_city_id
    ).order_by(TripTransportDetail.departure_time.asc()).all()


def _validate_form(form: TransportDetailForm) -> None:
    validate_transport_form(
        form.from_city_id,
        form.to_city_id,
        form.transport_mode,
        form.provider,
        form.departure_time,
        form.arrival_time,
        form.cost,
        form.currency_id
    )


def add_transport_details(trip_id: int, form: TransportDetailForm, db: Session) -> TripTransportDetail:
    _validate_form(form)

    detail = TripTransportDetail(trip_id=trip_id, **form.model_dump())
    db.add(detail)
    db.commit()

    logger.info(f"Added {form.transport_mode} leg {form.from_city_id} -> {form.to_city_id} to trip {trip_id}")
    return get_transport_detail(detail.id, db)


def update_transport_details(detail: TripTransportDetail, form: TransportDetailForm, db: Session) -> TripTransportDetail:
    """Apply submitted fields, then re-check the whole leg."""
    updates = form.model_dump(exclude_unset=True)
    merged = TransportDetailForm(**{
        field: updates.get(field, getattr(detail, field))
        for field in TransportDetailForm.model_fields
    })
    _validate_form(merged)

    for field, value in updates.items():
        setattr(detail, field, value)

    db.commit()
    return get_transport_detail(detail.id, db)


def delete_transport_details(detail: TripTransportDetail, db: Session) -> None:
    db.delete(detail)
    db.commit()


def calculate_trip_transport_cost(trip_id: int, db: Session, target_currency: str = "USD") -> Decimal:
    """Sum of the trip's transport legs, converted into target_currency through USD."""
    target = currency_service.get_currency_by_code(target_currency, db)
    if not target:
        raise NotFoundError("Currency", target_currency)

    total = Decimal(0)
    for detail in get_trip_transport_details(trip_id, db):
        total += currency_service.convert_currency(detail.cost, detail.currency_id, target.id, db)

    return round_money(total)
