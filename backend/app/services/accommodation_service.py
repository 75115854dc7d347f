"""
Accommodation service for city listings and trip stays.
"""
from sqlalchemy.orm import Session, joinedload
from typing import List
import logging
from app.core.exceptions import NotFoundError
from app.models.accommodation import Accommodation, TripAccommodation
from app.schemas.accommodation import TripAccommodationForm
from app.services.validation import validate_accommodation_form, calculate_nights

logger = logging.getLogger(__name__)


def get_city_accommodations(city_id: int, db: Session) -> List[Accommodation]:
    return db.query(Accommodation).filter(
        Accommodation.city_id == city_id
    ).order_by(Accommodation.name.asc()).all()


def get_accommodation(accommodation_id: int, db: Session) -> Accommodation:
    accommodation = db.query(Accommodation).filter(Accommodation.id == accommodation_id).first()
    if not accommodation:
        raise NotFoundError("Accommodation", accommodation_id)
    return accommodation


def get_trip_accommodations(trip_id: int, db: Session) -> List[TripAccommodation]:
    """Stays of a trip by check-in date, with the listing joined."""
    return db.query(TripAccommodation).options(
        joinedload(TripAccommodation.accommodation)
    ).filter(
        TripAccommodation.trip_id == trip_id
    ).order_by(TripAccommodation.check_in_date.asc()).all()


def get_trip_accommodation(stay_id: int, db: Session) -> TripAccommodation:
    stay = db.query(TripAccommodation).options(
        joinedload(TripAccommodation.accommodation)
    ).filter(TripAccommodation.id == stay_id).first()
    if not stay:
        raise NotFoundError("Trip accommodation", stay_id)
    return stay


def add_trip_accommodation(trip_id: int, form: TripAccommodationForm, db: Session) -> TripAccommodation:
    validate_accommodation_form(form.accommodation_id, form.check_in_date, form.check_out_date)
    get_accommodation(form.accommodation_id, db)

    stay = TripAccommodation(
        trip_id=trip_id,
        accommodation_id=form.accommodation_id,
        check_in_date=form.check_in_date,
        check_out_date=form.check_out_date,
        notes=form.notes or None
    )
    db.add(stay)
    db.commit()
    db.refresh(stay)

    logger.info(f"Added accommodation {form.accommodation_id} to trip {trip_id}")
    return stay


def update_trip_accommodation(stay: TripAccommodation, form: TripAccommodationForm, db: Session) -> TripAccommodation:
    """Replace the stay with the submitted form."""
    validate_accommodation_form(form.accommodation_id, form.check_in_date, form.check_out_date)
    if form.accommodation_id != stay.accommodation_id:
        get_accommodation(form.accommodation_id, db)

    stay.accommodation_id = form.accommodation_id
    stay.check_in_date = form.check_in_date
    stay.check_out_date = form.check_out_date
    stay.notes = form.notes or None

    db.commit()
    db.refresh(stay)
    return stay


def delete_trip_accommodation(stay: TripAccommodation, db: Session) -> None:
    db.delete(stay)
    db.commit()


def count_trip_accommodations(trip_id: int, db: Session) -> int:
    return db.query(TripAccommodation).filter(TripAccommodation.trip_id == trip_id).count()


def stay_to_dict(stay: TripAccommodation) -> dict:
    """Response payload for a stay including its night count."""
    return {
        "id": stay.id,
        "trip_id": stay.trip_id,
        "accommodation_id": stay.accommodation_id,
        "check_in_date": stay.check_in_date,
        "check_out_date": stay.check_out_date,
        "notes": stay.notes,
        "nights": calculate_nights(stay.check_in_date, stay.check_out_date),
        "accommodation": stay.accommodation,
        "created_at": stay.created_at,
        "updated_at": stay.updated_at
    }
