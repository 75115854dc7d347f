"""
Itinerary service: trip stops, scheduled activities, city/activity catalog,
suggested trips and cloning.
"""
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from datetime import date, time
from decimal import Decimal
from typing import Dict, List, Optional
import logging
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.activity import Activity, TripActivity
from app.models.city import City
from app.models.cost_item import CostItem
from app.models.trip import Trip, TripType
from app.models.trip_stop import TripStop
from app.models.user import User
from app.services.trip_service import get_trip
from app.services.validation import (
    validate_stop_form, validate_stop_dates, validate_trip_activity_form
)

logger = logging.getLogger(__name__)


def _stop_query(db: Session):
    return db.query(TripStop).options(
        joinedload(TripStop.city),
        joinedload(TripStop.activities).joinedload(TripActivity.activity)
    )


def get_trip_stop(stop_id: int, db: Session) -> TripStop:
    stop = _stop_query(db).filter(TripStop.id == stop_id).first()
    if not stop:
        raise NotFoundError("Trip stop", stop_id)
    return stop


def get_trip_stops(trip_id: int, db: Session) -> List[TripStop]:
    """Stops of a trip ordered by seq, with city and activities loaded."""
    return _stop_query(db).filter(
        TripStop.trip_id == trip_id
    ).order_by(TripStop.seq.asc()).all()


def get_trip_with_stops(trip_id: int, db: Session) -> Dict:
    """Trip details plus its stops, each with city and ordered activities."""
    trip = get_trip(trip_id, db)
    return {"trip": trip, "stops": get_trip_stops(trip_id, db)}


def get_trip_stop_with_activities(stop_id: int, db: Session) -> Dict:
    stop = get_trip_stop(stop_id, db)
    return {"stop": stop, "activities": list(stop.activities)}


def add_city_to_trip(
    trip_id: int,
    city_id: Optional[int],
    start_date: Optional[date],
    end_date: Optional[date],
    notes: Optional[str],
    db: Session
) -> TripStop:
    """Append a city visit to the end of the trip."""
    validate_stop_form(city_id, start_date, end_date)
    get_trip(trip_id, db)

    city = db.query(City).filter(City.id == city_id).first()
    if not city:
        raise NotFoundError("City", city_id, message="Invalid city ID or trip ID")

    duplicate = db.query(TripStop).filter(
        TripStop.trip_id == trip_id,
        TripStop.city_id == city_id
    ).first()
    if duplicate:
        raise ConflictError("This city is already added to the trip")

    max_seq = db.query(func.max(TripStop.seq)).filter(TripStop.trip_id == trip_id).scalar()
    stop = TripStop(
        trip_id=trip_id,
        seq=(max_seq or 0) + 1,
        city_id=city_id,
        start_date=start_date,
        end_date=end_date,
        notes=notes,
        accommodation_estimate=city.avg_daily_hotel,
        meta={}
    )
    db.add(stop)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Error adding city {city_id} to trip {trip_id}: {e}")
        raise ConflictError("This city is already added to the trip")

    db.refresh(stop)
    logger.info(f"Added city {city_id} to trip {trip_id} at seq {stop.seq}")
    return stop


def update_trip_stop(stop_id: int, updates: Dict, db: Session) -> TripStop:
    """Update dates, notes or cost estimates of a stop."""
    stop = get_trip_stop(stop_id, db)
    allowed = {"start_date", "end_date", "notes", "local_transport_cost", "accommodation_estimate"}
    updates = {k: v for k, v in updates.items() if k in allowed}

    validate_stop_dates(
        updates.get("start_date", stop.start_date),
        updates.get("end_date", stop.end_date)
    )

    for field, value in updates.items():
        setattr(stop, field, value)

    db.commit()
    db.refresh(stop)
    return stop


def delete_trip_stop(stop_id: int, db: Session) -> None:
    """Delete a stop together with its scheduled activities."""
    stop = get_trip_stop(stop_id, db)

    db.query(TripActivity).filter(TripActivity.trip_stop_id == stop_id).delete(synchronize_session=False)
    db.query(CostItem).filter(CostItem.trip_stop_id == stop_id).update(
        {CostItem.trip_stop_id: None}, synchronize_session=False
    )
    db.expire(stop)
    db.delete(stop)
    db.commit()
    logger.info(f"Deleted trip stop {stop_id}")


def reorder_trip_stops(trip_id: int, stop_ids: List[int], db: Session) -> List[TripStop]:
    """Renumber stops so stop_ids[0] gets seq 1."""
    stops = db.query(TripStop).filter(TripStop.trip_id == trip_id).all()
    stops_by_id = {stop.id: stop for stop in stops}

    if len(set(stop_ids)) != len(stop_ids):
        raise ValidationError("Stop list contains duplicates")
    unknown = [stop_id for stop_id in stop_ids if stop_id not in stops_by_id]
    if unknown:
        raise ValidationError("Stops do not belong to this trip", details={"stop_ids": unknown})

    for index, stop_id in enumerate(stop_ids):
        stops_by_id[stop_id].seq = index + 1

    db.commit()
    return get_trip_stops(trip_id, db)


def _get_catalog_activity(activity_id: int, db: Session) -> Activity:
    activity = db.query(Activity).filter(
        Activity.id == activity_id,
        Activity.deleted.is_(False)
    ).first()
    if not activity:
        raise NotFoundError("Activity", activity_id, message="Selected activity not found or has been deleted")
    return activity


def _slot_taken(
    stop_id: int,
    activity_id: Optional[int],
    scheduled_date: Optional[date],
    start_time: Optional[time],
    db: Session,
    exclude_id: Optional[int] = None
) -> bool:
    """Whether the catalog activity is already scheduled on the stop at that date and time."""
    query = db.query(TripActivity).filter(
        TripActivity.trip_stop_id == stop_id,
        TripActivity.activity_id == activity_id,
        TripActivity.scheduled_date == scheduled_date,
        TripActivity.start_time == start_time if start_time is not None else TripActivity.start_time.is_(None)
    )
    if exclude_id is not None:
        query = query.filter(TripActivity.id != exclude_id)
    return query.first() is not None


def add_activity_to_stop(
    stop_id: int,
    activity_id: Optional[int],
    scheduled_date: Optional[date],
    start_time: Optional[time],
    notes: Optional[str],
    db: Session,
    today: Optional[date] = None
) -> TripActivity:
    """Schedule a catalog activity on a stop, copying its name, cost and duration."""
    validate_trip_activity_form(activity_id, scheduled_date, today=today)
    stop = get_trip_stop(stop_id, db)
    activity = _get_catalog_activity(activity_id, db)

    if _slot_taken(stop.id, activity.id, scheduled_date, start_time, db):
        raise ConflictError("This activity is already scheduled for this time")

    trip_activity = TripActivity(
        trip_stop_id=stop.id,
        activity_id=activity.id,
        name=activity.name,
        cost=activity.cost,
        duration_minutes=activity.duration_minutes,
        scheduled_date=scheduled_date,
        start_time=start_time,
        notes=notes
    )
    db.add(trip_activity)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Error adding activity {activity_id} to stop {stop_id}: {e}")
        raise ConflictError("This activity is already scheduled for this time")

    db.refresh(trip_activity)
    return trip_activity


def get_trip_activity(trip_activity_id: int, db: Session) -> TripActivity:
    trip_activity = db.query(TripActivity).options(
        joinedload(TripActivity.activity)
    ).filter(TripActivity.id == trip_activity_id).first()
    if not trip_activity:
        raise NotFoundError("Trip activity", trip_activity_id)
    return trip_activity


def update_trip_activity(trip_activity_id: int, updates: Dict, db: Session) -> TripActivity:
    """Partial update; switching the catalog activity re-copies its details."""
    trip_activity = get_trip_activity(trip_activity_id, db)

    # null keeps the catalog link
    if "activity_id" in updates and updates["activity_id"] is None:
        updates.pop("activity_id")
    if "name" in updates and not (updates["name"] or "").strip():
        raise ValidationError("Activity name is required", details={"errors": {"name": "Activity name is required"}})

    if updates.get("activity_id"):
        activity = _get_catalog_activity(updates["activity_id"], db)
        updates["name"] = activity.name
        updates["cost"] = activity.cost
        updates["duration_minutes"] = activity.duration_minutes
    elif "name" in updates:
        updates["name"] = updates["name"].strip()

    activity_id = updates.get("activity_id", trip_activity.activity_id)
    if activity_id is not None and _slot_taken(
        trip_activity.trip_stop_id,
        activity_id,
        updates.get("scheduled_date", trip_activity.scheduled_date),
        updates.get("start_time", trip_activity.start_time),
        db,
        exclude_id=trip_activity.id
    ):
        raise ConflictError("This activity is already scheduled for this time")

    for field, value in updates.items():
        setattr(trip_activity, field, value)

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Error updating trip activity {trip_activity_id}: {e}")
        raise ConflictError("This activity is already scheduled for this time")

    db.refresh(trip_activity)
    return trip_activity


def delete_trip_activity(trip_activity_id: int, db: Session) -> None:
    trip_activity = get_trip_activity(trip_activity_id, db)
    db.delete(trip_activity)
    db.commit()


def search_cities(query: str, db: Session, limit: int = 10) -> List[City]:
    """Cities whose name or country contains the query, most popular first."""
    pattern = f"%{query.strip()}%"
    return db.query(City).filter(
        or_(City.name.ilike(pattern), City.country.ilike(pattern))
    ).order_by(City.popularity_score.desc(), City.name.asc()).limit(limit).all()


def get_popular_cities(db: Session, limit: int = 20) -> List[City]:
    return db.query(City).order_by(
        City.popularity_score.desc(), City.name.asc()
    ).limit(limit).all()


def get_city(city_id: int, db: Session) -> City:
    city = db.query(City).filter(City.id == city_id).first()
    if not city:
        raise NotFoundError("City", city_id)
    return city


def get_city_activities(city_id: int, db: Session) -> List[Activity]:
    """Non-deleted catalog activities of a city, by name."""
    return db.query(Activity).filter(
        Activity.city_id == city_id,
        Activity.deleted.is_(False)
    ).order_by(Activity.name.asc()).all()


def search_activities(query: str, db: Session, city_id: Optional[int] = None) -> List[Activity]:
    """Catalog activities whose name or description contains the query."""
    pattern = f"%{query.strip()}%"
    activities = db.query(Activity).filter(
        Activity.deleted.is_(False),
        or_(Activity.name.ilike(pattern), Activity.description.ilike(pattern))
    )
    if city_id:
        activities = activities.filter(Activity.city_id == city_id)
    return activities.order_by(Activity.name.asc()).all()


def get_admin_trip_suggestions(db: Session) -> List[Trip]:
    """Public, admin-authored trips, newest first."""
    return db.query(Trip).filter(
        Trip.trip_type == TripType.ADMIN_DEFINED,
        Trip.deleted.is_(False),
        Trip.is_public.is_(True)
    ).order_by(Trip.created_at.desc(), Trip.id.desc()).all()


def copy_trip_for_user(
    source: Trip,
    user: User,
    db: Session,
    name: Optional[str] = None,
    description: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
) -> Trip:
    """Create a private custom copy of a trip and its stops for the user."""
    new_trip = Trip(
        user_id=user.id,
        created_by=user.id,
        name=name or f"{source.name} (Copy)",
        description=description or source.description,
        start_date=start_date or source.start_date,
        end_date=end_date or source.end_date,
        is_public=False,
        currency=source.currency,
        budget=source.budget,
        trip_type=TripType.CUSTOM,
        meta={"cloned_from": source.id}
    )
    db.add(new_trip)
    db.flush()

    source_stops = db.query(TripStop).filter(
        TripStop.trip_id == source.id
    ).order_by(TripStop.seq.asc()).all()
    for stop in source_stops:
        db.add(TripStop(
            trip_id=new_trip.id,
            seq=stop.seq,
            city_id=stop.city_id,
            start_date=stop.start_date,
            end_date=stop.end_date,
            local_transport_cost=stop.local_transport_cost,
            accommodation_estimate=stop.accommodation_estimate,
            notes=stop.notes,
            meta=stop.meta
        ))

    db.commit()
    db.refresh(new_trip)
    logger.info(f"Copied trip {source.id} into trip {new_trip.id} for user {user.id}")
    return new_trip


def clone_admin_trip(trip_id: int, user: User, db: Session, **customizations) -> Trip:
    """Copy a suggested trip into the user's account."""
    source = get_trip(trip_id, db)
    if source.trip_type != TripType.ADMIN_DEFINED or not source.is_public:
        raise NotFoundError("Suggested trip", trip_id)
    return copy_trip_for_user(source, user, db, **customizations)


def get_trip_stats(trip_id: int, db: Session) -> Dict:
    """Stop count, scheduled activity count and total activity cost."""
    stops_count = db.query(func.count(TripStop.id)).filter(
        TripStop.trip_id == trip_id
    ).scalar() or 0

    activities_count, total_cost = db.query(
        func.count(TripActivity.id),
        func.coalesce(func.sum(TripActivity.cost), 0)
    ).join(
        TripStop, TripActivity.trip_stop_id == TripStop.id
    ).filter(TripStop.trip_id == trip_id).one()

    return {
        "stops_count": stops_count,
        "activities_count": activities_count or 0,
        "total_cost": Decimal(str(total_cost or 0))
    }
