"""
Trip service: CRUD, list filtering/sorting and cover photos.
"""
from sqlalchemy.orm import Session
from datetime import date
from decimal import Decimal
from typing import List, Optional
import logging
import unicodedata
from app.core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from app.core.permissions import is_admin
from app.models.trip import Trip, TripType
from app.models.user import User
from app.schemas.trip import TripCreate, TripUpdate
from app.services import storage_service
from app.services.validation import validate_trip_form, validate_cover_photo

logger = logging.getLogger(__name__)

TRIP_FILTERS = ("all", "upcoming", "past", "public", "private")
TRIP_SORTS = (
    "startDate-desc", "startDate-asc",
    "created-desc", "created-asc",
    "cost-desc", "cost-asc",
    "name-asc", "name-desc",
)
NON_NULLABLE_UPDATE_FIELDS = ("is_public", "currency")


def _name_sort_key(name: str) -> str:
    """Accent- and case-insensitive key, so "Évora" sorts among the E's."""
    decomposed = unicodedata.normalize("NFKD", name)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


def get_trip(trip_id: int, db: Session) -> Trip:
    """Fetch a trip that has not been soft-deleted."""
    trip = db.query(Trip).filter(
        Trip.id == trip_id,
        Trip.deleted.is_(False)
    ).first()
    if not trip:
        raise NotFoundError("Trip", trip_id)
    return trip


def _validate_budget(budget: Optional[Decimal]) -> None:
    if budget is not None and budget < 0:
        raise ValidationError("Budget cannot be negative", details={"errors": {"budget": "Budget cannot be negative"}})


def create_trip(data: TripCreate, user: User, db: Session) -> Trip:
    """Create a trip owned by the user."""
    validate_trip_form(data.name, data.start_date, data.end_date)
    _validate_budget(data.budget)

    trip_type = data.trip_type or TripType.CUSTOM
    if trip_type == TripType.ADMIN_DEFINED and not is_admin(user):
        raise PermissionDeniedError("Only admins can create suggested trips")

    trip = Trip(
        user_id=user.id,
        created_by=user.id,
        name=data.name.strip(),
        description=data.description,
        start_date=data.start_date,
        end_date=data.end_date,
        is_public=data.is_public,
        currency=(data.currency or "USD").upper(),
        budget=data.budget,
        meta=data.meta or {},
        trip_type=trip_type
    )
    db.add(trip)
    db.commit()
    db.refresh(trip)

    logger.info(f"User {user.id} created trip {trip.id} ({trip.trip_type.value})")
    return trip


def list_user_trips(user_id: int, db: Session) -> List[Trip]:
    """Trips owned by the user, newest first."""
    return db.query(Trip).filter(
        Trip.user_id == user_id,
        Trip.deleted.is_(False)
    ).order_by(Trip.created_at.desc(), Trip.id.desc()).all()


def filter_and_sort_trips(
    trips: List[Trip],
    search: Optional[str] = None,
    filter_by: str = "all",
    sort_by: str = "created-desc",
    today: Optional[date] = None
) -> List[Trip]:
    """
    Apply the trip list search box, filter and sort selection.

    Trips without the sort key (no start date, no estimated cost) always
    end up at the bottom, whichever direction is chosen.
    """
    if filter_by not in TRIP_FILTERS:
        raise ValidationError(f"Unknown filter: {filter_by}")
    if sort_by not in TRIP_SORTS:
        raise ValidationError(f"Unknown sort: {sort_by}")

    today = today or date.today()
    query = (search or "").strip().lower()

    filtered = [
        trip for trip in trips
        if not query
        or query in trip.name.lower()
        or (trip.description and query in trip.description.lower())
    ]

    if filter_by == "upcoming":
        filtered = [t for t in filtered if t.start_date and t.start_date > today]
    elif filter_by == "past":
        filtered = [t for t in filtered if t.end_date and t.end_date < today]
    elif filter_by == "public":
        filtered = [t for t in filtered if t.is_public]
    elif filter_by == "private":
        filtered = [t for t in filtered if not t.is_public]

    field, direction = sort_by.split("-")
    reverse = direction == "desc"
    key_funcs = {
        "startDate": lambda t: t.start_date,
        "created": lambda t: t.created_at,
        "cost": lambda t: t.total_estimated_cost or None,
        "name": lambda t: _name_sort_key(t.name),
    }
    key = key_funcs[field]

    with_key = [t for t in filtered if key(t) is not None]
    without_key = [t for t in filtered if key(t) is None]
    with_key.sort(key=key, reverse=reverse)

    return with_key + without_key


def update_trip(trip: Trip, data: TripUpdate, db: Session) -> Trip:
    """Apply a partial update, re-checking the form rules on the merged values."""
    updates = data.model_dump(exclude_unset=True)
    # null on a NOT NULL column leaves the stored value in place
    for field in NON_NULLABLE_UPDATE_FIELDS:
        if field in updates and updates[field] is None:
            updates.pop(field)

    name = updates.get("name", trip.name)
    start_date = updates.get("start_date", trip.start_date)
    end_date = updates.get("end_date", trip.end_date)
    validate_trip_form(name, start_date, end_date)
    _validate_budget(updates.get("budget"))

    if "name" in updates:
        updates["name"] = updates["name"].strip()
    if updates.get("currency"):
        updates["currency"] = updates["currency"].upper()

    for field, value in updates.items():
        setattr(trip, field, value)

    db.commit()
    db.refresh(trip)
    return trip


def soft_delete_trip(trip: Trip, db: Session) -> None:
    """Mark the trip deleted; its rows stay for admin reporting."""
    trip.deleted = True
    db.commit()
    logger.info(f"Trip {trip.id} soft-deleted")


def set_cover_photo(
    trip: Trip,
    filename: Optional[str],
    content_type: Optional[str],
    content: bytes,
    db: Session
) -> Trip:
    """Validate and store a new cover photo, replacing the previous one."""
    validate_cover_photo(content_type, len(content))

    new_path = storage_service.save_file(storage_service.TRIP_BUCKET, filename, content)
    old_path = trip.cover_photo_url
    trip.cover_photo_url = new_path
    db.commit()
    db.refresh(trip)

    storage_service.delete_file(old_path)
    return trip
