"""
Share service: token links granting read access to a trip.
"""
from sqlalchemy.orm import Session
from datetime import datetime, timedelta
from typing import List, Optional
import logging
from app.core.config import settings
from app.core.exceptions import NotFoundError, ValidationError
from app.core.security import generate_share_token
from app.models.shared_link import SharedLink
from app.models.trip import Trip
from app.models.user import User
from app.services.itinerary_service import copy_trip_for_user
from app.services.trip_service import get_trip

logger = logging.getLogger(__name__)


def create_shared_link(trip: Trip, db: Session, expires_in_days: Optional[int] = None) -> SharedLink:
    """New link for the trip; without an explicit expiry SHARED_LINK_EXPIRE_DAYS applies (0 = never)."""
    if expires_in_days is None:
        expires_in_days = settings.SHARED_LINK_EXPIRE_DAYS
    if expires_in_days < 0:
        raise ValidationError("Expiry must be zero or more days")

    expires_at = None
    if expires_in_days:
        expires_at = datetime.utcnow() + timedelta(days=expires_in_days)

    link = SharedLink(trip_id=trip.id, token=generate_share_token(), expires_at=expires_at)
    db.add(link)
    db.commit()
    db.refresh(link)

    logger.info(f"Created share link {link.id} for trip {trip.id}")
    return link


def get_shared_links(trip_id: int, db: Session) -> List[SharedLink]:
    """Links of a trip, newest first."""
    return db.query(SharedLink).filter(
        SharedLink.trip_id == trip_id
    ).order_by(SharedLink.created_at.desc(), SharedLink.id.desc()).all()


def delete_shared_link(trip_id: int, link_id: int, db: Session) -> None:
    link = db.query(SharedLink).filter(
        SharedLink.id == link_id,
        SharedLink.trip_id == trip_id
    ).first()
    if not link:
        raise NotFoundError("Shared link", link_id)
    db.delete(link)
    db.commit()


def resolve_shared_trip(token: str, db: Session, now: Optional[datetime] = None) -> Trip:
    """Trip behind a token; unknown, expired or deleted-trip tokens are not found."""
    link = db.query(SharedLink).filter(SharedLink.token == token).first()
    if not link:
        raise NotFoundError("Shared trip", message="Shared trip not found")

    now = now or datetime.utcnow()
    if link.expires_at is not None and link.expires_at <= now:
        logger.info(f"Share link {link.id} expired at {link.expires_at}")
        raise NotFoundError("Shared trip", message="Shared trip not found")

    return get_trip(link.trip_id, db)


def copy_shared_trip(token: str, user: User, db: Session, **customizations) -> Trip:
    """Copy the trip behind a token into the user's account."""
    source = resolve_shared_trip(token, db)
    return copy_trip_for_user(source, user, db, **customizations)


def share_path(link: SharedLink) -> str:
    return f"/shared/{link.token}"
