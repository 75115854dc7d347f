"""
Trip permission rules.
"""
from typing import Optional
from app.models.trip import Trip
from app.models.user import User


def is_admin(user: Optional[User]) -> bool:
    """Admins are flagged on the user row."""
    return bool(user and user.is_admin)


def is_trip_owner(trip: Trip, user: Optional[User]) -> bool:
    if not user:
        return False
    return trip.user_id == user.id


def can_view_trip(trip: Trip, user: Optional[User]) -> bool:
    """Admins and owners see everything, anyone signed in sees public trips."""
    if not user:
        return False
    if is_admin(user) or is_trip_owner(trip, user):
        return True
    return bool(trip.is_public)


def can_edit_trip(trip: Trip, user: Optional[User]) -> bool:
    if not user:
        return False
    return is_admin(user) or is_trip_owner(trip, user)


def can_delete_trip(trip: Trip, user: Optional[User]) -> bool:
    if not user:
        return False
    return is_admin(user) or is_trip_owner(trip, user)


def get_trip_role(trip: Trip, user: Optional[User]) -> str:
    """admin, owner, viewer or none."""
    if not user:
        return "none"
    if is_admin(user):
        return "admin"
    if is_trip_owner(trip, user):
        return "owner"
    return "viewer"
