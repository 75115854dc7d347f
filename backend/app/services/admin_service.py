"""
Admin service: platform stats, user management, trip table and reports.
"""
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import func, or_
from datetime import date, datetime
from typing import Dict, List, Optional, Tuple
import csv
import io
import json
import logging
from app.core.exceptions import NotFoundError, ValidationError
from app.core.utils import serialize_value
from app.models.activity import Activity, TripActivity
from app.models.audit_log import AuditLog
from app.models.city import City
from app.models.trip import Trip
from app.models.trip_stop import TripStop
from app.models.user import User
from app.services.validation import calculate_days

logger = logging.getLogger(__name__)

USER_STATUS_FILTERS = ("all", "active", "suspended")
REPORT_TYPES = ("users", "trips", "activities")
REPORT_FORMATS = ("csv", "json")


def _log_action(db: Session, admin: User, entity_type: str, entity_id: int, action: str, payload: Dict = None) -> None:
    db.add(AuditLog(
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        performed_by=admin.id,
        payload=payload or {}
    ))


def get_dashboard_stats(db: Session, today: Optional[date] = None) -> Dict:
    today = today or date.today()
    month_start = datetime(today.year, today.month, 1)

    total_users = db.query(func.count(User.id)).scalar() or 0
    active_users = db.query(func.count(User.id)).filter(User.is_active.is_(True)).scalar() or 0
    signups_this_month = db.query(func.count(User.id)).filter(User.created_at >= month_start).scalar() or 0

    live_trips = db.query(Trip).filter(Trip.deleted.is_(False))
    total_trips = live_trips.count()
    public_trips = live_trips.filter(Trip.is_public.is_(True)).count()

    top = db.query(City.name, func.count(TripStop.id).label("visits")).join(
        TripStop, TripStop.city_id == City.id
    ).join(
        Trip, TripStop.trip_id == Trip.id
    ).filter(
        Trip.deleted.is_(False)
    ).group_by(City.id, City.name).order_by(func.count(TripStop.id).desc(), City.name.asc()).first()

    lengths = [
        calculate_days(start, end)
        for start, end in live_trips.with_entities(Trip.start_date, Trip.end_date).all()
        if start and end
    ]
    avg_trip_length = round(sum(lengths) / len(lengths), 1) if lengths else 0.0

    return {
        "active_users": active_users,
        "total_users": total_users,
        "signups_this_month": signups_this_month,
        "total_trips": total_trips,
        "public_trips": public_trips,
        "top_destination": top[0] if top else None,
        "avg_trip_length": avg_trip_length
    }


def _trip_counts(db: Session) -> Dict[int, int]:
    rows = db.query(Trip.user_id, func.count(Trip.id)).filter(
        Trip.deleted.is_(False)
    ).group_by(Trip.user_id).all()
    return {user_id: count for user_id, count in rows}


def list_users(db: Session, search: Optional[str] = None, status_filter: str = "all") -> List[Dict]:
    """User management table rows."""
    if status_filter not in USER_STATUS_FILTERS:
        raise ValidationError(f"Unknown status filter: {status_filter}")

    users = db.query(User)
    if search and search.strip():
        pattern = f"%{search.strip()}%"
        users = users.filter(or_(User.name.ilike(pattern), User.email.ilike(pattern)))
    if status_filter == "active":
        users = users.filter(User.is_active.is_(True))
    elif status_filter == "suspended":
        users = users.filter(User.is_active.is_(False))

    counts = _trip_counts(db)
    return [
        {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "status": "active" if user.is_active else "suspended",
            "join_date": user.created_at.date(),
            "total_trips": counts.get(user.id, 0),
            "last_active": user.updated_at or user.created_at
        }
        for user in users.order_by(User.created_at.desc(), User.id.desc()).all()
    ]


def _get_user(user_id: int, db: Session) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User", user_id)
    return user


def set_user_status(user_id: int, is_active: bool, admin: User, db: Session) -> User:
    """Suspend or reactivate a user."""
    user = _get_user(user_id, db)
    if user.id == admin.id and not is_active:
        raise ValidationError("Admins cannot suspend themselves")

    user.is_active = is_active
    action = "reactivate" if is_active else "suspend"
    _log_action(db, admin, "user", user.id, action, {"email": user.email})
    db.commit()
    db.refresh(user)

    logger.info(f"Admin {admin.id} {action}d user {user.id}")
    return user


def delete_user(user_id: int, admin: User, db: Session) -> None:
    """Delete a user; their trips are soft-deleted and detached."""
    user = _get_user(user_id, db)
    if user.id == admin.id:
        raise ValidationError("Admins cannot delete themselves")

    db.query(Trip).filter(Trip.user_id == user.id).update(
        {Trip.deleted: True, Trip.user_id: None}, synchronize_session=False
    )
    db.query(Trip).filter(Trip.created_by == user.id).update(
        {Trip.created_by: None}, synchronize_session=False
    )
    _log_action(db, admin, "user", user.id, "delete", {"email": user.email})
    db.delete(user)
    db.commit()

    logger.info(f"Admin {admin.id} deleted user {user_id}")


def list_trips(db: Session, search: Optional[str] = None) -> List[Dict]:
    """Trip table rows with creator and visited city names."""
    trips = db.query(Trip).options(
        joinedload(Trip.owner),
        joinedload(Trip.stops).joinedload(TripStop.city)
    ).filter(Trip.deleted.is_(False))
    if search and search.strip():
        trips = trips.filter(Trip.name.ilike(f"%{search.strip()}%"))

    return [
        {
            "id": trip.id,
            "name": trip.name,
            "creator": (trip.owner.name or trip.owner.email) if trip.owner else None,
            "cities": [stop.city.name for stop in trip.stops if stop.city],
            "created_at": trip.created_at,
            "is_public": trip.is_public
        }
        for trip in trips.order_by(Trip.created_at.desc(), Trip.id.desc()).all()
    ]


def get_popular_activities(db: Session, limit: int = 10) -> List[Dict]:
    """Catalog activities ranked by how many times they are scheduled."""
    rows = db.query(
        Activity.name,
        Activity.category,
        func.count(TripActivity.id).label("count")
    ).join(
        TripActivity, TripActivity.activity_id == Activity.id
    ).group_by(
        Activity.id, Activity.name, Activity.category
    ).order_by(func.count(TripActivity.id).desc(), Activity.name.asc()).limit(limit).all()

    return [{"name": name, "category": category, "count": count} for name, category, count in rows]


def _report_rows(report_type: str, db: Session) -> List[Dict]:
    if report_type == "users":
        return list_users(db)
    if report_type == "trips":
        rows = list_trips(db)
        for row in rows:
            row["cities"] = ", ".join(row["cities"])
        return rows
    return get_popular_activities(db, limit=1000)


def export_report(report_type: str, file_format: str, db: Session) -> Tuple[str, str, str]:
    """Render a report; returns (content, media type, filename)."""
    if report_type not in REPORT_TYPES:
        raise ValidationError(f"Unknown report type: {report_type}")
    if file_format not in REPORT_FORMATS:
        raise ValidationError(f"Unknown report format: {file_format}")

    rows = [{key: serialize_value(value) for key, value in row.items()} for row in _report_rows(report_type, db)]
    filename = f"{report_type}-report-{date.today().isoformat()}.{file_format}"

    if file_format == "json":
        return json.dumps(rows, ensure_ascii=False, indent=2), "application/json", filename

    output = io.StringIO()
    if rows:
        writer = csv.DictWriter(output, fieldnames=list(rows[0].keys()))
        writer.writeheader()
        writer.writerows(rows)
    return output.getvalue(), "text/csv", filename
