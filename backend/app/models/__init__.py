"""Models package - Import all models for SQLAlchemy registration."""
from app.models.user import User
from app.models.currency import Currency
from app.models.city import City
from app.models.trip import Trip, TripType
from app.models.trip_stop import TripStop
from app.models.activity import Activity, TripActivity
from app.models.accommodation import Accommodation, TripAccommodation
from app.models.transport import TransportCost, TripTransportDetail
from app.models.cost_item import CostItem, CostCategory
from app.models.shared_link import SharedLink
from app.models.audit_log import AuditLog

__all__ = [
    "User",
    "Currency",
    "City",
    "Trip",
    "TripType",
    "TripStop",
    "Activity",
    "TripActivity",
    "Accommodation",
    "TripAccommodation",
    "TransportCost",
    "TripTransportDetail",
    "CostItem",
    "CostCategory",
    "SharedLink",
    "AuditLog",
]
