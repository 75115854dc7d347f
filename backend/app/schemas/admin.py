"""
Pydantic schemas for the admin dashboard.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import date, datetime


class DashboardStats(BaseModel):
    """Platform-wide headline numbers."""
    active_users: int
    total_users: int
    signups_this_month: int
    total_trips: int
    public_trips: int
    top_destination: Optional[str] = None
    avg_trip_length: float


class AdminUserRow(BaseModel):
    """Row of the user management table."""
    id: int
    name: Optional[str] = None
    email: str
    status: str  # active, suspended
    join_date: date
    total_trips: int
    last_active: datetime


class AdminTripRow(BaseModel):
    """Row of the trip table."""
    id: int
    name: str
    creator: Optional[str] = None
    cities: List[str]
    created_at: datetime
    is_public: bool


class PopularActivity(BaseModel):
    """Catalog activity ranked by how often it is scheduled."""
    name: str
    category: Optional[str] = None
    count: int


class UserStatusUpdate(BaseModel):
    """Suspend or reactivate a user."""
    is_active: bool
