"""
Activity catalog and activities scheduled on a trip stop.
"""
from sqlalchemy import Column, String, Text, Date, Time, Boolean, Numeric, ForeignKey, Integer, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class Activity(BaseModel):
    """Catalog activity offered in a city."""
    __tablename__ = "activities"

    city_id = Column(Integer, ForeignKey("cities.id"), nullable=True, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(50), nullable=True)
    cost = Column(Numeric(12, 2), nullable=True)
    duration_minutes = Column(Integer, nullable=True)
    vendor = Column(String(200), nullable=True)
    meta = Column("metadata", JSON, nullable=True)
    deleted = Column(Boolean, default=False, nullable=False)
    currency_id = Column(Integer, ForeignKey("currencies.id"), nullable=True)

    # Relationships
    city = relationship("City", back_populates="activities")


class TripActivity(BaseModel):
    """An activity scheduled on a trip stop; name/cost/duration are copied from the catalog."""
    __tablename__ = "trip_activities"

    trip_stop_id = Column(Integer, ForeignKey("trip_stops.id"), nullable=False, index=True)
    activity_id = Column(Integer, ForeignKey("activities.id"), nullable=True, index=True)
    name = Column(String(200), nullable=False)
    scheduled_date = Column(Date, nullable=True, index=True)
    start_time = Column(Time, nullable=True)
    duration_minutes = Column(Integer, nullable=True)
    cost = Column(Numeric(12, 2), nullable=True)
    notes = Column(Text, nullable=True)

    # Relationships
    trip_stop = relationship("TripStop", back_populates="activities")
    activity = relationship("Activity")

    __table_args__ = (
        UniqueConstraint('trip_stop_id', 'activity_id', 'scheduled_date', 'start_time', name='uq_trip_activity_slot'),
    )
