"""
Trip stop: one city visit within a trip.
"""
from sqlalchemy import Column, Date, Text, Numeric, ForeignKey, Integer, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class TripStop(BaseModel):
    """A city visit within a trip, ordered by seq (1, 2, 3...)."""
    __tablename__ = "trip_stops"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    seq = Column(Integer, nullable=False)
    city_id = Column(Integer, ForeignKey("cities.id"), nullable=False, index=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    local_transport_cost = Column(Numeric(12, 2), nullable=True)
    accommodation_estimate = Column(Numeric(12, 2), nullable=True)
    notes = Column(Text, nullable=True)
    meta = Column("metadata", JSON, nullable=True)

    # Relationships
    trip = relationship("Trip", back_populates="stops")
    city = relationship("City")
    activities = relationship(
        "TripActivity",
        back_populates="trip_stop",
        cascade="all, delete-orphan",
        order_by="[TripActivity.scheduled_date, TripActivity.start_time]"
    )

    # A city appears at most once per trip
    __table_args__ = (
        UniqueConstraint('trip_id', 'city_id', name='uq_trip_stop_city'),
    )
