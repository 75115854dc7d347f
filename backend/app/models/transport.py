"""
Transport reference costs and per-trip transport legs.
"""
from sqlalchemy import Column, String, Text, DateTime, Numeric, ForeignKey, Integer, JSON
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class TransportCost(BaseModel):
    """Average cost and duration of a mode between two cities."""
    __tablename__ = "transport_costs"

    from_city_id = Column(Integer, ForeignKey("cities.id"), nullable=True, index=True)
    to_city_id = Column(Integer, ForeignKey("cities.id"), nullable=True, index=True)
    mode = Column(String(20), nullable=False)
    avg_cost = Column(Numeric(12, 2), nullable=True)
    avg_duration_minutes = Column(Integer, nullable=True)
    provider = Column(String(100), nullable=True)
    currency_id = Column(Integer, ForeignKey("currencies.id"), nullable=True)
    meta = Column("metadata", JSON, nullable=True)

    # Relationships
    from_city = relationship("City", foreign_keys=[from_city_id])
    to_city = relationship("City", foreign_keys=[to_city_id])
    currency = relationship("Currency")


class TripTransportDetail(BaseModel):
    """A booked transport leg of a trip."""
    __tablename__ = "trip_transport_details"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    from_city_id = Column(Integer, ForeignKey("cities.id"), nullable=False)
    to_city_id = Column(Integer, ForeignKey("cities.id"), nullable=False)
    transport_mode = Column(String(20), nullable=False)
    provider = Column(String(100), nullable=False)
    departure_time = Column(DateTime, nullable=False, index=True)
    arrival_time = Column(DateTime, nullable=False)
    cost = Column(Numeric(12, 2), nullable=False)
    currency_id = Column(Integer, ForeignKey("currencies.id"), nullable=False)
    booking_reference = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)

    # Relationships
    trip = relationship("Trip", back_populates="transport_details")
    from_city = relationship("City", foreign_keys=[from_city_id])
    to_city = relationship("City", foreign_keys=[to_city_id])
    currency = relationship("Currency")
