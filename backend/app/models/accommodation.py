"""
Accommodation catalog and trip bookings.
"""
from sqlalchemy import Column, String, Date, Text, Numeric, ForeignKey, Integer, JSON
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class Accommodation(BaseModel):
    """A hotel or rental listed for a city."""
    __tablename__ = "accommodations"

    city_id = Column(Integer, ForeignKey("cities.id"), nullable=True, index=True)
    provider = Column(String(100), nullable=True)
    name = Column(String(200), nullable=True)
    price_per_night = Column(Numeric(12, 2), nullable=True)
    currency = Column(String(3), nullable=False, default="USD")
    currency_id = Column(Integer, ForeignKey("currencies.id"), nullable=True)
    meta = Column("metadata", JSON, nullable=True)

    # Relationships
    city = relationship("City", back_populates="accommodations")


class TripAccommodation(BaseModel):
    """A stay booked for a trip."""
    __tablename__ = "trip_accommodations"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    accommodation_id = Column(Integer, ForeignKey("accommodations.id"), nullable=False, index=True)
    check_in_date = Column(Date, nullable=False)
    check_out_date = Column(Date, nullable=False)
    notes = Column(Text, nullable=True)

    # Relationships
    trip = relationship("Trip", back_populates="accommodations")
    accommodation = relationship("Accommodation")
