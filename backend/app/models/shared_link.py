"""
Public share links for trips.
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class SharedLink(BaseModel):
    """Token granting read access to a trip's itinerary."""
    __tablename__ = "shared_links"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    token = Column(String(64), unique=True, nullable=False, index=True)
    expires_at = Column(DateTime, nullable=True)

    # Relationships
    trip = relationship("Trip", back_populates="shared_links")
