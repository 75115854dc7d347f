"""
Cost item model for trip budget estimates.
"""
from sqlalchemy import Column, Numeric, Enum as SQLEnum, ForeignKey, Integer
from sqlalchemy.orm import relationship
from app.db.base import BaseModel
import enum


class CostCategory(str, enum.Enum):
    """Budget category of a cost item."""
    TRANSPORT = "transport"
    ACCOMMODATION = "accommodation"
    ACTIVITIES = "activities"
    MEALS = "meals"
    OTHER = "other"


class CostItem(BaseModel):
    """An estimated cost attached to a trip and optionally one of its stops."""
    __tablename__ = "cost_items"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    trip_stop_id = Column(Integer, ForeignKey("trip_stops.id", ondelete="SET NULL"), nullable=True, index=True)
    category = Column(SQLEnum(CostCategory), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    currency_id = Column(Integer, ForeignKey("currencies.id"), nullable=True)

    # Relationships
    trip = relationship("Trip", back_populates="cost_items")
    trip_stop = relationship("TripStop")
