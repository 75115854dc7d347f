"""
Trip model for itinerary planning.
"""
from sqlalchemy import Column, String, Date, Boolean, Text, Numeric, Enum as SQLEnum, ForeignKey, Integer, JSON
from sqlalchemy.orm import relationship
from app.db.base import BaseModel
import enum


class TripType(str, enum.Enum):
    """Who authored the trip."""
    ADMIN_DEFINED = "admin_defined"
    CUSTOM = "custom"


class Trip(BaseModel):
    """A user-owned planning record with a name, date range and budget."""
    __tablename__ = "trips"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=True, index=True)
    end_date = Column(Date, nullable=True, index=True)
    is_public = Column(Boolean, default=False, nullable=False)
    cover_photo_url = Column(String(500), nullable=True)
    currency = Column(String(3), nullable=False, default="USD")
    budget = Column(Numeric(12, 2), nullable=True)
    total_estimated_cost = Column(Numeric(12, 2), nullable=True)
    meta = Column("metadata", JSON, nullable=True)
    deleted = Column(Boolean, default=False, nullable=False, index=True)
    trip_type = Column(SQLEnum(TripType), default=TripType.CUSTOM, nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    # Relationships
    owner = relationship("User", back_populates="trips", foreign_keys=[user_id])
    stops = relationship("TripStop", back_populates="trip", cascade="all, delete-orphan", order_by="TripStop.seq")
    accommodations = relationship("TripAccommodation", back_populates="trip", cascade="all, delete-orphan")
    transport_details = relationship("TripTransportDetail", back_populates="trip", cascade="all, delete-orphan")
    cost_items = relationship("CostItem", back_populates="trip", cascade="all, delete-orphan")
    shared_links = relationship("SharedLink", back_populates="trip", cascade="all, delete-orphan")
