"""
User model for authentication and profile data.
"""
from sqlalchemy import Column, String, Boolean, ForeignKey, Integer, JSON
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class User(BaseModel):
    """Registered traveller; admins are flagged with is_admin."""
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=True)
    hashed_password = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)
    home_city_id = Column(Integer, ForeignKey("cities.id"), nullable=True)
    currency_id = Column(Integer, ForeignKey("currencies.id"), nullable=True)
    photo = Column(String(500), nullable=True)
    preferences = Column(JSON, nullable=True)

    # Relationships
    home_city = relationship("City", foreign_keys=[home_city_id])
    currency = relationship("Currency")
    trips = relationship("Trip", back_populates="owner", foreign_keys="Trip.user_id")
