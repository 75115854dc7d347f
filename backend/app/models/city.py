"""
City catalog.
"""
from sqlalchemy import Column, String, Float, Integer, BigInteger, Numeric, ForeignKey, JSON
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class City(BaseModel):
    """A destination city that trip stops, activities and hotels point at."""
    __tablename__ = "cities"

    name = Column(String(200), nullable=False, index=True)
    country = Column(String(100), nullable=True, index=True)
    iso_country_code = Column(String(3), nullable=True)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)
    population = Column(BigInteger, nullable=True)
    cost_index = Column(Numeric(6, 2), default=0, nullable=False)
    avg_daily_hotel = Column(Numeric(12, 2), nullable=True)
    popularity_score = Column(Integer, default=0, nullable=False, index=True)
    meta = Column("metadata", JSON, nullable=True)
    currency_id = Column(Integer, ForeignKey("currencies.id"), nullable=True)

    # Relationships
    currency = relationship("Currency")
    activities = relationship("Activity", back_populates="city")
    accommodations = relationship("Accommodation", back_populates="city")
