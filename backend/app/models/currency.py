"""
Currency reference table.
"""
from sqlalchemy import Column, String, Numeric
from app.db.base import BaseModel


class Currency(BaseModel):
    """A currency and its rate against USD (units of this currency per 1 USD)."""
    __tablename__ = "currencies"

    code = Column(String(3), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    symbol = Column(String(10), nullable=True)
    exchange_rate_to_usd = Column(Numeric(18, 6), nullable=True)
