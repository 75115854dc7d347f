"""
Pydantic schemas for currencies.
"""
from pydantic import BaseModel
from typing import Optional, Dict
from decimal import Decimal


class CurrencyResponse(BaseModel):
    """Schema for currency response."""
    id: int
    code: str
    name: str
    symbol: Optional[str] = None
    exchange_rate_to_usd: Optional[Decimal] = None

    class Config:
        from_attributes = True


class ConversionResponse(BaseModel):
    """Result of converting an amount between two currencies."""
    amount: Decimal
    from_currency_id: int
    to_currency_id: int
    converted_amount: Decimal
    formatted: Optional[str] = None


class RateRefreshResponse(BaseModel):
    """Currencies whose USD rate was updated."""
    updated: Dict[str, Decimal]
    skipped: list = []
