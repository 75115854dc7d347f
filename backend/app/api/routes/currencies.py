"""
Currency routes: reference list, conversion and rate refresh.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from decimal import Decimal
from typing import List, Optional
from app.db.session import get_db
from app.models.user import User
from app.schemas.currency import CurrencyResponse, ConversionResponse, RateRefreshResponse
from app.api.dependencies import get_current_user, get_current_admin
from app.core.exceptions import NotFoundError
from app.services import currency_service

router = APIRouter(prefix="/currencies", tags=["currencies"])


@router.get("", response_model=List[CurrencyResponse])
async def list_currencies(db: Session = Depends(get_db)):
    return currency_service.get_currencies(db)


@router.get("/preferred", response_model=Optional[CurrencyResponse])
async def preferred_currency(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Current user's preferred currency."""
    return currency_service.get_user_preferred_currency(current_user, db)


@router.get("/convert", response_model=ConversionResponse)
async def convert(
    amount: Decimal,
    from_currency_id: int = Query(..., alias="from"),
    to_currency_id: int = Query(..., alias="to"),
    db: Session = Depends(get_db)
):
    """Convert an amount between two currencies via USD."""
    converted = currency_service.convert_currency(amount, from_currency_id, to_currency_id, db)
    target = currency_service.get_currency_by_id(to_currency_id, db)
    return {
        "amount": amount,
        "from_currency_id": from_currency_id,
        "to_currency_id": to_currency_id,
        "converted_amount": converted,
        "formatted": currency_service.format_currency(converted, target.code) if target else None
    }


@router.post("/refresh", response_model=RateRefreshResponse)
async def refresh_rates(
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Pull the latest USD rates from ExchangeRate-API."""
    return currency_service.refresh_exchange_rates(db)


@router.get("/code/{code}", response_model=CurrencyResponse)
async def get_currency_by_code(code: str, db: Session = Depends(get_db)):
    currency = currency_service.get_currency_by_code(code, db)
    if not currency:
        raise NotFoundError("Currency", code)
    return currency


@router.get("/{currency_id}", response_model=CurrencyResponse)
async def get_currency(currency_id: int, db: Session = Depends(get_db)):
    return currency_service.get_currency_or_404(currency_id, db)
