"""
Currency service: conversion through USD, formatting and rate refresh.

Rates are stored as units of the currency per 1 USD, so converting
X from A to B is X / rate(A) * rate(B).
"""
from sqlalchemy.orm import Session
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional
import httpx
import logging
from app.core.config import settings
from app.core.exceptions import ExternalServiceError, NotFoundError
from app.core.utils import round_money
from app.models.currency import Currency
from app.models.user import User

logger = logging.getLogger(__name__)

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CAD": "C$",
    "AUD": "A$",
    "SGD": "S$",
    "HKD": "HK$",
    "INR": "₹",
    "KRW": "₩",
    "THB": "฿",
    "AED": "د.إ",
    "BRL": "R$",
    "ARS": "$",
    "PEN": "S/",
    "ZAR": "R",
    "MAD": "د.م.",
    "EGP": "£",
}

# Shown without minor units
ZERO_DECIMAL_CURRENCIES = ("JPY", "KRW")

# user_id -> currency row as a plain dict, filled on first lookup
_user_currency_cache: Dict[int, Dict] = {}


def get_currencies(db: Session) -> List[Currency]:
    return db.query(Currency).order_by(Currency.code.asc()).all()


def get_currency_by_id(currency_id: int, db: Session) -> Optional[Currency]:
    return db.query(Currency).filter(Currency.id == currency_id).first()


def get_currency_by_code(code: str, db: Session) -> Optional[Currency]:
    return db.query(Currency).filter(Currency.code == code.upper()).first()


def get_currency_or_404(currency_id: int, db: Session) -> Currency:
    currency = get_currency_by_id(currency_id, db)
    if not currency:
        raise NotFoundError("Currency", currency_id)
    return currency


def convert_currency(
    amount: Decimal,
    from_currency_id: Optional[int],
    to_currency_id: Optional[int],
    db: Session
) -> Decimal:
    """
    Convert an amount between two currencies via USD.

    Same currency, an unknown currency or a missing rate returns the
    amount unchanged.
    """
    amount = Decimal(str(amount))
    if not from_currency_id or not to_currency_id or from_currency_id == to_currency_id:
        return amount

    from_currency = get_currency_by_id(from_currency_id, db)
    to_currency = get_currency_by_id(to_currency_id, db)
    if not from_currency or not to_currency:
        logger.warning(f"Currency not found for conversion {from_currency_id} -> {to_currency_id}")
        return amount
    if not from_currency.exchange_rate_to_usd or not to_currency.exchange_rate_to_usd:
        logger.warning(f"Missing USD rate for conversion {from_currency.code} -> {to_currency.code}")
        return amount

    amount_in_usd = amount / Decimal(from_currency.exchange_rate_to_usd)
    return round_money(amount_in_usd * Decimal(to_currency.exchange_rate_to_usd))


def convert_to_usd(amount: Decimal, from_currency_id: int, db: Session) -> Decimal:
    usd = get_currency_by_code("USD", db)
    if not usd:
        return Decimal(str(amount))
    return convert_currency(amount, from_currency_id, usd.id, db)


def convert_from_usd(amount: Decimal, to_currency_id: int, db: Session) -> Decimal:
    usd = get_currency_by_code("USD", db)
    if not usd:
        return Decimal(str(amount))
    return convert_currency(amount, usd.id, to_currency_id, db)


def _currency_to_dict(currency: Currency) -> Dict:
    return {
        "id": currency.id,
        "code": currency.code,
        "name": currency.name,
        "symbol": currency.symbol,
        "exchange_rate_to_usd": currency.exchange_rate_to_usd
    }


def get_user_preferred_currency(user: User, db: Session) -> Optional[Dict]:
    """User's profile currency, falling back to DEFAULT_CURRENCY. Cached per user."""
    cached = _user_currency_cache.get(user.id)
    if cached is not None:
        return cached

    currency = None
    if user.currency_id:
        currency = get_currency_by_id(user.currency_id, db)
    if currency is None:
        currency = get_currency_by_code(settings.DEFAULT_CURRENCY, db)

    if currency is None:
        return None

    _user_currency_cache[user.id] = _currency_to_dict(currency)
    return _user_currency_cache[user.id]


def clear_currency_cache(user_id: Optional[int] = None) -> None:
    """Forget cached preferred currencies, for one user or everyone."""
    if user_id is None:
        _user_currency_cache.clear()
    else:
        _user_currency_cache.pop(user_id, None)


def format_currency(amount: Decimal, currency_code: str) -> str:
    """Render an amount with its currency symbol, e.g. "$1,234.50" or "¥1,235"."""
    code = (currency_code or "").upper()
    symbol = CURRENCY_SYMBOLS.get(code, code)
    amount = Decimal(str(amount))

    if code in ZERO_DECIMAL_CURRENCIES:
        return f"{symbol}{amount.quantize(Decimal('1'), rounding=ROUND_HALF_UP):,}"
    return f"{symbol}{round_money(amount):,.2f}"


def refresh_exchange_rates(db: Session, client: Optional[httpx.Client] = None) -> Dict:
    """
    Pull the latest USD-based rates from ExchangeRate-API and store them.

    Currencies missing from the response are reported as skipped.
    """
    if not settings.FX_API_KEY:
        logger.error("FX_API_KEY is not configured. Please set it in .env file.")
        raise ExternalServiceError("FX_API_KEY is required for ExchangeRate-API")

    api_url = f"{settings.FX_API_URL}/{settings.FX_API_KEY}/latest/USD"
    logger.info("Fetching latest USD exchange rates from ExchangeRate-API")

    owns_client = client is None
    if owns_client:
        client = httpx.Client(timeout=10.0)
    try:
        response = client.get(api_url)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        logger.error(f"HTTP error with ExchangeRate-API: {e.response.status_code} - {e.response.text}")
        raise ExternalServiceError(f"ExchangeRate-API HTTP error: {e.response.status_code}")
    except httpx.HTTPError as e:
        logger.error(f"HTTP error with ExchangeRate-API: {e}")
        raise ExternalServiceError(f"ExchangeRate-API network error: {str(e)}")
    except ValueError as e:
        logger.error(f"ExchangeRate-API returned a non-JSON body: {e}")
        raise ExternalServiceError("ExchangeRate-API returned an invalid response")
    finally:
        if owns_client:
            client.close()

    if settings.DEBUG:
        logger.debug(f"ExchangeRate-API response: {data}")

    if not isinstance(data, dict) or data.get("result") != "success":
        error_msg = data.get("error-type", "Unknown error") if isinstance(data, dict) else "Unexpected payload"
        logger.error(f"ExchangeRate-API returned error: {error_msg}")
        raise ExternalServiceError(f"ExchangeRate-API error: {error_msg}")

    conversion_rates = data.get("conversion_rates", {})
    updated: Dict[str, Decimal] = {}
    skipped: List[str] = []

    for currency in get_currencies(db):
        rate = conversion_rates.get(currency.code)
        if rate is None or Decimal(str(rate)) <= 0:
            skipped.append(currency.code)
            continue
        currency.exchange_rate_to_usd = Decimal(str(rate))
        updated[currency.code] = currency.exchange_rate_to_usd

    db.commit()
    clear_currency_cache()

    logger.info(f"Updated {len(updated)} exchange rates, skipped {len(skipped)}")
    return {"updated": updated, "skipped": skipped}
