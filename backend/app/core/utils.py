"""
Utility functions for the application.
"""
from typing import Any
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP


def serialize_value(obj: Any) -> Any:
    """Serialize dates and decimals for JSON/CSV export."""
    if isinstance(obj, (date, datetime)):
        return obj.isoformat()
    if isinstance(obj, Decimal):
        return float(obj)
    return obj


def round_money(amount: Decimal) -> Decimal:
    """Round a money amount to two decimal places."""
    return Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
