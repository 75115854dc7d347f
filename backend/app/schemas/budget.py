"""
Pydantic schemas for trip budgets and cost items.
"""
from pydantic import BaseModel
from typing import Optional, List, Dict
from datetime import date as date_type, datetime
from decimal import Decimal
from app.models.cost_item import CostCategory


class BudgetCategory(BaseModel):
    """Budgeted vs estimated amount of one display category."""
    budgeted: Decimal = Decimal(0)
    estimated: Decimal = Decimal(0)


class PerDayCost(BaseModel):
    """Budget line for one stop of the trip."""
    day: int
    date: Optional[date_type] = None
    city: str
    budgeted: Decimal
    estimated: Decimal


class BudgetData(BaseModel):
    """Budget breakdown of a trip."""
    total_budget: Decimal
    total_estimated_cost: Decimal
    currency: str
    categories: Dict[str, BudgetCategory]
    per_day_costs: List[PerDayCost] = []
    alerts: List[str] = []


class TripBudgetStatus(BaseModel):
    """Budget status row for the trip list."""
    trip_id: int
    trip_name: str
    budget: Optional[Decimal] = None
    total_estimated_cost: Optional[Decimal] = None
    currency: str
    status: str  # over_budget, within_budget, no_budget


class BudgetUpdate(BaseModel):
    """Schema for setting a trip's total budget."""
    budget: Decimal


class CostItemCreate(BaseModel):
    """Schema for cost item creation."""
    trip_stop_id: Optional[int] = None
    category: CostCategory
    amount: Decimal
    currency_id: Optional[int] = None


class CostItemResponse(BaseModel):
    """Schema for cost item response."""
    id: int
    trip_id: int
    trip_stop_id: Optional[int] = None
    category: CostCategory
    amount: Decimal
    currency_id: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True
