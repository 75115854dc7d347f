"""
Budget management routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.models.user import User
from app.schemas.budget import (
    BudgetData, TripBudgetStatus, BudgetUpdate, CostItemCreate, CostItemResponse
)
from app.schemas.trip import TripResponse
from app.api.dependencies import get_current_user
from app.api.routes.trips import check_trip_access
from app.services import budget_service

router = APIRouter(prefix="/budget", tags=["budget"])


@router.get("", response_model=List[TripBudgetStatus])
async def list_trip_budgets(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Budget status of each of the user's trips."""
    return budget_service.get_user_trip_budgets(current_user, db)


@router.get("/{trip_id}", response_model=BudgetData)
async def get_budget(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Category breakdown, per-stop costs and alerts for a trip."""
    check_trip_access(trip_id, current_user, db)
    return budget_service.get_trip_budget(trip_id, db)


@router.put("/{trip_id}", response_model=TripResponse)
async def update_budget(
    trip_id: int,
    budget_data: BudgetUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Set the trip's total budget."""
    check_trip_access(trip_id, current_user, db, action="edit")
    return budget_service.update_trip_budget(trip_id, budget_data.budget, db)


@router.get("/{trip_id}/items", response_model=List[CostItemResponse])
async def list_cost_items(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user, db)
    return budget_service.get_cost_items(trip_id, db)


@router.post("/{trip_id}/items", response_model=CostItemResponse, status_code=status.HTTP_201_CREATED)
async def add_cost_item(
    trip_id: int,
    item_data: CostItemCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add a cost estimate; the trip's estimated total is recalculated."""
    check_trip_access(trip_id, current_user, db, action="edit")
    return budget_service.add_cost_item(trip_id, item_data, db)


@router.delete("/{trip_id}/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cost_item(
    trip_id: int,
    item_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    check_trip_access(trip_id, current_user, db, action="edit")
    budget_service.delete_cost_item(trip_id, item_id, db)
    return None
