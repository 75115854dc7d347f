"""
Budget service: category breakdown, per-stop costs and overrun alerts.
"""
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import func
from decimal import Decimal
from typing import Dict, List
import logging
from app.core.exceptions import NotFoundError, ValidationError
from app.core.utils import round_money
from app.models.cost_item import CostCategory, CostItem
from app.models.trip import Trip
from app.models.trip_stop import TripStop
from app.models.user import User
from app.schemas.budget import CostItemCreate
from app.services.trip_service import get_trip

logger = logging.getLogger(__name__)

CATEGORY_DISPLAY_NAMES = {
    CostCategory.TRANSPORT.value: "Transport",
    CostCategory.ACCOMMODATION.value: "Accommodation",
    CostCategory.ACTIVITIES.value: "Activities",
    CostCategory.MEALS.value: "Food & Dining",
    CostCategory.OTHER.value: "Other",
}


def map_category(category) -> str:
    """Display name of a stored cost category; unknown values fall into Other."""
    if isinstance(category, CostCategory):
        category = category.value
    return CATEGORY_DISPLAY_NAMES.get(category, "Other")


def _percent_over(estimated: Decimal, budgeted: Decimal) -> str:
    percentage = (estimated - budgeted) / budgeted * 100
    return f"{percentage:.1f}"


def _category_budgets(trip: Trip) -> Dict[str, Decimal]:
    """Budgeted amounts per display category from trip.meta["category_budgets"]."""
    raw = (trip.meta or {}).get("category_budgets") or {}
    budgets = {}
    for key, value in raw.items():
        name = map_category(key) if key in CATEGORY_DISPLAY_NAMES else key
        if name in CATEGORY_DISPLAY_NAMES.values():
            budgets[name] = Decimal(str(value))
    return budgets


def get_trip_budget(trip_id: int, db: Session) -> Dict:
    """Budget breakdown of a trip."""
    trip = get_trip(trip_id, db)
    cost_items = db.query(CostItem).filter(CostItem.trip_id == trip_id).all()
    stops = db.query(TripStop).options(joinedload(TripStop.city)).filter(
        TripStop.trip_id == trip_id
    ).order_by(TripStop.start_date.asc(), TripStop.seq.asc()).all()

    total_budget = Decimal(trip.budget or 0)
    total_estimated = Decimal(trip.total_estimated_cost or 0)

    budgeted = _category_budgets(trip)
    categories = {
        name: {"budgeted": budgeted.get(name, Decimal(0)), "estimated": Decimal(0)}
        for name in CATEGORY_DISPLAY_NAMES.values()
    }
    for item in cost_items:
        categories[map_category(item.category)]["estimated"] += Decimal(item.amount)

    daily_budget = round_money(total_budget / (len(stops) or 1))
    per_day_costs = []
    for index, stop in enumerate(stops):
        stop_total = sum(
            (Decimal(item.amount) for item in cost_items if item.trip_stop_id == stop.id),
            Decimal(0)
        )
        per_day_costs.append({
            "day": index + 1,
            "date": stop.start_date,
            "city": stop.city.name if stop.city else "Unknown City",
            "budgeted": daily_budget,
            "estimated": stop_total
        })

    alerts: List[str] = []
    if total_budget and total_estimated and total_estimated > total_budget:
        alerts.append(f"Trip is {_percent_over(total_estimated, total_budget)}% over budget")

    for name, data in categories.items():
        if data["budgeted"] > 0 and data["estimated"] > data["budgeted"]:
            alerts.append(f"{name} spending is {_percent_over(data['estimated'], data['budgeted'])}% over budget")

    return {
        "total_budget": total_budget,
        "total_estimated_cost": total_estimated,
        "currency": trip.currency or "USD",
        "categories": categories,
        "per_day_costs": per_day_costs,
        "alerts": alerts
    }


def budget_status(trip: Trip) -> str:
    """over_budget, within_budget or no_budget."""
    if not trip.budget or not trip.total_estimated_cost:
        return "no_budget"
    if trip.total_estimated_cost > trip.budget:
        return "over_budget"
    return "within_budget"


def get_user_trip_budgets(user: User, db: Session) -> List[Dict]:
    """Budget status of each of the user's trips, newest first."""
    trips = db.query(Trip).filter(
        Trip.user_id == user.id,
        Trip.deleted.is_(False)
    ).order_by(Trip.created_at.desc(), Trip.id.desc()).all()

    return [
        {
            "trip_id": trip.id,
            "trip_name": trip.name,
            "budget": trip.budget,
            "total_estimated_cost": trip.total_estimated_cost,
            "currency": trip.currency or "USD",
            "status": budget_status(trip)
        }
        for trip in trips
    ]


def update_trip_budget(trip_id: int, budget: Decimal, db: Session) -> Trip:
    if budget < 0:
        raise ValidationError("Budget cannot be negative", details={"errors": {"budget": "Budget cannot be negative"}})

    trip = get_trip(trip_id, db)
    trip.budget = budget
    db.commit()
    db.refresh(trip)
    return trip


def recalculate_estimated_cost(trip: Trip, db: Session) -> Decimal:
    """Set total_estimated_cost to the sum of the trip's cost items."""
    total = db.query(func.coalesce(func.sum(CostItem.amount), 0)).filter(
        CostItem.trip_id == trip.id
    ).scalar()
    trip.total_estimated_cost = round_money(Decimal(str(total or 0)))
    return trip.total_estimated_cost


def add_cost_item(trip_id: int, data: CostItemCreate, db: Session) -> CostItem:
    """Attach a cost estimate to the trip and refresh its estimated total."""
    if data.amount < 0:
        raise ValidationError("Amount cannot be negative", details={"errors": {"amount": "Amount cannot be negative"}})

    trip = get_trip(trip_id, db)
    if data.trip_stop_id is not None:
        stop = db.query(TripStop).filter(
            TripStop.id == data.trip_stop_id,
            TripStop.trip_id == trip_id
        ).first()
        if not stop:
            raise NotFoundError("Trip stop", data.trip_stop_id)

    item = CostItem(
        trip_id=trip_id,
        trip_stop_id=data.trip_stop_id,
        category=data.category,
        amount=data.amount,
        currency_id=data.currency_id
    )
    db.add(item)
    db.flush()
    recalculate_estimated_cost(trip, db)
    db.commit()
    db.refresh(item)

    logger.info(f"Added {item.category.value} cost {item.amount} to trip {trip_id}")
    return item


def get_cost_items(trip_id: int, db: Session) -> List[CostItem]:
    return db.query(CostItem).filter(CostItem.trip_id == trip_id).order_by(CostItem.created_at.asc(), CostItem.id.asc()).all()


def delete_cost_item(trip_id: int, item_id: int, db: Session) -> None:
    item = db.query(CostItem).filter(CostItem.id == item_id, CostItem.trip_id == trip_id).first()
    if not item:
        raise NotFoundError("Cost item", item_id)

    trip = get_trip(trip_id, db)
    db.delete(item)
    db.flush()
    recalculate_estimated_cost(trip, db)
    db.commit()
