"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from app.api.routes import (
    auth, users, trips, itinerary, catalog, accommodations,
    transport, budget, currencies, calendar, shared, admin
)

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(trips.router)
api_router.include_router(itinerary.router)
api_router.include_router(catalog.router)
api_router.include_router(accommodations.router)
api_router.include_router(transport.router)
api_router.include_router(budget.router)
api_router.include_router(currencies.router)
api_router.include_router(calendar.router)
api_router.include_router(shared.router)
api_router.include_router(admin.router)
