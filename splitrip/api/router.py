"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from splitrip.api.routes import auth, users, trips, expenses, travel_requests

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(trips.router)
api_router.include_router(expenses.router)
api_router.include_router(travel_requests.router)
