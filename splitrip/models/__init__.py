"""Models package - Import all models for SQLAlchemy registration."""
from splitrip.models.user import User
from splitrip.models.trip import Trip, TripParticipant
from splitrip.models.expense import Expense, ConversionStatus
from splitrip.models.travel_request import TravelRequest, TravelRequestStatus

__all__ = [
    "User",
    "Trip",
    "TripParticipant",
    "Expense",
    "ConversionStatus",
    "TravelRequest",
    "TravelRequestStatus",
]
