"""
Pydantic schemas for TravelRequest entity.
"""
from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime
from decimal import Decimal
from splitrip.models.travel_request import TravelRequestStatus


class TravelRequestCreate(BaseModel):
    """Schema for travel request creation."""
    destination: str
    start_date: date
    end_date: date
    estimated_cost: Decimal
    reason: str
    notes: Optional[str] = None


class TravelRequestStatusUpdate(BaseModel):
    """Schema for a status decision."""
    status: TravelRequestStatus


class TravelRequestResponse(BaseModel):
    """Schema for travel request response."""
    id: int
    user_id: int
    destination: str
    start_date: date
    end_date: date
    estimated_cost: Decimal
    reason: str
    notes: Optional[str] = None
    status: TravelRequestStatus
    trip_id: Optional[int] = None
    created_at: datetime

    model_config = {"from_attributes": True}
