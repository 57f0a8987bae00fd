"""
Travel request routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from splitrip.api.dependencies import get_current_user, get_db
from splitrip.models.travel_request import TravelRequestStatus
from splitrip.models.user import User
from splitrip.schemas.travel_request import (
    TravelRequestCreate, TravelRequestResponse, TravelRequestStatusUpdate
)
from splitrip.services import travel_request_service

router = APIRouter(prefix="/travel-requests", tags=["travel-requests"])


@router.post("", response_model=TravelRequestResponse, status_code=status.HTTP_201_CREATED)
async def create_travel_request(
    request_data: TravelRequestCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Submit a travel request for approval."""
    return travel_request_service.create_travel_request(
        current_user.id,
        request_data.destination,
        request_data.start_date,
        request_data.end_date,
        request_data.estimated_cost,
        request_data.reason,
        db,
        notes=request_data.notes
    )


@router.get("", response_model=List[TravelRequestResponse])
async def list_travel_requests(
    status: Optional[TravelRequestStatus] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List travel requests, optionally filtered by status."""
    return travel_request_service.list_travel_requests(current_user.id, db, status=status)


@router.patch("/{request_id}", response_model=TravelRequestResponse)
async def update_travel_request(
    request_id: int,
    update: TravelRequestStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Approve, reject or reopen a travel request. Approval creates a trip."""
    request = travel_request_service.get_owned_travel_request(request_id, current_user.id, db)
    return travel_request_service.update_travel_request_status(request, update.status, db)
