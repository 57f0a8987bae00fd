"""
Travel request service: request, approve or reject travel.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.orm import Session
from splitrip.core.exceptions import NotFoundError, ValidationError
from splitrip.db.session import transaction
from splitrip.models.travel_request import TravelRequest, TravelRequestStatus
from splitrip.services.trip_service import build_trip

logger = logging.getLogger(__name__)


def create_travel_request(
    user_id: int,
    destination: str,
    start_date: date,
    end_date: date,
    estimated_cost: Decimal,
    reason: str,
    db: Session,
    notes: str = None
) -> TravelRequest:
    """Create a pending travel request."""
    if not destination or not destination.strip():
        raise ValidationError("Destination is required")
    if not reason or not reason.strip():
        raise ValidationError("Reason is required")
    if end_date < start_date:
        raise ValidationError("end_date must not be before start_date")
    if estimated_cost is None or estimated_cost <= 0:
        raise ValidationError("estimated_cost must be greater than zero")

    request = TravelRequest(
        user_id=user_id,
        destination=destination.strip(),
        start_date=start_date,
        end_date=end_date,
        estimated_cost=estimated_cost,
        reason=reason.strip(),
        notes=notes,
        status=TravelRequestStatus.PENDING
    )
    with transaction(db):
        db.add(request)
    db.refresh(request)
    return request


def list_travel_requests(
    user_id: int,
    db: Session,
    status: Optional[TravelRequestStatus] = None
) -> List[TravelRequest]:
    """List the user's travel requests, newest first."""
    query = db.query(TravelRequest).filter(TravelRequest.user_id == user_id)
    if status is not None:
        query = query.filter(TravelRequest.status == status)
    return query.order_by(TravelRequest.created_at.desc(), TravelRequest.id.desc()).all()


def get_owned_travel_request(request_id: int, user_id: int, db: Session) -> TravelRequest:
    request = db.query(TravelRequest).filter(
        TravelRequest.id == request_id,
        TravelRequest.user_id == user_id
    ).first()
    if not request:
        raise NotFoundError("Travel request not found")
    return request


def update_travel_request_status(
    request: TravelRequest,
    status: TravelRequestStatus,
    db: Session
) -> TravelRequest:
    """
    Record a decision on a travel request.

    Approving creates a trip from the request in the same transaction. A
    request that already produced a trip is not approved twice.
    """
    status = TravelRequestStatus(status)
    with transaction(db):
        request.status = status
        if status == TravelRequestStatus.APPROVED and request.trip_id is None:
            trip = build_trip(
                owner_id=request.user_id,
                name=request.destination,
                start_date=request.start_date,
                end_date=request.end_date,
                estimated_cost=request.estimated_cost
            )
            db.add(trip)
            db.flush()
            request.trip_id = trip.id
            logger.info(f"Travel request {request.id} approved, trip {trip.id} created")
    db.refresh(request)
    return request
