"""
Trip service for trip ownership checks and CRUD.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional, Sequence
from sqlalchemy.orm import Session
from splitrip.core.exceptions import NotFoundError, ValidationError
from splitrip.db.session import transaction
from splitrip.models.trip import Trip
from splitrip.models.travel_request import TravelRequest
from splitrip.schemas.trip import (
    RenameTrip, ChangeTripStartDate, ChangeTripEndDate, ChangeTripEstimatedCost
)

logger = logging.getLogger(__name__)


def get_owned_trip(trip_id: int, user_id: int, db: Session) -> Trip:
    """Return the trip if it exists and belongs to the user."""
    trip = db.query(Trip).filter(Trip.id == trip_id, Trip.owner_id == user_id).first()
    if not trip:
        raise NotFoundError("Trip not found")
    return trip


def _validate_trip_fields(
    name: str,
    start_date: Optional[date],
    end_date: Optional[date],
    estimated_cost: Optional[Decimal]
):
    if not name or not name.strip():
        raise ValidationError("Trip name is required")
    if start_date and end_date and end_date < start_date:
        raise ValidationError("end_date must not be before start_date")
    if estimated_cost is not None and estimated_cost < 0:
        raise ValidationError("estimated_cost must not be negative")


def build_trip(
    owner_id: int,
    name: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    estimated_cost: Optional[Decimal] = None
) -> Trip:
    """Validate and construct a trip without adding it to a session."""
    _validate_trip_fields(name, start_date, end_date, estimated_cost)
    return Trip(
        owner_id=owner_id,
        name=name.strip(),
        start_date=start_date,
        end_date=end_date,
        estimated_cost=estimated_cost
    )


def create_trip(
    owner_id: int,
    name: str,
    db: Session,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    estimated_cost: Optional[Decimal] = None
) -> Trip:
    """Create a trip owned by ``owner_id``."""
    trip = build_trip(owner_id, name, start_date, end_date, estimated_cost)
    with transaction(db):
        db.add(trip)
    db.refresh(trip)
    logger.info(f"Trip {trip.id} created by user {owner_id}")
    return trip


def list_trips(owner_id: int, db: Session) -> List[Trip]:
    """List the user's trips, newest first."""
    return db.query(Trip).filter(
        Trip.owner_id == owner_id
    ).order_by(Trip.created_at.desc(), Trip.id.desc()).all()


def update_trip(trip: Trip, changes: Sequence, db: Session) -> Trip:
    """Apply typed changes to a trip, all or nothing."""
    name, start_date, end_date, estimated_cost = (
        trip.name, trip.start_date, trip.end_date, trip.estimated_cost
    )
    for change in changes:
        if isinstance(change, RenameTrip):
            name = change.value
        elif isinstance(change, ChangeTripStartDate):
            start_date = change.value
        elif isinstance(change, ChangeTripEndDate):
            end_date = change.value
        elif isinstance(change, ChangeTripEstimatedCost):
            estimated_cost = change.value
        else:
            raise ValidationError(f"Unsupported trip change: {change!r}")

    _validate_trip_fields(name, start_date, end_date, estimated_cost)

    with transaction(db):
        trip.name = name.strip()
        trip.start_date = start_date
        trip.end_date = end_date
        trip.estimated_cost = estimated_cost
    db.refresh(trip)
    return trip


def delete_trip(trip: Trip, db: Session):
    """Delete a trip together with its expenses and participant shares."""
    trip_id = trip.id
    with transaction(db):
        db.query(TravelRequest).filter(
            TravelRequest.trip_id == trip_id
        ).update({TravelRequest.trip_id: None}, synchronize_session=False)
        db.delete(trip)
    logger.info(f"Trip {trip_id} deleted")
