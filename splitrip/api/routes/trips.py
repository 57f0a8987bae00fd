"""
Trip management routes, including participants and the expense split.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List
from splitrip.api.dependencies import get_current_user, get_db, get_settings
from splitrip.core.config import Settings
from splitrip.models.user import User
from splitrip.schemas.participant import ParticipantInvite, ParticipantResponse
from splitrip.schemas.split import SplitResult
from splitrip.schemas.trip import TripCreate, TripResponse, TripUpdate
from splitrip.services import trip_service
from splitrip.services.participant_service import add_participant, list_participants
from splitrip.services.split_service import compute_split

router = APIRouter(prefix="/trips", tags=["trips"])


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new trip."""
    return trip_service.create_trip(
        current_user.id,
        trip_data.name,
        db,
        start_date=trip_data.start_date,
        end_date=trip_data.end_date,
        estimated_cost=trip_data.estimated_cost
    )


@router.get("", response_model=List[TripResponse])
async def list_trips(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List all trips owned by the current user."""
    return trip_service.list_trips(current_user.id, db)


@router.get("/{trip_id}", response_model=TripResponse)
async def get_trip(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get trip details."""
    return trip_service.get_owned_trip(trip_id, current_user.id, db)


@router.patch("/{trip_id}", response_model=TripResponse)
async def update_trip(
    trip_id: int,
    update: TripUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Apply changes to a trip."""
    trip = trip_service.get_owned_trip(trip_id, current_user.id, db)
    return trip_service.update_trip(trip, update.changes, db)


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trip(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a trip with its expenses and participants."""
    trip = trip_service.get_owned_trip(trip_id, current_user.id, db)
    trip_service.delete_trip(trip, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{trip_id}/participants",
    response_model=ParticipantResponse,
    status_code=status.HTTP_201_CREATED
)
async def invite_participant(
    trip_id: int,
    invite: ParticipantInvite,
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db)
):
    """Invite a participant to the trip by email."""
    trip = trip_service.get_owned_trip(trip_id, current_user.id, db)
    participant = add_participant(trip, invite.email, invite.share, settings, db)
    return ParticipantResponse.from_participant(participant)


@router.get("/{trip_id}/participants", response_model=List[ParticipantResponse])
async def get_participants(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List participants in the order they joined."""
    trip = trip_service.get_owned_trip(trip_id, current_user.id, db)
    return [ParticipantResponse.from_participant(p) for p in list_participants(trip, db)]


@router.get("/{trip_id}/split", response_model=SplitResult)
async def get_split(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db)
):
    """Compute what each participant owes."""
    trip = trip_service.get_owned_trip(trip_id, current_user.id, db)
    return compute_split(trip, settings, db)
