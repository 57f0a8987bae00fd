"""
Participant service: the per-trip share ledger.
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload
from splitrip.core.config import Settings
from splitrip.core.exceptions import DuplicateError, StorageError, ValidationError
from splitrip.db.session import transaction
from splitrip.models.trip import Trip, TripParticipant
from splitrip.services.user_service import get_user_by_email, provision_user

logger = logging.getLogger(__name__)

MAX_SHARE = Decimal("1")
# Matches the scale of TripParticipant.share
SHARE_QUANTUM = Decimal("0.0001")


def validate_share(share) -> Decimal:
    """Shares are weights in (0, 1]."""
    try:
        value = Decimal(str(share))
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid share: {share!r}") from e
    if not value.is_finite() or value <= 0 or value > MAX_SHARE:
        raise ValidationError("Share must be greater than 0 and at most 1")
    if value != value.quantize(SHARE_QUANTUM):
        raise ValidationError("Share must have at most 4 decimal places")
    return value


def _is_participant(trip_id: int, email: str, db: Session) -> bool:
    user = get_user_by_email(email, db)
    if user is None:
        return False
    return db.query(TripParticipant).filter(
        TripParticipant.trip_id == trip_id,
        TripParticipant.user_id == user.id
    ).first() is not None


def add_participant(
    trip: Trip,
    email: str,
    share,
    settings: Settings,
    db: Session
) -> TripParticipant:
    """
    Add a user to a trip's share ledger.

    Unknown emails get a provisional account. Provisioning and the ledger
    insert commit together, so a failed insert leaves no orphaned user.

    Raises:
        ValidationError: blank email, or share outside (0, 1] or finer than 4 dp.
        DuplicateError: the user is already on the trip.
    """
    if not email or not email.strip():
        raise ValidationError("Participant email is required")
    share = validate_share(share)

    try:
        with transaction(db):
            user = get_user_by_email(email, db)
            if user is None:
                user = provision_user(email, settings, db)
            else:
                existing = db.query(TripParticipant).filter(
                    TripParticipant.trip_id == trip.id,
                    TripParticipant.user_id == user.id
                ).first()
                if existing:
                    raise DuplicateError("User is already a participant")

            participant = TripParticipant(trip_id=trip.id, user_id=user.id, share=share)
            db.add(participant)
    except IntegrityError as e:
        # Either a concurrent invite won the unique constraint or a reference is gone
        if _is_participant(trip.id, email, db):
            raise DuplicateError("User is already a participant") from e
        logger.error(f"Could not add participant to trip {trip.id}: {e}")
        raise StorageError("Could not add participant") from e

    db.refresh(participant)
    logger.info(f"User {participant.user_id} joined trip {trip.id} with share {share}")
    return participant


def list_participants(trip: Trip, db: Session) -> List[TripParticipant]:
    """List a trip's participants in creation order."""
    return db.query(TripParticipant).options(
        joinedload(TripParticipant.user)
    ).filter(
        TripParticipant.trip_id == trip.id
    ).order_by(TripParticipant.created_at, TripParticipant.id).all()
