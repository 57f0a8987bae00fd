"""
Pydantic schemas for trip participant shares.
"""
from pydantic import BaseModel, EmailStr
from datetime import datetime
from decimal import Decimal


class ParticipantInvite(BaseModel):
    """Schema for participant invitation."""
    email: EmailStr
    share: Decimal = Decimal("1.0")


class ParticipantResponse(BaseModel):
    """Schema for a share ledger entry."""
    id: int
    trip_id: int
    user_id: int
    email: str
    share: Decimal
    created_at: datetime

    @classmethod
    def from_participant(cls, participant) -> "ParticipantResponse":
        return cls(
            id=participant.id,
            trip_id=participant.trip_id,
            user_id=participant.user_id,
            email=participant.user.email,
            share=participant.share,
            created_at=participant.created_at
        )
