"""
Pydantic schemas for the per-participant split of a trip.
"""
from pydantic import BaseModel
from typing import List
from decimal import Decimal


class ParticipantSplit(BaseModel):
    """What one participant owes."""
    user_id: int
    email: str
    share: Decimal
    normalized_share: Decimal  # share / sum of shares on the trip
    amount_owed: Decimal  # In settlement currency, 2 decimal places


class SplitResult(BaseModel):
    """Split of a trip's total across its participants."""
    trip_id: int
    trip_name: str
    settlement_currency: str
    total_settlement_amount: Decimal
    participant_count: int
    participants: List[ParticipantSplit] = []
