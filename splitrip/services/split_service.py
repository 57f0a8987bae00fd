"""
Split service: divides a trip's expenses among its participants by share.

The split is computed on read from the current expenses and share ledger and
is never persisted, so repeated calls without mutations return the same result.
"""
from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP
from typing import List, Sequence
from sqlalchemy.orm import Session
from splitrip.core.config import Settings
from splitrip.models.expense import Expense
from splitrip.models.trip import Trip
from splitrip.schemas.split import ParticipantSplit, SplitResult
from splitrip.services.participant_service import list_participants

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def trip_total(trip: Trip, db: Session) -> Decimal:
    """Sum of settlement amounts over the trip's expenses."""
    amounts = db.query(Expense.amount_settlement).filter(Expense.trip_id == trip.id).all()
    return sum((Decimal(amount) for (amount,) in amounts), Decimal("0"))


def allocate(total: Decimal, weights: Sequence[Decimal]) -> List[Decimal]:
    """
    Split ``total`` (2 dp) in proportion to ``weights`` using largest remainder.

    Every part is floored to whole cents, then the cents left over go one each
    to the parts with the largest fractional remainder (earlier parts win ties).
    The parts always sum exactly to ``total``.
    """
    if not weights:
        return []
    total_weight = sum(weights, Decimal("0"))
    total_cents = int((total / CENT).to_integral_value(rounding=ROUND_HALF_UP))
    if total_weight <= 0 or total_cents == 0:
        return [ZERO for _ in weights]

    exact = [Decimal(total_cents) * weight / total_weight for weight in weights]
    floors = [int(value.to_integral_value(rounding=ROUND_FLOOR)) for value in exact]
    leftover = total_cents - sum(floors)

    by_remainder = sorted(
        range(len(weights)),
        key=lambda i: (-(exact[i] - floors[i]), i)
    )
    for i in by_remainder[:leftover]:
        floors[i] += 1

    return [(Decimal(cents) * CENT).quantize(CENT) for cents in floors]


def compute_split(trip: Trip, settings: Settings, db: Session) -> SplitResult:
    """Compute what each participant owes for the trip."""
    total = trip_total(trip, db).quantize(CENT, rounding=ROUND_HALF_UP)
    participants = list_participants(trip, db)

    weights = [Decimal(p.share) for p in participants]
    total_weight = sum(weights, Decimal("0"))
    owed = allocate(total, weights)

    splits = [
        ParticipantSplit(
            user_id=p.user_id,
            email=p.user.email,
            share=weight,
            normalized_share=weight / total_weight if total_weight > 0 else Decimal("0"),
            amount_owed=amount
        )
        for p, weight, amount in zip(participants, weights, owed)
    ]

    return SplitResult(
        trip_id=trip.id,
        trip_name=trip.name,
        settlement_currency=settings.SETTLEMENT_CURRENCY,
        total_settlement_amount=total,
        participant_count=len(splits),
        participants=splits
    )
