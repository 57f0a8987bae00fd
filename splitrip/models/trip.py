"""
Trip model and its weighted participant shares.
"""
from sqlalchemy import (
    Column, String, Date, Numeric, ForeignKey, Integer, UniqueConstraint, CheckConstraint
)
from sqlalchemy.orm import relationship
from splitrip.db.base import BaseModel


class Trip(BaseModel):
    """Trip owned by the user who created it."""
    __tablename__ = "trips"

    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    estimated_cost = Column(Numeric(15, 2), nullable=True)

    # Relationships
    owner = relationship("User", back_populates="trips")
    participants = relationship(
        "TripParticipant",
        back_populates="trip",
        cascade="all, delete-orphan",
        order_by="TripParticipant.id"
    )
    expenses = relationship("Expense", back_populates="trip", cascade="all, delete-orphan")


class TripParticipant(BaseModel):
    """Share ledger entry: a user's cost weight on a trip."""
    __tablename__ = "trip_participants"

    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    share = Column(Numeric(5, 4), nullable=False, default=1)

    # Relationships
    trip = relationship("Trip", back_populates="participants")
    user = relationship("User", back_populates="participations")

    __table_args__ = (
        UniqueConstraint('trip_id', 'user_id', name='uq_trip_participant'),
        CheckConstraint('share > 0 AND share <= 1', name='ck_participant_share_range'),
    )
