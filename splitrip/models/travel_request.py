"""
Travel request model for trip approval.
"""
import enum
from sqlalchemy import Column, String, Date, Numeric, Text, ForeignKey, Integer, Enum as SQLEnum
from sqlalchemy.orm import relationship
from splitrip.db.base import BaseModel


class TravelRequestStatus(str, enum.Enum):
    """Travel request status enumeration."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class TravelRequest(BaseModel):
    """Request for travel approval; approval creates a trip."""
    __tablename__ = "travel_requests"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    destination = Column(String(200), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    estimated_cost = Column(Numeric(15, 2), nullable=False)
    reason = Column(Text, nullable=False)
    notes = Column(Text, nullable=True)
    status = Column(
        SQLEnum(TravelRequestStatus, values_callable=lambda e: [m.value for m in e]),
        default=TravelRequestStatus.PENDING,
        nullable=False
    )
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="SET NULL"), nullable=True)

    # Relationships
    owner = relationship("User", back_populates="travel_requests")
    trip = relationship("Trip")
