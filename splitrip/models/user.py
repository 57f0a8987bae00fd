"""
User model for authentication and user management.
"""
from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship
from splitrip.db.base import BaseModel


class User(BaseModel):
    """User model identified by email."""
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=True)
    hashed_password = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    # Created through a participant invite, not yet claimed by registration
    is_provisional = Column(Boolean, default=False, nullable=False)

    # Relationships
    trips = relationship("Trip", back_populates="owner", cascade="all, delete-orphan")
    expenses = relationship("Expense", back_populates="owner", cascade="all, delete-orphan")
    participations = relationship("TripParticipant", back_populates="user", cascade="all, delete-orphan")
    travel_requests = relationship("TravelRequest", back_populates="owner", cascade="all, delete-orphan")
