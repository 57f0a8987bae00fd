"""
Expense model for tracking spending.
"""
import enum
from sqlalchemy import Column, String, Numeric, ForeignKey, Integer, Enum as SQLEnum, CheckConstraint
from sqlalchemy.orm import relationship
from splitrip.db.base import BaseModel


class ConversionStatus(str, enum.Enum):
    """How amount_settlement was derived from amount."""
    IDENTITY = "identity"
    CONVERTED = "converted"
    UNCONVERTED = "unconverted"


class Expense(BaseModel):
    """Expense model representing a single spending event."""
    __tablename__ = "expenses"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Null for personal expenses
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=True, index=True)
    name = Column(String(200), nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    amount_settlement = Column(Numeric(18, 4), nullable=False)  # Normalized to the settlement currency
    exchange_rate = Column(Numeric(18, 8), nullable=True)  # 1 currency = rate settlement currency
    conversion_status = Column(
        SQLEnum(ConversionStatus, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ConversionStatus.IDENTITY
    )

    # Relationships
    owner = relationship("User", back_populates="expenses")
    trip = relationship("Trip", back_populates="expenses")

    __table_args__ = (
        CheckConstraint('amount > 0', name='ck_expense_amount_positive'),
    )
