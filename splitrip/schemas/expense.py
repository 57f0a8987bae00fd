"""
Pydantic schemas for Expense entity.
"""
from pydantic import BaseModel, Field
from typing import Annotated, List, Literal, Optional, Union
from datetime import datetime
from decimal import Decimal
from splitrip.models.expense import ConversionStatus


class ExpenseCreate(BaseModel):
    """Schema for expense creation."""
    name: str
    amount: Decimal
    currency: Optional[str] = None  # Defaults to the settlement currency
    trip_id: Optional[int] = None  # Omit for a personal expense


class ExpenseResponse(BaseModel):
    """Schema for expense response."""
    id: int
    user_id: int
    trip_id: Optional[int] = None
    name: str
    amount: Decimal
    currency: str
    amount_settlement: Decimal
    exchange_rate: Optional[Decimal] = None
    conversion_status: ConversionStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# Update operations: one tagged change per field, applied in order
class RenameExpense(BaseModel):
    field: Literal["name"]
    value: str


class ChangeExpenseAmount(BaseModel):
    field: Literal["amount"]
    value: Decimal


class ChangeExpenseCurrency(BaseModel):
    field: Literal["currency"]
    value: str


class AssignExpenseTrip(BaseModel):
    field: Literal["trip_id"]
    value: Optional[int] = None  # None detaches the expense from its trip


ExpenseChange = Annotated[
    Union[RenameExpense, ChangeExpenseAmount, ChangeExpenseCurrency, AssignExpenseTrip],
    Field(discriminator="field")
]


class ExpenseUpdate(BaseModel):
    """Schema for expense update."""
    changes: List[ExpenseChange] = Field(min_length=1)
