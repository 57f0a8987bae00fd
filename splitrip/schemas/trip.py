"""
Pydantic schemas for Trip entity.
"""
from pydantic import BaseModel, Field
from typing import Annotated, List, Literal, Optional, Union
from datetime import date, datetime
from decimal import Decimal


class TripBase(BaseModel):
    """Base trip schema."""
    name: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    estimated_cost: Optional[Decimal] = None


class TripCreate(TripBase):
    """Schema for trip creation."""
    pass


class TripResponse(TripBase):
    """Schema for trip response."""
    id: int
    owner_id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# Update operations: one tagged change per field, applied in order
class RenameTrip(BaseModel):
    field: Literal["name"]
    value: str


class ChangeTripStartDate(BaseModel):
    field: Literal["start_date"]
    value: Optional[date] = None


class ChangeTripEndDate(BaseModel):
    field: Literal["end_date"]
    value: Optional[date] = None


class ChangeTripEstimatedCost(BaseModel):
    field: Literal["estimated_cost"]
    value: Optional[Decimal] = None


TripChange = Annotated[
    Union[RenameTrip, ChangeTripStartDate, ChangeTripEndDate, ChangeTripEstimatedCost],
    Field(discriminator="field")
]


class TripUpdate(BaseModel):
    """Schema for trip update."""
    changes: List[TripChange] = Field(min_length=1)
