"""
Expense management routes.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List, Optional
from splitrip.api.dependencies import get_current_user, get_db, get_rate_client, get_settings
from splitrip.core.config import Settings
from splitrip.models.user import User
from splitrip.schemas.expense import ExpenseCreate, ExpenseResponse, ExpenseUpdate
from splitrip.services import expense_service
from splitrip.services.fx_service import ExchangeRateClient

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
def create_expense(
    expense_data: ExpenseCreate,
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    rate_client: ExchangeRateClient = Depends(get_rate_client),
    db: Session = Depends(get_db)
):
    """Record an expense, personal or attached to one of the user's trips."""
    # Sync handler: runs in the threadpool since the rate lookup blocks
    return expense_service.create_expense(
        current_user.id,
        expense_data.name,
        expense_data.amount,
        settings,
        rate_client,
        db,
        currency=expense_data.currency,
        trip_id=expense_data.trip_id
    )


@router.get("", response_model=List[ExpenseResponse])
async def list_expenses(
    trip_id: Optional[int] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the current user's expenses."""
    return expense_service.list_expenses(current_user.id, db, trip_id=trip_id)


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    expense_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return expense_service.get_owned_expense(expense_id, current_user.id, db)


@router.patch("/{expense_id}", response_model=ExpenseResponse)
def update_expense(
    expense_id: int,
    update: ExpenseUpdate,
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    rate_client: ExchangeRateClient = Depends(get_rate_client),
    db: Session = Depends(get_db)
):
    """Apply changes to an expense."""
    expense = expense_service.get_owned_expense(expense_id, current_user.id, db)
    return expense_service.update_expense(expense, update.changes, settings, rate_client, db)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(
    expense_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete an expense."""
    expense = expense_service.get_owned_expense(expense_id, current_user.id, db)
    expense_service.delete_expense(expense, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
