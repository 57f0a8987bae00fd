"""
Expense service for expense-related business logic.
"""
import logging
from decimal import Decimal
from typing import List, Optional, Sequence
from sqlalchemy.orm import Session
from splitrip.core.config import Settings
from splitrip.core.exceptions import NotFoundError, ValidationError
from splitrip.db.session import transaction
from splitrip.models.expense import Expense
from splitrip.schemas.expense import (
    RenameExpense, ChangeExpenseAmount, ChangeExpenseCurrency, AssignExpenseTrip
)
from splitrip.services.fx_service import ExchangeRateClient, clean_currency, normalize
from splitrip.services.trip_service import get_owned_trip

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def _validate_name(name: str) -> str:
    if not name or not name.strip():
        raise ValidationError("Expense name is required")
    return name.strip()


def _validate_amount(amount: Decimal) -> Decimal:
    if amount is None or not Decimal(amount).is_finite() or amount <= 0:
        raise ValidationError("Amount must be greater than zero")
    # Expense.amount keeps cents only
    if amount != Decimal(amount).quantize(CENT):
        raise ValidationError("Amount must have at most 2 decimal places")
    return amount


def create_expense(
    user_id: int,
    name: str,
    amount: Decimal,
    settings: Settings,
    rate_client: ExchangeRateClient,
    db: Session,
    currency: str = None,
    trip_id: Optional[int] = None
) -> Expense:
    """
    Record an expense, normalized to the settlement currency.

    With ``trip_id`` the trip must belong to the user; the ownership check and
    the insert happen in the same transaction.
    """
    name = _validate_name(name)
    amount = _validate_amount(amount)
    currency = clean_currency(currency or settings.SETTLEMENT_CURRENCY)

    # Rate lookup happens before the transaction opens so no lock is held on network I/O
    normalized = normalize(amount, currency, settings.SETTLEMENT_CURRENCY, rate_client)

    with transaction(db):
        if trip_id is not None:
            get_owned_trip(trip_id, user_id, db)
        expense = Expense(
            user_id=user_id,
            trip_id=trip_id,
            name=name,
            amount=amount,
            currency=currency,
            amount_settlement=normalized.amount_settlement,
            exchange_rate=normalized.rate,
            conversion_status=normalized.status
        )
        db.add(expense)

    db.refresh(expense)
    logger.info(
        f"Expense {expense.id} recorded: {amount} {currency} -> "
        f"{normalized.amount_settlement} {settings.SETTLEMENT_CURRENCY} ({normalized.status.value})"
    )
    return expense


def list_expenses(user_id: int, db: Session, trip_id: Optional[int] = None) -> List[Expense]:
    """List the user's expenses, newest first, optionally for one trip."""
    query = db.query(Expense).filter(Expense.user_id == user_id)
    if trip_id is not None:
        query = query.filter(Expense.trip_id == trip_id)
    return query.order_by(Expense.created_at.desc(), Expense.id.desc()).all()


def get_owned_expense(expense_id: int, user_id: int, db: Session) -> Expense:
    expense = db.query(Expense).filter(
        Expense.id == expense_id,
        Expense.user_id == user_id
    ).first()
    if not expense:
        raise NotFoundError("Expense not found")
    return expense


def update_expense(
    expense: Expense,
    changes: Sequence,
    settings: Settings,
    rate_client: ExchangeRateClient,
    db: Session
) -> Expense:
    """
    Apply typed changes to an expense, all or nothing.

    Changing the amount or currency normalizes the expense again.
    """
    name, amount, currency, trip_id = expense.name, expense.amount, expense.currency, expense.trip_id
    for change in changes:
        if isinstance(change, RenameExpense):
            name = _validate_name(change.value)
        elif isinstance(change, ChangeExpenseAmount):
            amount = _validate_amount(change.value)
        elif isinstance(change, ChangeExpenseCurrency):
            currency = clean_currency(change.value)
        elif isinstance(change, AssignExpenseTrip):
            trip_id = change.value
        else:
            raise ValidationError(f"Unsupported expense change: {change!r}")

    normalized = None
    if amount != expense.amount or currency != expense.currency:
        normalized = normalize(amount, currency, settings.SETTLEMENT_CURRENCY, rate_client)

    with transaction(db):
        if trip_id is not None and trip_id != expense.trip_id:
            get_owned_trip(trip_id, expense.user_id, db)
        expense.name = name
        expense.amount = amount
        expense.currency = currency
        expense.trip_id = trip_id
        if normalized is not None:
            expense.amount_settlement = normalized.amount_settlement
            expense.exchange_rate = normalized.rate
            expense.conversion_status = normalized.status

    db.refresh(expense)
    return expense


def delete_expense(expense: Expense, db: Session):
    expense_id = expense.id
    with transaction(db):
        db.delete(expense)
    logger.info(f"Expense {expense_id} deleted")
