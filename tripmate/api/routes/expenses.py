"""
Expense management routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, joinedload
from typing import List
from datetime import date

from tripmate.db.session import get_db
from tripmate.models.user import User
from tripmate.models.trip import Trip
from tripmate.models.expense import Expense
from tripmate.schemas.expense import ExpenseCreate, ExpenseUpdate, ExpenseResponse
from tripmate.services.trip_service import get_membership
from tripmate.api.dependencies import get_current_user
from tripmate.api.routes.trips import check_trip_access, check_trip_role, CONTRIBUTOR_ROLES

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/expenses", tags=["expenses"])


def check_payer(trip_id: int, payer_id: int, db: Session):
    """The payer of a new or edited expense must be a current member."""
    if not get_membership(trip_id, payer_id, db):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Payer is not a member of this trip"
        )


def get_expense_or_404(trip_id: int, expense_id: int, db: Session) -> Expense:
    expense = db.query(Expense).options(joinedload(Expense.payer)).filter(
        Expense.id == expense_id,
        Expense.trip_id == trip_id
    ).first()
    if not expense:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Expense not found"
        )
    return expense


def expense_response(expense: Expense, trip: Trip) -> ExpenseResponse:
    return ExpenseResponse(
        id=expense.id,
        trip_id=expense.trip_id,
        payer_id=expense.payer_id,
        payer_username=expense.payer.username if expense.payer else "Unknown",
        date=expense.date,
        amount=expense.amount,
        description=expense.description,
        base_currency=trip.base_currency,
        created_at=expense.created_at
    )


@router.get("/{trip_id}", response_model=List[ExpenseResponse])
async def list_expenses(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List a trip's expenses, newest first."""
    trip = check_trip_access(trip_id, current_user.id, db)

    expenses = db.query(Expense).options(joinedload(Expense.payer)).filter(
        Expense.trip_id == trip_id
    ).order_by(Expense.date.desc(), Expense.id.desc()).all()

    return [expense_response(e, trip) for e in expenses]


@router.post("/{trip_id}", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    trip_id: int,
    expense_data: ExpenseCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Record an expense. The current user pays unless payer_id says otherwise."""
    trip = check_trip_role(trip_id, current_user.id, CONTRIBUTOR_ROLES, db)

    payer_id = expense_data.payer_id or current_user.id
    check_payer(trip_id, payer_id, db)

    expense = Expense(
        trip_id=trip_id,
        payer_id=payer_id,
        date=expense_data.date or date.today(),
        amount=expense_data.amount,
        description=expense_data.description
    )
    db.add(expense)
    db.commit()

    expense = get_expense_or_404(trip_id, expense.id, db)
    logger.info(f"Expense {expense.id} of {expense.amount} {trip.base_currency} recorded on trip {trip_id}")
    return expense_response(expense, trip)


@router.patch("/{trip_id}/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    trip_id: int,
    expense_id: int,
    expense_data: ExpenseUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Edit an expense."""
    trip = check_trip_role(trip_id, current_user.id, CONTRIBUTOR_ROLES, db)
    expense = get_expense_or_404(trip_id, expense_id, db)

    updates = expense_data.model_dump(exclude_unset=True, exclude_none=True)
    if "payer_id" in updates:
        check_payer(trip_id, updates["payer_id"], db)

    for field, value in updates.items():
        setattr(expense, field, value)

    db.commit()

    expense = get_expense_or_404(trip_id, expense_id, db)
    return expense_response(expense, trip)


@router.delete("/{trip_id}/{expense_id}")
async def delete_expense(
    trip_id: int,
    expense_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete an expense."""
    check_trip_role(trip_id, current_user.id, CONTRIBUTOR_ROLES, db)
    expense = get_expense_or_404(trip_id, expense_id, db)

    db.delete(expense)
    db.commit()

    return {"message": "Expense deleted successfully"}
