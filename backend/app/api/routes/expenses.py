"""
Expense management routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session, selectinload
from typing import List

from app.db.session import get_db
from app.models.expense import Expense
from app.schemas.expense import ExpenseCreate, ExpenseResponse, ExpenseShareResponse
from app.services.balance_service import split_breakdown
from app.services.expense_service import (
    create_expense_with_shares, delete_expense, load_expenses, to_record
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/expenses", tags=["expenses"])


def build_expense_response(expense: Expense) -> ExpenseResponse:
    """Build the response for a stored expense, including its split."""
    record = to_record(expense)
    return ExpenseResponse(
        id=expense.id,
        description=expense.description,
        amount=expense.amount,
        date=expense.date,
        paid_by=expense.paid_by,
        split_mode=record.split_mode,
        split_between=record.participants,
        custom_amounts=record.custom_shares,
        split=[
            ExpenseShareResponse(person=person, amount=amount)
            for person, amount in split_breakdown(record)
        ],
        created_at=expense.created_at
    )


@router.get("", response_model=List[ExpenseResponse])
async def list_expenses(db: Session = Depends(get_db)):
    """List all expenses in the order they were added."""
    return [build_expense_response(expense) for expense in load_expenses(db)]


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    expense_id: int,
    db: Session = Depends(get_db)
):
    """Get a single expense."""
    expense = db.query(Expense).options(
        selectinload(Expense.shares)
    ).filter(Expense.id == expense_id).first()

    if not expense:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Expense not found"
        )

    return build_expense_response(expense)


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_data: ExpenseCreate,
    db: Session = Depends(get_db)
):
    """Create a new expense."""
    try:
        expense = create_expense_with_shares(
            description=expense_data.description,
            amount=expense_data.amount,
            paid_by=expense_data.paid_by,
            split_between=expense_data.split_between,
            split_mode=expense_data.split_mode,
            custom_amounts=expense_data.custom_amounts,
            expense_date=expense_data.date,
            db=db
        )
    except ValueError as e:
        logger.warning(f"Rejected expense: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    return build_expense_response(expense)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_expense(
    expense_id: int,
    db: Session = Depends(get_db)
):
    """Delete an expense."""
    try:
        delete_expense(expense_id, db)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)
