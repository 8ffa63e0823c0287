"""
Expense service for expense-related business logic.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional
from sqlalchemy.orm import Session, selectinload
from app.models.expense import Expense, ExpenseShare
from app.models.person import Person
from app.services.balance_service import ExpenseRecord, SplitMode

logger = logging.getLogger(__name__)


def load_roster(db: Session) -> List[str]:
    """Return participant names in roster (insertion) order."""
    return [name for (name,) in db.query(Person.name).order_by(Person.id).all()]


def load_expenses(db: Session) -> List[Expense]:
    """Return all stored expenses in creation order with their shares."""
    return db.query(Expense).options(
        selectinload(Expense.shares)
    ).order_by(Expense.id).all()


def to_record(expense: Expense) -> ExpenseRecord:
    """Convert a stored expense into the engine's input shape."""
    participants = [share.person_name for share in expense.shares]
    custom_shares = None
    if expense.split_mode == SplitMode.CUSTOM:
        custom_shares = {
            share.person_name: share.custom_amount
            for share in expense.shares
            if share.custom_amount is not None
        }
    return ExpenseRecord(
        amount=Decimal(expense.amount),
        paid_by=expense.paid_by,
        split_mode=SplitMode(expense.split_mode),
        participants=participants,
        custom_shares=custom_shares
    )


def load_expense_records(db: Session) -> List[ExpenseRecord]:
    """Return every stored expense as an ExpenseRecord, in input order."""
    return [to_record(expense) for expense in load_expenses(db)]


def create_expense_with_shares(
    description: str,
    amount: Decimal,
    paid_by: str,
    split_between: List[str],
    split_mode: SplitMode = SplitMode.EQUAL,
    custom_amounts: Optional[Dict[str, Decimal]] = None,
    expense_date: Optional[date] = None,
    db: Session = None
) -> Expense:
    """
    Create an expense with its sharers.

    The payer and every sharer must be on the current roster. Custom amounts
    for people outside split_between are dropped.
    """
    roster = set(load_roster(db))
    if paid_by not in roster:
        raise ValueError(f"Unknown payer: {paid_by}")
    unknown = [person for person in split_between if person not in roster]
    if unknown:
        raise ValueError(f"Unknown participants: {', '.join(unknown)}")

    expense = Expense(
        description=description,
        amount=amount,
        date=expense_date or date.today(),
        paid_by=paid_by,
        split_mode=split_mode
    )
    db.add(expense)
    db.flush()

    shares = custom_amounts or {}
    for position, person in enumerate(split_between):
        custom_amount = None
        if split_mode == SplitMode.CUSTOM:
            custom_amount = shares.get(person, Decimal(0))
        db.add(ExpenseShare(
            expense_id=expense.id,
            person_name=person,
            position=position,
            custom_amount=custom_amount
        ))

    db.commit()
    db.refresh(expense)

    logger.info(f"Created expense {expense.id} '{description}' paid by {paid_by} for {amount}")
    return expense


def delete_expense(expense_id: int, db: Session):
    """Delete an expense and its shares."""
    expense = db.query(Expense).filter(Expense.id == expense_id).first()
    if not expense:
        raise ValueError("Expense not found")

    db.delete(expense)
    db.commit()
    logger.info(f"Deleted expense {expense_id}")
