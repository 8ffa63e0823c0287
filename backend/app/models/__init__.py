"""Models package - Import all models for SQLAlchemy registration."""
from app.models.person import Person
from app.models.expense import Expense, ExpenseShare

__all__ = [
    "Person",
    "Expense",
    "ExpenseShare",
]
