"""
Expense model for tracking shared spending.
"""
from sqlalchemy import Column, String, Numeric, Date, ForeignKey, Integer, Text, Enum as SQLEnum
from sqlalchemy.orm import relationship
from app.db.base import BaseModel
from app.services.balance_service import SplitMode


class Expense(BaseModel):
    """Expense model representing a single shared purchase."""
    __tablename__ = "expenses"

    description = Column(Text, nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)
    date = Column(Date, nullable=False, index=True)
    # Person name rather than a foreign key: removing someone from the
    # roster keeps their expenses as stale references.
    paid_by = Column(String(100), nullable=False, index=True)
    split_mode = Column(SQLEnum(SplitMode), default=SplitMode.EQUAL, nullable=False)

    # Relationships
    shares = relationship(
        "ExpenseShare",
        back_populates="expense",
        cascade="all, delete-orphan",
        order_by="ExpenseShare.position"
    )


class ExpenseShare(BaseModel):
    """One sharer of an expense, with their custom amount for custom splits."""
    __tablename__ = "expense_shares"

    expense_id = Column(Integer, ForeignKey("expenses.id"), nullable=False, index=True)
    person_name = Column(String(100), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)  # Order within the sharer list
    custom_amount = Column(Numeric(15, 2), nullable=True)  # Only set for custom splits

    # Relationships
    expense = relationship("Expense", back_populates="shares")
