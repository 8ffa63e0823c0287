"""
Pydantic schemas for Expense entity.
"""
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Dict, List, Optional
from datetime import date as dt_date, datetime
from decimal import Decimal
from app.core.utils import normalize_name, quantize_money
from app.services.balance_service import SETTLEMENT_TOLERANCE, SplitMode


def is_whole_cents(value: Decimal) -> bool:
    """True when the value has no digits beyond the second decimal place."""
    return value == quantize_money(value)


class ExpenseCreate(BaseModel):
    """Schema for expense creation."""
    description: str
    amount: Decimal
    date: Optional[dt_date] = None  # Defaults to today
    paid_by: str
    split_mode: SplitMode = SplitMode.EQUAL
    split_between: List[str]  # People who share this expense
    custom_amounts: Optional[Dict[str, Decimal]] = None  # Required for custom splits

    @field_validator("description")
    @classmethod
    def check_description(cls, v: str) -> str:
        description = normalize_name(v)
        if not description:
            raise ValueError("Please enter a description")
        return description

    @field_validator("amount")
    @classmethod
    def check_amount(cls, v: Decimal) -> Decimal:
        if not v > 0 or not is_whole_cents(v):
            raise ValueError("Please enter a valid amount")
        return v

    @field_validator("paid_by")
    @classmethod
    def check_paid_by(cls, v: str) -> str:
        name = normalize_name(v)
        if not name:
            raise ValueError("Please select who paid")
        return name

    @field_validator("split_between")
    @classmethod
    def check_split_between(cls, v: List[str]) -> List[str]:
        names = [normalize_name(name) for name in v]
        if not names:
            raise ValueError("Select at least one person to split with")
        if not all(names):
            raise ValueError("Participant names must not be empty")
        if len(set(names)) != len(names):
            raise ValueError("Each person can only be selected once")
        return names

    @field_validator("custom_amounts")
    @classmethod
    def check_custom_amount_values(cls, v: Optional[Dict[str, Decimal]]) -> Optional[Dict[str, Decimal]]:
        if v is None:
            return v
        amounts = {normalize_name(name): value for name, value in v.items()}
        if any(value < 0 for value in amounts.values()):
            raise ValueError("Custom amounts cannot be negative")
        # Stored as Numeric(15, 2); finer amounts would be rounded away
        if not all(is_whole_cents(value) for value in amounts.values()):
            raise ValueError("Custom amounts can have at most 2 decimal places")
        return amounts

    @model_validator(mode="after")
    def check_custom_amounts(self):
        """Custom amounts must add up to the expense amount."""
        if self.split_mode != SplitMode.CUSTOM:
            self.custom_amounts = None
            return self

        amounts = self.custom_amounts or {}
        total = sum((amounts.get(person, Decimal(0)) for person in self.split_between), Decimal(0))
        if abs(total - self.amount) > SETTLEMENT_TOLERANCE:
            raise ValueError(f"Custom amounts must total {self.amount:.2f}")
        self.custom_amounts = {
            person: amounts.get(person, Decimal(0)) for person in self.split_between
        }
        return self


class ExpenseShareResponse(BaseModel):
    """One sharer's part of an expense."""
    person: str
    amount: Decimal


class ExpenseResponse(BaseModel):
    """Schema for expense response."""
    id: int
    description: str
    amount: Decimal
    date: dt_date
    paid_by: str
    split_mode: SplitMode
    split_between: List[str]
    custom_amounts: Optional[Dict[str, Decimal]] = None
    split: List[ExpenseShareResponse] = Field(default_factory=list)
    created_at: datetime
