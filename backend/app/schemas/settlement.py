"""
Pydantic schemas for balances and settlements.
"""
from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from decimal import Decimal
from app.services.balance_service import SplitMode


class Transfer(BaseModel):
    """Schema for a single transfer in settlement."""
    from_person: str
    to_person: str
    amount: Decimal


class BalanceEntryResponse(BaseModel):
    """Schema for one person's balance."""
    person: str
    paid: Decimal
    owed: Decimal
    net: Decimal  # positive = is owed, negative = owes
    status: str  # "is_owed", "owes" or "settled"


class BalanceSummary(BaseModel):
    """Schema for the group balance overview."""
    total_spending: Decimal
    currency_symbol: str
    balances: List[BalanceEntryResponse]
    transfers: List[Transfer]
    summary: str


class ExpenseInput(BaseModel):
    """Expense in the engine's own shape, for stateless calculation."""
    amount: Decimal
    paid_by: str
    split_mode: SplitMode = SplitMode.EQUAL
    participants: List[str] = Field(default_factory=list)
    custom_shares: Optional[Dict[str, Decimal]] = None


class CalculationRequest(BaseModel):
    """Schema for a stateless balance and settlement calculation."""
    people: List[str]
    expenses: List[ExpenseInput] = Field(default_factory=list)
