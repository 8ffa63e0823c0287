"""
Balance service: per-person paid / owed / net accounting.

Pure computation over a roster and a list of expense records. No database
access happens here; callers convert stored rows into ExpenseRecord first.
"""
import enum
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from app.core.utils import to_decimal

logger = logging.getLogger(__name__)

# Absolute tolerance (in money units) for treating a value as zero.
SETTLEMENT_TOLERANCE = Decimal("0.01")


class SplitMode(str, enum.Enum):
    """How an expense is divided between its sharers."""
    EQUAL = "equal"
    CUSTOM = "custom"


@dataclass
class ExpenseRecord:
    """A single shared purchase as the engine sees it."""
    amount: Decimal
    paid_by: str
    split_mode: SplitMode = SplitMode.EQUAL
    participants: List[str] = field(default_factory=list)
    custom_shares: Optional[Dict[str, Decimal]] = None


@dataclass
class BalanceEntry:
    """Paid, owed and net position of one participant."""
    paid: Decimal = Decimal(0)
    owed: Decimal = Decimal(0)
    net: Decimal = Decimal(0)


def split_breakdown(expense: ExpenseRecord) -> List[Tuple[str, Decimal]]:
    """
    Return what each sharer owes for one expense, in sharer order.

    Equal splits divide the amount exactly (no rounding). Custom splits take
    each sharer's entry from custom_shares, defaulting to 0; entries for
    people who are not sharers are ignored. An expense with no sharers
    yields an empty list.
    """
    if not expense.participants:
        return []

    amount = to_decimal(expense.amount)
    if expense.split_mode == SplitMode.CUSTOM:
        shares = expense.custom_shares or {}
        return [
            (person, to_decimal(shares.get(person, 0)))
            for person in expense.participants
        ]

    per_person = amount / len(expense.participants)
    return [(person, per_person) for person in expense.participants]


def compute_balances(
    participants: Sequence[str],
    expenses: Iterable[ExpenseRecord]
) -> Dict[str, BalanceEntry]:
    """
    Compute paid, owed and net for every roster participant.

    The returned dict has exactly one entry per participant, in roster order.
    Payers or sharers that are not on the roster are skipped silently, so
    expenses that still reference a removed person never raise.
    """
    balances: Dict[str, BalanceEntry] = {person: BalanceEntry() for person in participants}

    for expense in expenses:
        payer = balances.get(expense.paid_by)
        if payer is not None:
            payer.paid += to_decimal(expense.amount)
        else:
            logger.debug(f"Skipping paid amount for unknown payer '{expense.paid_by}'")

        for person, share in split_breakdown(expense):
            entry = balances.get(person)
            if entry is None:
                logger.debug(f"Skipping owed share for unknown participant '{person}'")
                continue
            entry.owed += share

    for entry in balances.values():
        entry.net = entry.paid - entry.owed

    return balances


def total_spending(expenses: Iterable[ExpenseRecord]) -> Decimal:
    """Sum of all expense amounts."""
    return sum((to_decimal(e.amount) for e in expenses), Decimal(0))


def balance_status(entry: BalanceEntry) -> str:
    """Classify a balance as 'is_owed', 'owes' or 'settled'."""
    if entry.net > SETTLEMENT_TOLERANCE:
        return "is_owed"
    if entry.net < -SETTLEMENT_TOLERANCE:
        return "owes"
    return "settled"
