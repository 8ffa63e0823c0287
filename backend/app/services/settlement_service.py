"""
Settlement service for suggesting who pays whom.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Mapping

from sqlalchemy.orm import Session

from app.core.utils import format_money
from app.services.balance_service import (
    SETTLEMENT_TOLERANCE, BalanceEntry, compute_balances, total_spending
)
from app.services.expense_service import load_expense_records, load_roster

logger = logging.getLogger(__name__)


@dataclass
class SettlementTransfer:
    """Represents a single payment from a debtor to a creditor."""
    from_person: str
    to_person: str
    amount: Decimal


@dataclass
class SettlementCalculation:
    """Everything a caller needs to present the current group state."""
    balances: Dict[str, BalanceEntry]
    transfers: List[SettlementTransfer]
    total_spending: Decimal


def simplify(balances: Mapping[str, BalanceEntry]) -> List[SettlementTransfer]:
    """
    Reduce net balances to a short list of transfers using a greedy algorithm.

    Largest creditor is matched against largest debtor until one side runs
    out. Equal amounts keep the mapping's iteration (roster) order. Balances
    within SETTLEMENT_TOLERANCE of zero are treated as settled.
    """
    # (person, amount, roster index); debtors stored as positive amounts
    creditors = []
    debtors = []
    for index, (person, entry) in enumerate(balances.items()):
        if entry.net > SETTLEMENT_TOLERANCE:
            creditors.append((person, entry.net, index))
        elif entry.net < -SETTLEMENT_TOLERANCE:
            debtors.append((person, -entry.net, index))

    # Sort in descending order, roster index breaks ties
    creditors.sort(key=lambda x: (-x[1], x[2]))
    debtors.sort(key=lambda x: (-x[1], x[2]))

    transfers = []
    cred_idx = 0
    debt_idx = 0

    while cred_idx < len(creditors) and debt_idx < len(debtors):
        creditor, cred_amount, cred_index = creditors[cred_idx]
        debtor, debt_amount, debt_index = debtors[debt_idx]

        # Transfer the minimum of what's owed and what's needed
        transfer_amount = min(cred_amount, debt_amount)
        if transfer_amount > SETTLEMENT_TOLERANCE:
            transfers.append(SettlementTransfer(debtor, creditor, transfer_amount))

        creditors[cred_idx] = (creditor, cred_amount - transfer_amount, cred_index)
        debtors[debt_idx] = (debtor, debt_amount - transfer_amount, debt_index)

        if creditors[cred_idx][1] < SETTLEMENT_TOLERANCE:
            cred_idx += 1
        if debtors[debt_idx][1] < SETTLEMENT_TOLERANCE:
            debt_idx += 1

    leftover = creditors[cred_idx:] + debtors[debt_idx:]
    if leftover:
        logger.debug(
            f"Unbalanced input: {len(leftover)} participant(s) left unsettled "
            f"({', '.join(item[0] for item in leftover)})"
        )

    return transfers


def apply_transfers(
    balances: Mapping[str, BalanceEntry],
    transfers: List[SettlementTransfer]
) -> Dict[str, Decimal]:
    """
    Replay transfers against a copy of the net balances.

    Paying moves the debtor up and the creditor down, so a complete
    settlement leaves every net within tolerance of zero.
    """
    running = {person: entry.net for person, entry in balances.items()}
    for transfer in transfers:
        running[transfer.from_person] = running.get(transfer.from_person, Decimal(0)) + transfer.amount
        running[transfer.to_person] = running.get(transfer.to_person, Decimal(0)) - transfer.amount
    return running


def build_summary(
    balances: Mapping[str, BalanceEntry],
    transfers: List[SettlementTransfer],
    total: Decimal,
    currency_symbol: str = "$"
) -> str:
    """Create a plain-text summary of balances and suggested transfers."""
    summary_lines = []
    summary_lines.append(f"Total expenses: {currency_symbol}{format_money(total)}")
    summary_lines.append(f"Participants: {len(balances)}")
    summary_lines.append("\nNet balances:")
    for person, entry in balances.items():
        summary_lines.append(f"  {person}: {format_money(entry.net, signed=True)}")
    summary_lines.append("\nTransfers:")
    if not transfers:
        summary_lines.append("  Everyone is settled up")
    for transfer in transfers:
        summary_lines.append(
            f"  {transfer.from_person} -> {transfer.to_person}: "
            f"{currency_symbol}{format_money(transfer.amount)}"
        )
    return "\n".join(summary_lines)


def calculate_settlement(db: Session) -> SettlementCalculation:
    """
    Load the stored roster and expenses and run the balance engine on them.

    Nothing is persisted: the result is rebuilt on every call.
    """
    roster = load_roster(db)
    records = load_expense_records(db)

    balances = compute_balances(roster, records)
    transfers = simplify(balances)

    logger.info(
        f"Calculated settlement for {len(roster)} people and {len(records)} expenses: "
        f"{len(transfers)} transfer(s)"
    )
    return SettlementCalculation(
        balances=balances,
        transfers=transfers,
        total_spending=total_spending(records)
    )
