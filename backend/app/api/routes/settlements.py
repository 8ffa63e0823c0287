"""
Settlement routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Dict, List, Mapping
from app.core.config import settings
from app.core.utils import quantize_money
from app.db.session import get_db
from app.schemas.settlement import (
    BalanceEntryResponse, BalanceSummary, CalculationRequest, Transfer
)
from app.services.balance_service import (
    BalanceEntry, ExpenseRecord, balance_status, compute_balances, total_spending
)
from app.services.settlement_service import (
    SettlementTransfer, build_summary, calculate_settlement, simplify
)

router = APIRouter(prefix="/settlements", tags=["settlements"])


def to_money(value):
    """Round a value for presentation."""
    return quantize_money(value, settings.MONEY_DECIMAL_PLACES)


def build_transfers(transfers: List[SettlementTransfer]) -> List[Transfer]:
    """Convert engine transfers into response schemas."""
    return [
        Transfer(
            from_person=t.from_person,
            to_person=t.to_person,
            amount=to_money(t.amount)
        )
        for t in transfers
    ]


def build_balance_summary(
    balances: Mapping[str, BalanceEntry],
    transfers: List[SettlementTransfer],
    total
) -> BalanceSummary:
    """Build the full balance overview response."""
    return BalanceSummary(
        total_spending=to_money(total),
        currency_symbol=settings.CURRENCY_SYMBOL,
        balances=[
            BalanceEntryResponse(
                person=person,
                paid=to_money(entry.paid),
                owed=to_money(entry.owed),
                net=to_money(entry.net),
                status=balance_status(entry)
            )
            for person, entry in balances.items()
        ],
        transfers=build_transfers(transfers),
        summary=build_summary(balances, transfers, total, settings.CURRENCY_SYMBOL)
    )


@router.get("", response_model=List[Transfer])
async def get_settlements(db: Session = Depends(get_db)):
    """Get suggested transfers that settle the group."""
    result = calculate_settlement(db)
    return build_transfers(result.transfers)


@router.post("/calculate", response_model=BalanceSummary)
async def calculate(request: CalculationRequest):
    """Calculate balances and transfers for the given people and expenses without storing anything."""
    records = [
        ExpenseRecord(
            amount=item.amount,
            paid_by=item.paid_by,
            split_mode=item.split_mode,
            participants=item.participants,
            custom_shares=item.custom_shares
        )
        for item in request.expenses
    ]
    balances: Dict[str, BalanceEntry] = compute_balances(request.people, records)
    transfers = simplify(balances)
    return build_balance_summary(balances, transfers, total_spending(records))
