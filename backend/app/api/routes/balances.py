"""
Balance overview routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.schemas.settlement import BalanceSummary
from app.services.settlement_service import calculate_settlement
from app.api.routes.settlements import build_balance_summary

router = APIRouter(prefix="/balances", tags=["balances"])


@router.get("", response_model=BalanceSummary)
async def get_balances(db: Session = Depends(get_db)):
    """Get every person's balance, the total spent and suggested settlements."""
    result = calculate_settlement(db)
    return build_balance_summary(result.balances, result.transfers, result.total_spending)
