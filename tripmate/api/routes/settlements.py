"""
Settlement routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session, joinedload
from tripmate.db.session import get_db
from tripmate.models.user import User
from tripmate.models.trip import TripMember
from tripmate.models.expense import Expense
from tripmate.core.utils import quantize_money
from tripmate.schemas.settlement import SettlementResponse, BalanceResponse, TransferResponse
from tripmate.services.settlement_service import (
    members_from_rows, expenses_from_rows, compute_settlement, suggest_transfers, format_summary
)
from tripmate.api.dependencies import get_current_user
from tripmate.api.routes.trips import check_trip_access

router = APIRouter(prefix="/settlement", tags=["settlement"])


@router.get("/{trip_id}", response_model=SettlementResponse)
async def get_settlement(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Compute the even-split settlement from the current members and expenses.
    Nothing is stored; every call recomputes from fresh rows.
    """
    trip = check_trip_access(trip_id, current_user.id, db)

    member_rows = db.query(TripMember).options(joinedload(TripMember.user)).filter(
        TripMember.trip_id == trip_id
    ).order_by(TripMember.id.asc()).all()
    expense_rows = db.query(Expense).filter(Expense.trip_id == trip_id).all()

    members = members_from_rows(
        {"user_id": m.user_id, "username": m.user.username if m.user else None}
        for m in member_rows
    )
    expenses = expenses_from_rows(
        {"payer_id": e.payer_id, "amount": e.amount} for e in expense_rows
    )

    settlement = compute_settlement(members, expenses)
    names = {m.user_id: m.display_name for m in members}

    return SettlementResponse(
        trip_id=trip_id,
        base_currency=trip.base_currency,
        total_cost=quantize_money(settlement.total_cost),
        average_share=quantize_money(settlement.average_share),
        member_count=settlement.member_count,
        balances=[
            BalanceResponse(
                user_id=b.user_id,
                display_name=b.display_name,
                paid=quantize_money(b.paid),
                share=quantize_money(b.share),
                balance=quantize_money(b.balance)
            )
            for b in settlement.balances
        ],
        transfers=[
            TransferResponse(
                from_user_id=t.from_user_id,
                from_username=names.get(t.from_user_id, "Unknown"),
                to_user_id=t.to_user_id,
                to_username=names.get(t.to_user_id, "Unknown"),
                amount=quantize_money(t.amount)
            )
            for t in suggest_transfers(settlement.balances)
        ],
        summary=format_summary(settlement, trip.base_currency)
    )
