"""
Pydantic schemas for Settlement results.
"""
from pydantic import BaseModel
from typing import List
from decimal import Decimal


class BalanceResponse(BaseModel):
    """One member's line in the ledger."""
    user_id: int
    display_name: str
    paid: Decimal
    share: Decimal
    balance: Decimal  # positive = is owed, negative = owes


class TransferResponse(BaseModel):
    """Schema for a single suggested transfer."""
    from_user_id: int
    from_username: str
    to_user_id: int
    to_username: str
    amount: Decimal


class SettlementResponse(BaseModel):
    """Schema for a freshly computed settlement."""
    trip_id: int
    base_currency: str
    total_cost: Decimal
    average_share: Decimal
    member_count: int
    balances: List[BalanceResponse]
    transfers: List[TransferResponse]
    summary: str
