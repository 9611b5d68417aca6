"""
Pydantic schemas for Expense entity.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date as dt_date, datetime
from decimal import Decimal


class ExpenseBase(BaseModel):
    """Base expense schema."""
    description: str = Field(min_length=1)
    amount: Decimal = Field(gt=0, max_digits=15, decimal_places=2, allow_inf_nan=False)


class ExpenseCreate(ExpenseBase):
    """Schema for expense creation. Payer defaults to the current user, date to today."""
    payer_id: Optional[int] = None
    date: Optional[dt_date] = None


class ExpenseUpdate(BaseModel):
    """Schema for expense update."""
    description: Optional[str] = Field(default=None, min_length=1)
    amount: Optional[Decimal] = Field(default=None, gt=0, max_digits=15, decimal_places=2, allow_inf_nan=False)
    payer_id: Optional[int] = None
    date: Optional[dt_date] = None


class ExpenseResponse(ExpenseBase):
    """Schema for expense response."""
    id: int
    trip_id: int
    payer_id: int
    payer_username: str
    date: dt_date
    base_currency: str
    created_at: datetime
