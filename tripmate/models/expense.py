"""
Expense model for shared spending.
"""
from sqlalchemy import Column, Numeric, Date, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from tripmate.db.base import BaseModel


class Expense(BaseModel):
    """Expense model representing a single payment fronted by one member."""
    __tablename__ = "expenses"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    payer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    amount = Column(Numeric(15, 2), nullable=False)  # In the trip's base currency
    description = Column(Text, nullable=False)

    # Relationships
    trip = relationship("Trip", back_populates="expenses")
    payer = relationship("User", foreign_keys=[payer_id], back_populates="expenses_paid")
