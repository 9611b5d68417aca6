"""
User model for authentication and member profiles.
"""
from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship
from tripmate.db.base import BaseModel


class User(BaseModel):
    """User model with immutable username."""
    __tablename__ = "users"

    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    avatar_url = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    memberships = relationship("TripMember", back_populates="user", cascade="all, delete-orphan")
    expenses_paid = relationship("Expense", foreign_keys="Expense.payer_id", back_populates="payer")
    packing_checks = relationship("PackingCheck", back_populates="user", cascade="all, delete-orphan")
