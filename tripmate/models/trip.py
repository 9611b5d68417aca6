"""
Trip and membership models for group travel planning.
"""
from sqlalchemy import Column, String, Date, Integer, Enum as SQLEnum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from tripmate.db.base import BaseModel
import enum


class MemberRole(str, enum.Enum):
    """Role of a member within a trip."""
    OWNER = "owner"
    PLANNER = "planner"
    MEMBER = "member"
    VIEWER = "viewer"


class Personality(str, enum.Enum):
    """Packing personality: P members get their luggage double-checked."""
    P = "P"
    J = "J"


class Trip(BaseModel):
    """Trip model representing a group travel plan."""
    __tablename__ = "trips"

    trip_name = Column(String(200), nullable=False)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False, index=True)
    total_days = Column(Integer, nullable=False, default=1)
    base_currency = Column(String(3), nullable=False, default="TWD")
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    creator = relationship("User", foreign_keys=[created_by])
    members = relationship(
        "TripMember", back_populates="trip", cascade="all, delete-orphan",
        order_by="TripMember.id"
    )
    expenses = relationship("Expense", back_populates="trip", cascade="all, delete-orphan")
    itinerary_items = relationship("ItineraryItem", back_populates="trip", cascade="all, delete-orphan")
    packing_items = relationship("PackingItem", back_populates="trip", cascade="all, delete-orphan")


class TripMember(BaseModel):
    """Junction table for Trip and User many-to-many relationship."""
    __tablename__ = "trip_members"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    role = Column(SQLEnum(MemberRole), default=MemberRole.MEMBER, nullable=False)
    personality = Column(SQLEnum(Personality), default=Personality.J, nullable=False)

    # Relationships
    trip = relationship("Trip", back_populates="members")
    user = relationship("User", back_populates="memberships")

    # A user joins a trip at most once
    __table_args__ = (
        UniqueConstraint("trip_id", "user_id", name="uq_trip_member"),
    )
