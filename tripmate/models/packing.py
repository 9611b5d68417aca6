"""
Packing list models: shared checklist items and per-member checks.
"""
from sqlalchemy import Column, String, Enum as SQLEnum, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from tripmate.db.base import BaseModel
import enum


class PackingCategory(str, enum.Enum):
    """Personal items are brought by everyone; public items by one claimer."""
    PERSONAL = "personal"
    PUBLIC = "public"


class PackingItem(BaseModel):
    """Packing list entry for a trip."""
    __tablename__ = "packing_items"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    item_name = Column(String(200), nullable=False)
    category = Column(SQLEnum(PackingCategory), default=PackingCategory.PERSONAL, nullable=False)
    claimed_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    # Relationships
    trip = relationship("Trip", back_populates="packing_items")
    claimer = relationship("User", foreign_keys=[claimed_by])
    checks = relationship("PackingCheck", back_populates="item", cascade="all, delete-orphan")


class PackingCheck(BaseModel):
    """Marks a personal item as packed by one member."""
    __tablename__ = "packing_checks"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("packing_items.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    item = relationship("PackingItem", back_populates="checks")
    user = relationship("User", back_populates="packing_checks")

    __table_args__ = (
        UniqueConstraint("item_id", "user_id", name="uq_packing_check"),
    )
