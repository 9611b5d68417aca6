"""Models package - Import all models for SQLAlchemy registration."""
from tripmate.models.user import User
from tripmate.models.trip import Trip, TripMember, MemberRole, Personality
from tripmate.models.expense import Expense
from tripmate.models.itinerary import ItineraryItem
from tripmate.models.packing import PackingItem, PackingCheck, PackingCategory

__all__ = [
    "User",
    "Trip",
    "TripMember",
    "MemberRole",
    "Personality",
    "Expense",
    "ItineraryItem",
    "PackingItem",
    "PackingCheck",
    "PackingCategory",
]
