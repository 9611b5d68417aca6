"""
Itinerary model for day-by-day trip plans.
"""
from sqlalchemy import Column, String, Time, Numeric, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from tripmate.db.base import BaseModel


class ItineraryItem(BaseModel):
    """A single activity on one day of a trip."""
    __tablename__ = "itinerary_details"

    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    trip_day = Column(Integer, nullable=False, index=True)  # 1-indexed day of the trip
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    activity_type = Column(String(30), nullable=False, default="sightseeing")
    activity_name = Column(String(200), nullable=False)
    location = Column(String(200), nullable=True)
    transportation = Column(String(100), nullable=True)
    transport_time = Column(Integer, nullable=True)  # minutes
    activity_cost = Column(Numeric(15, 2), nullable=True)
    review_rating = Column(Integer, nullable=True)
    review_text = Column(Text, nullable=True)
    order_index = Column(Integer, nullable=False, default=0)

    # Relationships
    trip = relationship("Trip", back_populates="itinerary_items")
