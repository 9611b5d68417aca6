"""
Pydantic schemas for itinerary entries.
"""
from pydantic import BaseModel, Field, model_validator
from typing import List, Literal, Optional
from datetime import date as dt_date, datetime, time
from decimal import Decimal

Period = Literal["morning", "afternoon", "evening"]
ActivityType = Literal["sightseeing", "meal", "transport", "shopping", "accommodation", "other"]


class ItineraryBase(BaseModel):
    """Fields shared by create and update."""
    activity_name: str = Field(min_length=1, max_length=200)
    activity_type: ActivityType = "sightseeing"
    location: Optional[str] = None
    transportation: Optional[str] = None
    transport_time: Optional[int] = Field(default=None, ge=0)
    activity_cost: Optional[Decimal] = Field(default=None, ge=0)
    review_rating: Optional[int] = Field(default=None, ge=1, le=5)
    review_text: Optional[str] = None
    order_index: int = 0


class ItineraryCreate(ItineraryBase):
    """
    Schema for itinerary creation.
    Either give ``start_time`` explicitly or just a ``period``; the latter gets
    the period's canonical time window.
    """
    trip_day: int = Field(ge=1)
    period: Optional[Period] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    duration_minutes: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_time_source(self):
        if self.start_time is None and self.period is None:
            raise ValueError("Either start_time or period is required")
        return self


class ItineraryUpdate(BaseModel):
    """Schema for itinerary update."""
    activity_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    activity_type: Optional[ActivityType] = None
    trip_day: Optional[int] = Field(default=None, ge=1)
    period: Optional[Period] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    duration_minutes: Optional[int] = Field(default=None, ge=0)
    location: Optional[str] = None
    transportation: Optional[str] = None
    transport_time: Optional[int] = Field(default=None, ge=0)
    activity_cost: Optional[Decimal] = Field(default=None, ge=0)
    review_rating: Optional[int] = Field(default=None, ge=1, le=5)
    review_text: Optional[str] = None
    order_index: Optional[int] = None


class ItineraryResponse(ItineraryBase):
    """Schema for itinerary response."""
    id: int
    trip_id: int
    trip_day: int
    start_time: time
    end_time: time
    period: Period
    created_at: datetime

    class Config:
        from_attributes = True


class DayPlanResponse(BaseModel):
    """One day of the itinerary grouped by period."""
    trip_id: int
    trip_day: int
    date: dt_date
    morning: List[ItineraryResponse] = []
    afternoon: List[ItineraryResponse] = []
    evening: List[ItineraryResponse] = []
