"""
Pydantic schemas for Trip and membership entities.
"""
from pydantic import BaseModel, Field, model_validator
from typing import List, Optional
from datetime import date, datetime
from tripmate.models.trip import MemberRole, Personality


class TripBase(BaseModel):
    """Base trip schema."""
    trip_name: str = Field(min_length=1, max_length=200)
    start_date: date
    end_date: date


class TripCreate(TripBase):
    """Schema for trip creation."""
    base_currency: Optional[str] = Field(default=None, min_length=3, max_length=3)

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class TripUpdate(BaseModel):
    """Schema for trip update."""
    trip_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    base_currency: Optional[str] = Field(default=None, min_length=3, max_length=3)


class TripResponse(TripBase):
    """Schema for trip response."""
    id: int
    total_days: int
    base_currency: str
    created_by: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TripCardResponse(TripResponse):
    """Trip as shown on the dashboard: stable cover image and countdown."""
    cover_image_url: str
    countdown_status: str  # ended / today / upcoming
    days_until: Optional[int] = None


class TripMemberResponse(BaseModel):
    """Schema for trip member response."""
    user_id: int
    username: str
    avatar_url: Optional[str] = None
    role: MemberRole
    personality: Personality
    is_me: bool = False


class TripDetailResponse(TripResponse):
    """Schema for detailed trip response with members."""
    cover_image_url: str
    members: List[TripMemberResponse] = []


class InviteLinkResponse(BaseModel):
    """Shareable invitation link for a trip."""
    trip_id: int
    invite_link: str


class JoinPreviewResponse(BaseModel):
    """What a user sees before accepting an invite."""
    trip_id: int
    trip_name: str
    already_member: bool


class JoinResponse(BaseModel):
    """Result of joining a trip."""
    trip_id: int
    joined: bool  # False when the user was already a member
    role: MemberRole
