"""
Pydantic schemas for the packing list.
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from tripmate.models.packing import PackingCategory
from tripmate.models.trip import Personality


class PackingItemCreate(BaseModel):
    """Schema for adding an item."""
    item_name: str = Field(max_length=200)
    category: PackingCategory = PackingCategory.PERSONAL

    @field_validator("item_name")
    @classmethod
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("item_name must not be blank")
        return v


class PackingItemResponse(BaseModel):
    """Schema for packing item response."""
    id: int
    trip_id: int
    item_name: str
    category: PackingCategory
    claimed_by: Optional[int] = None
    claimed_by_username: Optional[str] = None


class PersonalityUpdate(BaseModel):
    personality: Personality


class MemberPackingResponse(BaseModel):
    """A member's column on the board: personality and packed personal items."""
    user_id: int
    username: str
    personality: Personality
    checked_item_ids: List[int] = []


class PackingBoardResponse(BaseModel):
    """Whole packing list for a trip."""
    trip_id: int
    public_items: List[PackingItemResponse] = []
    personal_items: List[PackingItemResponse] = []
    members: List[MemberPackingResponse] = []


class CheckToggleResponse(BaseModel):
    item_id: int
    user_id: int
    checked: bool
