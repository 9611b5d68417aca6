"""
Packing list routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from tripmate.db.session import get_db
from tripmate.models.user import User
from tripmate.models.packing import PackingItem, PackingCategory
from tripmate.schemas.packing import (
    PackingItemCreate, PackingItemResponse, PackingBoardResponse,
    MemberPackingResponse, PersonalityUpdate, CheckToggleResponse
)
from tripmate.schemas.trip import TripMemberResponse
from tripmate.services.packing_service import toggle_claim, toggle_check, checked_items_by_user
from tripmate.services.trip_service import get_membership
from tripmate.api.dependencies import get_current_user
from tripmate.api.routes.trips import check_trip_access, check_trip_role, member_response, CONTRIBUTOR_ROLES

router = APIRouter(prefix="/packing", tags=["packing"])


def get_item_or_404(trip_id: int, item_id: int, db: Session) -> PackingItem:
    item = db.query(PackingItem).filter(
        PackingItem.id == item_id,
        PackingItem.trip_id == trip_id
    ).first()
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Packing item not found"
        )
    return item


def get_member_or_404(trip_id: int, user_id: int, db: Session):
    member = get_membership(trip_id, user_id, db)
    if not member:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Member not found"
        )
    return member


def item_response(item: PackingItem) -> PackingItemResponse:
    return PackingItemResponse(
        id=item.id,
        trip_id=item.trip_id,
        item_name=item.item_name,
        category=item.category,
        claimed_by=item.claimed_by,
        claimed_by_username=item.claimer.username if item.claimer else None
    )


@router.get("/{trip_id}", response_model=PackingBoardResponse)
async def get_packing_board(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get shared gear, personal items and every member's progress."""
    trip = check_trip_access(trip_id, current_user.id, db)

    items = db.query(PackingItem).filter(
        PackingItem.trip_id == trip_id
    ).order_by(PackingItem.id.asc()).all()
    checked = checked_items_by_user(trip_id, db)

    return PackingBoardResponse(
        trip_id=trip_id,
        public_items=[item_response(i) for i in items if i.category == PackingCategory.PUBLIC],
        personal_items=[item_response(i) for i in items if i.category == PackingCategory.PERSONAL],
        members=[
            MemberPackingResponse(
                user_id=m.user_id,
                username=m.user.username if m.user else "Unknown",
                personality=m.personality,
                checked_item_ids=checked.get(m.user_id, [])
            )
            for m in trip.members
        ]
    )


@router.post("/{trip_id}/items", response_model=PackingItemResponse, status_code=status.HTTP_201_CREATED)
async def add_item(
    trip_id: int,
    item_data: PackingItemCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add an item to the packing list."""
    check_trip_role(trip_id, current_user.id, CONTRIBUTOR_ROLES, db)

    item = PackingItem(trip_id=trip_id, item_name=item_data.item_name, category=item_data.category)
    db.add(item)
    db.commit()
    db.refresh(item)

    return item_response(item)


@router.delete("/{trip_id}/items/{item_id}")
async def delete_item(
    trip_id: int,
    item_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete an item along with everyone's checks for it."""
    check_trip_role(trip_id, current_user.id, CONTRIBUTOR_ROLES, db)
    item = get_item_or_404(trip_id, item_id, db)

    db.delete(item)
    db.commit()

    return {"message": "Packing item deleted successfully"}


@router.post("/{trip_id}/items/{item_id}/claim", response_model=PackingItemResponse)
async def claim_item(
    trip_id: int,
    item_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Claim a public item, or release your own claim."""
    check_trip_role(trip_id, current_user.id, CONTRIBUTOR_ROLES, db)
    item = get_item_or_404(trip_id, item_id, db)

    return item_response(toggle_claim(item, current_user.id, db))


@router.post("/{trip_id}/items/{item_id}/check/{user_id}", response_model=CheckToggleResponse)
async def check_item(
    trip_id: int,
    item_id: int,
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Tick or untick a personal item for a member. Teammates may tick for each other."""
    check_trip_role(trip_id, current_user.id, CONTRIBUTOR_ROLES, db)
    item = get_item_or_404(trip_id, item_id, db)
    get_member_or_404(trip_id, user_id, db)

    checked = toggle_check(item, user_id, db)
    return CheckToggleResponse(item_id=item_id, user_id=user_id, checked=checked)


@router.put("/{trip_id}/members/{user_id}/personality", response_model=TripMemberResponse)
async def set_personality(
    trip_id: int,
    user_id: int,
    update: PersonalityUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Switch a member between P and J packing mode."""
    check_trip_access(trip_id, current_user.id, db)
    member = get_member_or_404(trip_id, user_id, db)

    member.personality = update.personality
    db.commit()
    db.refresh(member)

    return member_response(member, current_user.id)
