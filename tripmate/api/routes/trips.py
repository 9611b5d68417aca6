"""
Trip management routes: trips, members and invite links.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Iterable
from tripmate.core.config import settings
from tripmate.db.session import get_db
from tripmate.models.user import User
from tripmate.models.trip import Trip, TripMember, MemberRole
from tripmate.models.itinerary import ItineraryItem
from tripmate.schemas.trip import (
    TripCreate, TripUpdate, TripResponse, TripCardResponse, TripDetailResponse,
    TripMemberResponse, InviteLinkResponse, JoinPreviewResponse, JoinResponse
)
from tripmate.services.cover_service import cover_image_url
from tripmate.services.trip_service import (
    calculate_total_days, trip_countdown, invite_link, get_membership, join_trip,
    remove_membership
)
from tripmate.api.dependencies import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips", tags=["trips"])

EDITOR_ROLES = (MemberRole.OWNER, MemberRole.PLANNER)
CONTRIBUTOR_ROLES = (MemberRole.OWNER, MemberRole.PLANNER, MemberRole.MEMBER)


def get_trip_or_404(trip_id: int, db: Session) -> Trip:
    trip = db.query(Trip).filter(Trip.id == trip_id).first()
    if not trip:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Trip not found"
        )
    return trip


def check_trip_access(trip_id: int, user_id: int, db: Session) -> Trip:
    """Check if user is a member of the trip."""
    trip = get_trip_or_404(trip_id, db)

    if not get_membership(trip_id, user_id, db):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied to this trip"
        )

    return trip


def check_trip_role(trip_id: int, user_id: int, roles: Iterable[MemberRole], db: Session) -> Trip:
    """Check that the user holds one of ``roles`` in the trip."""
    trip = check_trip_access(trip_id, user_id, db)
    member = get_membership(trip_id, user_id, db)
    if member.role not in roles:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient role for this action"
        )
    return trip


def member_response(member: TripMember, current_user_id: int) -> TripMemberResponse:
    user = member.user
    return TripMemberResponse(
        user_id=member.user_id,
        username=user.username if user else "Unknown",
        avatar_url=user.avatar_url if user else None,
        role=member.role,
        personality=member.personality,
        is_me=member.user_id == current_user_id
    )


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new trip with the current user as owner."""
    base_currency = trip_data.base_currency or settings.DEFAULT_BASE_CURRENCY

    new_trip = Trip(
        trip_name=trip_data.trip_name,
        start_date=trip_data.start_date,
        end_date=trip_data.end_date,
        total_days=calculate_total_days(trip_data.start_date, trip_data.end_date),
        base_currency=base_currency.upper(),
        created_by=current_user.id
    )
    db.add(new_trip)
    db.flush()

    db.add(TripMember(trip_id=new_trip.id, user_id=current_user.id, role=MemberRole.OWNER))
    db.commit()
    db.refresh(new_trip)

    logger.info(f"User {current_user.id} created trip {new_trip.id}")
    return new_trip


@router.get("", response_model=List[TripCardResponse])
async def list_trips(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the current user's trips, soonest first."""
    trips = db.query(Trip).join(TripMember).filter(
        TripMember.user_id == current_user.id
    ).order_by(Trip.start_date.asc(), Trip.id.asc()).all()

    cards = []
    for trip in trips:
        countdown_status, days_until = trip_countdown(trip.start_date)
        cards.append(TripCardResponse(
            **TripResponse.model_validate(trip).model_dump(),
            cover_image_url=cover_image_url(trip.id),
            countdown_status=countdown_status,
            days_until=days_until
        ))
    return cards


@router.get("/{trip_id}", response_model=TripDetailResponse)
async def get_trip(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get trip details with members."""
    trip = check_trip_access(trip_id, current_user.id, db)

    return TripDetailResponse(
        **TripResponse.model_validate(trip).model_dump(),
        cover_image_url=cover_image_url(trip.id),
        members=[member_response(m, current_user.id) for m in trip.members]
    )


@router.patch("/{trip_id}", response_model=TripResponse)
async def update_trip(
    trip_id: int,
    trip_data: TripUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Edit a trip. Owners and planners only."""
    trip = check_trip_role(trip_id, current_user.id, EDITOR_ROLES, db)

    updates = trip_data.model_dump(exclude_unset=True, exclude_none=True)
    start_date = updates.get("start_date", trip.start_date)
    end_date = updates.get("end_date", trip.end_date)
    if end_date < start_date:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="end_date must not be before start_date"
        )

    total_days = calculate_total_days(start_date, end_date)
    stranded = db.query(ItineraryItem).filter(
        ItineraryItem.trip_id == trip_id,
        ItineraryItem.trip_day > total_days
    ).count()
    if stranded:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"{stranded} itinerary items are planned after day {total_days}; move or delete them first"
        )

    for field, value in updates.items():
        setattr(trip, field, value.upper() if field == "base_currency" else value)
    trip.total_days = total_days

    db.commit()
    db.refresh(trip)
    return trip


@router.delete("/{trip_id}")
async def delete_trip(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a trip and everything in it. Owner only."""
    trip = check_trip_role(trip_id, current_user.id, (MemberRole.OWNER,), db)
    db.delete(trip)
    db.commit()

    logger.info(f"User {current_user.id} deleted trip {trip_id}")
    return {"message": "Trip deleted successfully"}


@router.get("/{trip_id}/members", response_model=List[TripMemberResponse])
async def get_members(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the member list in join order."""
    trip = check_trip_access(trip_id, current_user.id, db)
    return [member_response(m, current_user.id) for m in trip.members]


@router.delete("/{trip_id}/members/{user_id}")
async def remove_member(
    trip_id: int,
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove a member (owner) or leave the trip (self)."""
    check_trip_access(trip_id, current_user.id, db)
    me = get_membership(trip_id, current_user.id, db)

    member = get_membership(trip_id, user_id, db)
    if not member:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Member not found"
        )

    if member.role == MemberRole.OWNER:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The trip owner cannot be removed"
        )

    if user_id != current_user.id and me.role != MemberRole.OWNER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the owner can remove other members"
        )

    remove_membership(member, db)

    return {"message": "Member removed successfully"}


@router.get("/{trip_id}/invite", response_model=InviteLinkResponse)
async def get_invite_link(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the shareable join link. Anyone holding it can join."""
    check_trip_access(trip_id, current_user.id, db)
    return InviteLinkResponse(trip_id=trip_id, invite_link=invite_link(trip_id))


@router.get("/{trip_id}/join", response_model=JoinPreviewResponse)
async def preview_join(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Show which trip an invite link points to."""
    trip = get_trip_or_404(trip_id, db)
    return JoinPreviewResponse(
        trip_id=trip.id,
        trip_name=trip.trip_name,
        already_member=get_membership(trip_id, current_user.id, db) is not None
    )


@router.post("/{trip_id}/join", response_model=JoinResponse)
async def accept_invite(
    trip_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Join a trip through its invite link. Joining twice is not an error."""
    trip = get_trip_or_404(trip_id, db)
    member, created = join_trip(trip, current_user.id, db)

    if created:
        logger.info(f"User {current_user.id} joined trip {trip_id}")
    return JoinResponse(trip_id=trip_id, joined=created, role=member.role)
