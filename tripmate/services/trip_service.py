"""
Trip service for trip-level business logic.
"""
import logging
from datetime import date
from typing import Optional, Tuple
from sqlalchemy.orm import Session
from tripmate.core.config import settings
from tripmate.models.trip import Trip, TripMember, MemberRole
from tripmate.models.packing import PackingItem, PackingCheck

logger = logging.getLogger(__name__)

ENDED = "ended"
TODAY = "today"
UPCOMING = "upcoming"


def calculate_total_days(start_date: date, end_date: date) -> int:
    """Number of calendar days covered by a trip, inclusive."""
    return max(0, (end_date - start_date).days + 1)


def trip_countdown(start_date: date, today: Optional[date] = None) -> Tuple[str, Optional[int]]:
    """Return (status, days_until). days_until is only set for upcoming trips."""
    today = today or date.today()
    diff_days = (start_date - today).days
    if diff_days < 0:
        return ENDED, None
    if diff_days == 0:
        return TODAY, 0
    return UPCOMING, diff_days


def invite_link(trip_id: int) -> str:
    """Shareable link that lets anyone signed in join the trip."""
    return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/trips/{trip_id}/join"


def get_membership(trip_id: int, user_id: int, db: Session) -> Optional[TripMember]:
    return db.query(TripMember).filter(
        TripMember.trip_id == trip_id,
        TripMember.user_id == user_id
    ).first()


def join_trip(trip: Trip, user_id: int, db: Session) -> Tuple[TripMember, bool]:
    """
    Add a user to a trip as a plain member.
    Returns (membership, created); joining twice returns the existing row.
    """
    existing = get_membership(trip.id, user_id, db)
    if existing:
        return existing, False

    member = TripMember(trip_id=trip.id, user_id=user_id, role=MemberRole.MEMBER)
    db.add(member)
    db.commit()
    db.refresh(member)
    return member, True


def remove_membership(member: TripMember, db: Session):
    """
    Drop a member from a trip along with their packing state.
    Shared items they claimed become free again and their checks are removed.
    """
    trip_id, user_id = member.trip_id, member.user_id
    released = db.query(PackingItem).filter(
        PackingItem.trip_id == trip_id,
        PackingItem.claimed_by == user_id
    ).update({PackingItem.claimed_by: None}, synchronize_session=False)
    db.query(PackingCheck).filter(
        PackingCheck.trip_id == trip_id,
        PackingCheck.user_id == user_id
    ).delete(synchronize_session=False)

    db.delete(member)
    db.commit()

    logger.info(f"User {user_id} left trip {trip_id}, {released} claims released")
