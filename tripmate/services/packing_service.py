"""
Packing list service: claiming shared gear and ticking off personal items.
"""
import logging
from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from tripmate.core.errors import ConflictError, ErrorCode, ValidationError
from tripmate.models.packing import PackingItem, PackingCheck, PackingCategory

logger = logging.getLogger(__name__)


def next_claimer(category: PackingCategory, current_claimer: Optional[int], user_id: int) -> Optional[int]:
    """
    Claimer after ``user_id`` presses the claim button.
    Free items get claimed, your own claim is released, someone else's is off limits.
    """
    if category != PackingCategory.PUBLIC:
        raise ValidationError("Only public items can be claimed", code=ErrorCode.NOT_CLAIMABLE)
    if current_claimer is None:
        return user_id
    if current_claimer == user_id:
        return None
    raise ConflictError("Item is already claimed by another member", code=ErrorCode.ALREADY_CLAIMED)


def toggle_claim(item: PackingItem, user_id: int, db: Session) -> PackingItem:
    item.claimed_by = next_claimer(item.category, item.claimed_by, user_id)
    db.commit()
    db.refresh(item)
    return item


def toggle_check(item: PackingItem, user_id: int, db: Session) -> bool:
    """Flip whether ``user_id`` has packed a personal item. Returns the new state."""
    if item.category != PackingCategory.PERSONAL:
        raise ValidationError("Only personal items are checked off per member", code=ErrorCode.NOT_CHECKABLE)

    check = db.query(PackingCheck).filter(
        PackingCheck.item_id == item.id,
        PackingCheck.user_id == user_id
    ).first()

    if check:
        db.delete(check)
        checked = False
    else:
        db.add(PackingCheck(trip_id=item.trip_id, item_id=item.id, user_id=user_id))
        checked = True
    db.commit()

    logger.debug(f"Packing item {item.id} for user {user_id}: checked={checked}")
    return checked


def checked_items_by_user(trip_id: int, db: Session) -> Dict[int, List[int]]:
    """user_id -> ids of personal items that user has packed."""
    checks = db.query(PackingCheck).filter(
        PackingCheck.trip_id == trip_id
    ).order_by(PackingCheck.item_id.asc()).all()

    result: Dict[int, List[int]] = {}
    for check in checks:
        result.setdefault(check.user_id, []).append(check.item_id)
    return result
