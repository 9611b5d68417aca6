"""
Itinerary routes for day-by-day planning.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from tripmate.db.session import get_db
from tripmate.models.user import User
from tripmate.models.trip import Trip
from tripmate.models.itinerary import ItineraryItem
from tripmate.schemas.itinerary import (
    ItineraryCreate, ItineraryUpdate, ItineraryResponse, DayPlanResponse
)
from tripmate.services.itinerary_service import (
    resolve_time_window, group_by_period, period_of, day_date
)
from tripmate.api.dependencies import get_current_user
from tripmate.api.routes.trips import check_trip_access, check_trip_role, CONTRIBUTOR_ROLES

router = APIRouter(prefix="/itinerary", tags=["itinerary"])

TIME_FIELDS = ("period", "start_time", "end_time", "duration_minutes")


def check_trip_day(trip: Trip, trip_day: int):
    if not 1 <= trip_day <= trip.total_days:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"trip_day must be between 1 and {trip.total_days}"
        )


def get_item_or_404(trip_id: int, item_id: int, db: Session) -> ItineraryItem:
    item = db.query(ItineraryItem).filter(
        ItineraryItem.id == item_id,
        ItineraryItem.trip_id == trip_id
    ).first()
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Itinerary item not found"
        )
    return item


def item_response(item: ItineraryItem) -> ItineraryResponse:
    return ItineraryResponse(
        id=item.id,
        trip_id=item.trip_id,
        trip_day=item.trip_day,
        start_time=item.start_time,
        end_time=item.end_time,
        period=period_of(item.start_time),
        activity_name=item.activity_name,
        activity_type=item.activity_type,
        location=item.location,
        transportation=item.transportation,
        transport_time=item.transport_time,
        activity_cost=item.activity_cost,
        review_rating=item.review_rating,
        review_text=item.review_text,
        order_index=item.order_index,
        created_at=item.created_at
    )


@router.get("/{trip_id}/days/{trip_day}", response_model=DayPlanResponse)
async def get_day_plan(
    trip_id: int,
    trip_day: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get one day's plan grouped into morning, afternoon and evening."""
    trip = check_trip_access(trip_id, current_user.id, db)
    check_trip_day(trip, trip_day)

    items = db.query(ItineraryItem).filter(
        ItineraryItem.trip_id == trip_id,
        ItineraryItem.trip_day == trip_day
    ).order_by(
        ItineraryItem.start_time.asc(),
        ItineraryItem.order_index.asc(),
        ItineraryItem.id.asc()
    ).all()

    groups = group_by_period(items)
    return DayPlanResponse(
        trip_id=trip_id,
        trip_day=trip_day,
        date=day_date(trip.start_date, trip_day),
        **{period: [item_response(i) for i in group] for period, group in groups.items()}
    )


@router.post("/{trip_id}", response_model=ItineraryResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    trip_id: int,
    item_data: ItineraryCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add an activity. With only a period given, the period's default times are used."""
    trip = check_trip_role(trip_id, current_user.id, CONTRIBUTOR_ROLES, db)
    check_trip_day(trip, item_data.trip_day)

    start_time, end_time = resolve_time_window(
        period=item_data.period,
        start_time=item_data.start_time,
        end_time=item_data.end_time,
        duration_minutes=item_data.duration_minutes
    )

    item = ItineraryItem(
        trip_id=trip_id,
        start_time=start_time,
        end_time=end_time,
        **item_data.model_dump(exclude=set(TIME_FIELDS))
    )
    db.add(item)
    db.commit()
    db.refresh(item)

    return item_response(item)


@router.patch("/{trip_id}/items/{item_id}", response_model=ItineraryResponse)
async def update_item(
    trip_id: int,
    item_id: int,
    item_data: ItineraryUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Edit an activity. Moving it to another period resets its times."""
    trip = check_trip_role(trip_id, current_user.id, CONTRIBUTOR_ROLES, db)
    item = get_item_or_404(trip_id, item_id, db)

    updates = item_data.model_dump(exclude_unset=True)
    if updates.get("trip_day") is not None:
        check_trip_day(trip, updates["trip_day"])

    time_updates = {field: updates.pop(field) for field in TIME_FIELDS if field in updates}
    if time_updates:
        if time_updates.get("start_time") or time_updates.get("period"):
            item.start_time, item.end_time = resolve_time_window(**time_updates)
        else:
            item.start_time, item.end_time = resolve_time_window(
                start_time=item.start_time,
                end_time=time_updates.get("end_time"),
                duration_minutes=time_updates.get("duration_minutes")
            )

    for field, value in updates.items():
        if value is not None or field in ("location", "transportation", "review_text"):
            setattr(item, field, value)

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
    """Delete an activity."""
    check_trip_role(trip_id, current_user.id, CONTRIBUTOR_ROLES, db)
    item = get_item_or_404(trip_id, item_id, db)

    db.delete(item)
    db.commit()

    return {"message": "Itinerary item deleted successfully"}
