"""
Itinerary helpers: day-period bucketing and default time windows.
"""
from datetime import date, datetime, time, timedelta
from typing import Dict, Iterable, List, Optional, Tuple
from tripmate.core.errors import ErrorCode, ValidationError

MORNING = "morning"
AFTERNOON = "afternoon"
EVENING = "evening"
PERIODS = (MORNING, AFTERNOON, EVENING)

ACTIVITY_TYPES = ("sightseeing", "meal", "transport", "shopping", "accommodation", "other")

# period -> (canonical start, default duration in minutes)
PERIOD_DEFAULTS: Dict[str, Tuple[time, int]] = {
    MORNING: (time(9, 0), 120),
    AFTERNOON: (time(14, 0), 180),
    EVENING: (time(19, 0), 120),
}


def classify_period(hour: int) -> str:
    """Bucket an hour of day: [0, 12) morning, [12, 18) afternoon, [18, 24) evening."""
    if isinstance(hour, bool) or not isinstance(hour, int) or not 0 <= hour <= 23:
        raise ValidationError(f"Hour must be an integer in [0, 23], got {hour!r}", code=ErrorCode.INVALID_TIME)
    if hour < 12:
        return MORNING
    if hour < 18:
        return AFTERNOON
    return EVENING


def period_of(start_time: time) -> str:
    """Period an entry belongs to, judged by its start time."""
    return classify_period(start_time.hour)


def default_time_window(period: str, duration_minutes: Optional[int] = None) -> Tuple[time, time]:
    """
    Canonical (start, end) for an entry created with only a period selected.
    End is start plus ``duration_minutes``, or the period's default duration.
    """
    if period not in PERIOD_DEFAULTS:
        raise ValidationError(f"Unknown period: {period!r}", code=ErrorCode.INVALID_PERIOD)
    start, default_duration = PERIOD_DEFAULTS[period]
    duration = default_duration if duration_minutes is None else duration_minutes
    return start, _add_minutes(start, duration)


def resolve_time_window(
    period: Optional[str] = None,
    start_time: Optional[time] = None,
    end_time: Optional[time] = None,
    duration_minutes: Optional[int] = None,
) -> Tuple[time, time]:
    """
    Work out (start, end) from whatever the caller supplied.

    An explicit start wins over a period. A missing end is derived from the
    duration, falling back to the default duration of the start's period.
    """
    if start_time is None:
        if period is None:
            raise ValidationError("Either a start time or a period is required", code=ErrorCode.INVALID_TIME)
        start_time, derived_end = default_time_window(period, duration_minutes)
    else:
        _, default_duration = PERIOD_DEFAULTS[period_of(start_time)]
        duration = default_duration if duration_minutes is None else duration_minutes
        derived_end = _add_minutes(start_time, duration)

    end_time = end_time or derived_end
    if end_time < start_time:
        raise ValidationError("End time must not be before start time", code=ErrorCode.INVALID_TIME)
    return start_time, end_time


def _add_minutes(start: time, minutes: int) -> time:
    if minutes < 0:
        raise ValidationError(f"Duration must not be negative, got {minutes}", code=ErrorCode.INVALID_TIME)
    end = datetime.combine(date.min, start) + timedelta(minutes=minutes)
    if end.date() != date.min:
        raise ValidationError("Entry would end after midnight", code=ErrorCode.INVALID_TIME)
    return end.time()


def group_by_period(items: Iterable) -> Dict[str, List]:
    """Split items (anything with a ``start_time``) into the three periods, keeping their order."""
    groups: Dict[str, List] = {period: [] for period in PERIODS}
    for item in items:
        groups[period_of(item.start_time)].append(item)
    return groups


def day_date(start_date: date, trip_day: int) -> date:
    """Calendar date of a 1-indexed trip day."""
    return start_date + timedelta(days=trip_day - 1)
