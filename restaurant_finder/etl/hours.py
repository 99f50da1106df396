"""Open/closed status derived from Google Places weekly opening periods."""

from datetime import datetime
from typing import Optional, Sequence

from restaurant_finder.models import OpeningPeriod

END_OF_DAY = 2359


def day_of_week(moment: datetime) -> int:
    """Day index with Sunday = 0, matching the Places API."""
    return moment.isoweekday() % 7


def is_open_now(periods: Optional[Sequence[OpeningPeriod]], now: Optional[datetime] = None) -> Optional[bool]:
    """Return True/False for open/closed, or None when there is no hours data.

    Only the first period for today is considered; places with split shifts are
    judged by their first shift.
    """
    if not periods:
        return None

    now = now or datetime.now().astimezone()
    today = day_of_week(now)
    current = now.hour * 100 + now.minute

    period = next((p for p in periods if p.day_of_week == today), None)
    if period is None:
        return False

    close_time = period.close_time if period.close_time is not None else END_OF_DAY
    if close_time < period.open_time:
        # closes after midnight
        return current >= period.open_time or current < close_time
    return period.open_time <= current < close_time
