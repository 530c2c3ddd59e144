"""Event progress calculation for trackl.

Computes how far along an event's tracking window we are and how many whole
days remain until its date. Days are 24h units and partial days are truncated
toward zero, so an event 36 hours away has 1 day left and one 36 hours past
has -1.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional
from trackl.models.event import Event
from trackl.models.constants import DAY, PERCENT_DONE_WHEN_NO_WINDOW


_MICROSECONDS_PER_DAY = DAY // timedelta(microseconds=1)


def utcnow() -> datetime:
    """Current time as naive UTC, matching what the store persists."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def whole_days(delta: timedelta) -> int:
    """Number of whole 24h days in delta, truncated toward zero."""
    micros = delta // timedelta(microseconds=1)
    days = abs(micros) // _MICROSECONDS_PER_DAY
    return days if micros >= 0 else -days


def days_left(event: Event, now: Optional[datetime] = None) -> int:
    """Whole days from now until the event date (negative once it has passed).

    Args:
        event: Event to measure
        now: Reference instant (defaults to current UTC time)

    Returns:
        Days left, e.g. 10 for an event exactly 240 hours away
    """
    if now is None:
        now = utcnow()
    return whole_days(event.date - now)


def percent_done(event: Event, now: Optional[datetime] = None) -> float:
    """Share of the event's tracking window that has elapsed, in percent.

    The window is measured in whole days from reference_date to date. A window
    of zero days has no meaningful ratio and is reported as 100%. Values are
    not clamped otherwise: before reference_date the result is negative and
    after date it exceeds 100.

    Args:
        event: Event to measure
        now: Reference instant (defaults to current UTC time)

    Returns:
        Percentage of the window elapsed
    """
    if now is None:
        now = utcnow()
    available = whole_days(event.date - event.reference_date)
    if available == 0:
        return PERCENT_DONE_WHEN_NO_WINDOW
    left = whole_days(event.date - now)
    return ((available - left) / available) * 100


def sort_by_days_left(events: List[Event], now: Optional[datetime] = None) -> List[Event]:
    """Sort events soonest-first by days left.

    Python's sort is stable, so events with the same days left keep the order
    the store returned them in.

    Args:
        events: Events to sort
        now: Reference instant shared by every event (defaults to current UTC time)

    Returns:
        New list of events, ascending by days left
    """
    if now is None:
        now = utcnow()
    return sorted(events, key=lambda event: days_left(event, now))
