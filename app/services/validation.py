"""
Capacity, overlap and enum checks used by the RSVP manager.

These are plain functions over already-loaded objects; the manager decides
which queries feed them.
"""
from datetime import datetime, time, timedelta
from typing import Optional, Tuple
from app.db.models.event import Event
from app.db.models.rsvp import RSVPStatus, EventRole
from app.core.exceptions import InvalidStatusError, InvalidRoleError

Window = Tuple[datetime, datetime]


def event_window(event: Event) -> Window:
    """
    Time span an event occupies.

    An event without a start time blocks its whole day; otherwise it runs
    for ``duration_minutes`` from its start.
    """
    if event.time is None:
        start = datetime.combine(event.date, time.min)
        return start, start + timedelta(days=1)
    start = datetime.combine(event.date, event.time)
    return start, start + timedelta(minutes=event.duration_minutes or 0)


def windows_overlap(first: Window, second: Window) -> bool:
    """Half-open intervals: back-to-back events do not overlap."""
    return first[0] < second[1] and second[0] < first[1]


def events_overlap(first: Event, second: Event) -> bool:
    return windows_overlap(event_window(first), event_window(second))


def has_capacity(event: Event, attending_count: int) -> bool:
    # No capacity set means no limit
    if event.capacity is None:
        return True
    return attending_count < event.capacity


def parse_status(value: Optional[str]) -> RSVPStatus:
    try:
        return RSVPStatus(str(value).strip().upper())
    except ValueError:
        raise InvalidStatusError(f"Invalid RSVP status: {value}")


def parse_role(value: Optional[str]) -> EventRole:
    try:
        return EventRole(str(value).strip().upper())
    except ValueError:
        raise InvalidRoleError(f"Invalid event role: {value}")
