"""
Unit tests for event windows, overlap, capacity and enum parsing.
"""
import pytest
from datetime import date, datetime, time

from app.core.exceptions import InvalidStatusError, InvalidRoleError
from app.db.models import Event, RSVPStatus, EventRole
from app.services.validation import (
    event_window,
    windows_overlap,
    events_overlap,
    has_capacity,
    parse_status,
    parse_role,
)

DAY = date(2026, 11, 3)


def _event(start=time(18, 0), minutes=120, capacity=None, day=DAY):
    return Event(name="e", date=day, time=start, duration_minutes=minutes, capacity=capacity)


@pytest.mark.unit
class TestEventWindow:

    def test_timed_event_runs_for_its_duration(self):
        start, end = event_window(_event(time(9, 30), 90))

        assert start == datetime(2026, 11, 3, 9, 30)
        assert end == datetime(2026, 11, 3, 11, 0)

    def test_event_without_time_blocks_the_whole_day(self):
        start, end = event_window(_event(start=None))

        assert start == datetime(2026, 11, 3, 0, 0)
        assert end == datetime(2026, 11, 4, 0, 0)


@pytest.mark.unit
class TestOverlap:

    def test_intersecting_windows_overlap(self):
        assert events_overlap(_event(time(18, 0), 120), _event(time(19, 0), 60))

    def test_back_to_back_events_do_not_overlap(self):
        assert not events_overlap(_event(time(18, 0), 60), _event(time(19, 0), 60))

    def test_different_days_do_not_overlap(self):
        assert not events_overlap(_event(), _event(day=date(2026, 11, 4)))

    def test_late_event_spills_into_next_day(self):
        late = _event(time(23, 0), 180)
        early = _event(time(1, 0), 60, day=date(2026, 11, 4))

        assert events_overlap(late, early)

    def test_all_day_event_overlaps_any_timed_event_that_day(self):
        assert events_overlap(_event(start=None), _event(time(12, 0), 30))

    def test_windows_overlap_is_symmetric(self):
        a = (datetime(2026, 1, 1, 10), datetime(2026, 1, 1, 12))
        b = (datetime(2026, 1, 1, 11), datetime(2026, 1, 1, 13))

        assert windows_overlap(a, b) and windows_overlap(b, a)


@pytest.mark.unit
class TestCapacity:

    def test_below_capacity(self):
        assert has_capacity(_event(capacity=2), 1)

    def test_at_capacity_is_full(self):
        assert not has_capacity(_event(capacity=2), 2)

    def test_no_capacity_means_unlimited(self):
        assert has_capacity(_event(capacity=None), 10_000)


@pytest.mark.unit
class TestEnumParsing:

    def test_parse_status_is_case_insensitive(self):
        assert parse_status(" declined ") == RSVPStatus.DECLINED

    def test_parse_status_rejects_unknown_value(self):
        with pytest.raises(InvalidStatusError) as exc_info:
            parse_status("SOMETIMES")

        assert exc_info.value.status_code == 400
        assert "SOMETIMES" in exc_info.value.message

    def test_cancelled_is_not_a_stored_status(self):
        with pytest.raises(InvalidStatusError):
            parse_status("CANCELLED")

    def test_parse_role(self):
        assert parse_role("organizer") == EventRole.ORGANIZER

    def test_parse_role_rejects_unknown_value(self):
        with pytest.raises(InvalidRoleError):
            parse_role("SPEAKER")
