"""Tests for single events."""

from datetime import date, datetime, timedelta

import pytest

from timeboard.domain import Event, InvalidEventError


def make_event(subject="Standup", start=(2024, 3, 26, 9, 0), end=(2024, 3, 26, 9, 15), **kwargs):
    return Event.timed(subject, datetime(*start), datetime(*end), **kwargs)


class TestConstruction:
    @pytest.mark.parametrize("subject", ["", "   ", None])
    def test_blank_subject_rejected(self, subject):
        with pytest.raises(InvalidEventError):
            make_event(subject=subject)

    def test_end_before_start_rejected(self):
        with pytest.raises(InvalidEventError):
            make_event(start=(2024, 3, 26, 10, 0), end=(2024, 3, 26, 9, 0))

    def test_zero_length_event_allowed(self):
        event = make_event(end=(2024, 3, 26, 9, 0))
        assert event.duration == timedelta(0)

    def test_optional_text_defaults_to_empty(self):
        event = make_event()
        assert event.description == ""
        assert event.location == ""
        assert event.is_public

    def test_all_day_bounds(self):
        event = Event.all_day("Holiday", date(2024, 3, 26))
        assert event.is_all_day
        assert event.date == date(2024, 3, 26)
        assert event.start == datetime(2024, 3, 26, 0, 0)
        assert event.end == datetime(2024, 3, 26, 23, 59, 59)

    def test_ids_are_unique(self):
        assert make_event().id != make_event().id

    def test_spans_multiple_days(self):
        assert make_event(start=(2024, 3, 26, 23, 0), end=(2024, 3, 27, 1, 0)).spans_multiple_days()
        assert not make_event().spans_multiple_days()


class TestConflicts:
    def test_overlapping_events_conflict(self):
        first = make_event()
        second = make_event("Standup2", start=(2024, 3, 26, 9, 10), end=(2024, 3, 26, 9, 20))
        assert first.conflicts_with(second)
        assert second.conflicts_with(first)

    def test_disjoint_events_do_not_conflict(self):
        first = make_event()
        second = make_event("Lunch", start=(2024, 3, 26, 12, 0), end=(2024, 3, 26, 13, 0))
        assert not first.conflicts_with(second)

    def test_touching_endpoints_conflict(self):
        first = make_event(start=(2024, 3, 26, 9, 0), end=(2024, 3, 26, 10, 0))
        second = make_event("Next", start=(2024, 3, 26, 10, 0), end=(2024, 3, 26, 11, 0))
        assert first.conflicts_with(second)

    def test_all_day_conflicts_with_early_timed_event(self):
        holiday = Event.all_day("Holiday", date(2024, 3, 26))
        early = make_event("Early", start=(2024, 3, 26, 0, 0, 1), end=(2024, 3, 26, 0, 30))
        assert holiday.conflicts_with(early)

    def test_none_never_conflicts(self):
        assert not make_event().conflicts_with(None)


class TestCopy:
    def test_copy_gets_new_id(self):
        event = make_event()
        copy = event.copy_with(location="Room B")
        assert copy.id != event.id
        assert copy.location == "Room B"
        assert event.location == ""

    def test_copy_can_keep_id(self):
        event = make_event()
        assert event.copy_with(keep_id=True).id == event.id


class TestUpdateProperty:
    def test_subject_and_alias(self):
        event = make_event()
        event.update_property("subject", "Daily")
        assert event.subject == "Daily"
        event.update_property("name", "Sync")
        assert event.subject == "Sync"

    def test_blank_subject_rejected(self):
        event = make_event()
        with pytest.raises(InvalidEventError):
            event.update_property("subject", "  ")
        assert event.subject == "Standup"

    def test_description_and_location(self):
        event = make_event()
        event.update_property("description", "Team sync")
        event.update_property("location", "Room A")
        assert event.description == "Team sync"
        assert event.location == "Room A"

    @pytest.mark.parametrize(
        "prop, value, expected",
        [
            ("visibility", "private", False),
            ("visibility", "public", True),
            ("public", "false", False),
            ("isPublic", "true", True),
            ("private", "true", False),
            ("private", "false", True),
        ],
    )
    def test_visibility_values(self, prop, value, expected):
        event = make_event()
        event.update_property(prop, value)
        assert event.is_public is expected

    def test_invalid_visibility_leaves_event_unchanged(self):
        event = make_event()
        with pytest.raises(InvalidEventError):
            event.update_property("visibility", "maybe")
        assert event.is_public

    def test_unknown_property(self):
        with pytest.raises(InvalidEventError):
            make_event().update_property("colour", "red")

    def test_start_time_keeps_date(self):
        event = make_event(end=(2024, 3, 26, 11, 0))
        event.update_property("start", "10:30")
        assert event.start == datetime(2024, 3, 26, 10, 30)

    def test_end_accepts_full_datetime(self):
        event = make_event()
        event.update_property("endTime", "2024-03-26T12:00")
        assert event.end == datetime(2024, 3, 26, 12, 0)

    def test_start_after_end_rejected(self):
        event = make_event()
        with pytest.raises(InvalidEventError):
            event.update_property("start", "2024-03-26T10:00")
        assert event.start == datetime(2024, 3, 26, 9, 0)

    def test_malformed_time_rejected(self):
        with pytest.raises(InvalidEventError):
            make_event().update_property("start", "nine o'clock")

    def test_time_edit_makes_all_day_event_timed(self):
        event = Event.all_day("Holiday", date(2024, 3, 26))
        event.update_property("end", "18:00")
        assert not event.is_all_day
        assert event.date is None
        assert event.end == datetime(2024, 3, 26, 18, 0)
