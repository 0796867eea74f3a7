"""Tests for recurring event templates and their expansion."""

from datetime import date, datetime, time
from uuid import uuid4

import pytest

from timeboard.domain import (
    InvalidEventError,
    RecurringEvent,
    RecurringEventBuilder,
    Weekday,
    format_weekdays,
    parse_weekdays,
)


def gym(**kwargs):
    values = dict(
        subject="Gym",
        start=datetime(2024, 3, 4, 18, 0),
        end=datetime(2024, 3, 4, 19, 0),
        weekdays="MWF",
        occurrences=3,
    )
    values.update(kwargs)
    return RecurringEvent(**values)


class TestWeekdays:
    def test_parse_codes(self):
        assert parse_weekdays("MWF") == {Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.FRIDAY}
        assert parse_weekdays("rsu") == {Weekday.THURSDAY, Weekday.SATURDAY, Weekday.SUNDAY}

    @pytest.mark.parametrize("codes", ["", "  ", "MX", "Monday"])
    def test_invalid_codes(self, codes):
        with pytest.raises(InvalidEventError):
            parse_weekdays(codes)

    def test_format_uses_calendar_order(self):
        assert format_weekdays({Weekday.FRIDAY, Weekday.MONDAY, Weekday.SUNDAY}) == "MFU"

    def test_weekday_of_date(self):
        assert Weekday.of(date(2024, 3, 4)) is Weekday.MONDAY
        assert Weekday.of(date(2024, 3, 7)) is Weekday.THURSDAY


class TestExpansion:
    def test_gym_three_occurrences(self):
        occurrences = gym().expand_occurrences()
        assert [event.start.date() for event in occurrences] == [
            date(2024, 3, 4),
            date(2024, 3, 6),
            date(2024, 3, 8),
        ]
        for event in occurrences:
            assert event.start.time() == time(18, 0)
            assert event.end.time() == time(19, 0)
            assert event.subject == "Gym"

    @pytest.mark.parametrize("count", [1, 2, 5, 12])
    def test_count_pattern_and_order(self, count):
        template = gym(weekdays="TR", occurrences=count)
        occurrences = template.expand_occurrences()
        assert len(occurrences) == count
        assert all(Weekday.of(event.start.date()) in template.weekdays for event in occurrences)
        starts = [event.start for event in occurrences]
        assert starts == sorted(starts)

    def test_expansion_is_deterministic(self):
        template = gym()
        first = template.expand_occurrences()
        second = template.expand_occurrences()
        assert [(e.id, e.start, e.end) for e in first] == [(e.id, e.start, e.end) for e in second]

    def test_until_is_inclusive(self):
        template = gym(weekdays="TR", occurrences=None, until=date(2024, 3, 14))
        assert [event.start.date() for event in template.expand_occurrences()] == [
            date(2024, 3, 5),
            date(2024, 3, 7),
            date(2024, 3, 12),
            date(2024, 3, 14),
        ]

    def test_first_date_off_pattern_is_skipped(self):
        template = gym(start=datetime(2024, 3, 5, 18, 0), end=datetime(2024, 3, 5, 19, 0), weekdays="M", occurrences=2)
        assert [event.start.date() for event in template.expand_occurrences()] == [
            date(2024, 3, 11),
            date(2024, 3, 18),
        ]

    def test_occurrences_share_series_id(self):
        template = gym()
        occurrences = template.expand_occurrences()
        assert {event.series_id for event in occurrences} == {template.id}
        assert len({event.id for event in occurrences}) == 3
        assert all(event.is_recurring for event in occurrences)

    def test_multi_day_duration_is_kept(self):
        template = gym(end=datetime(2024, 3, 5, 6, 0), weekdays="M", occurrences=2)
        second = template.expand_occurrences()[1]
        assert second.start == datetime(2024, 3, 11, 18, 0)
        assert second.end == datetime(2024, 3, 12, 6, 0)

    def test_all_day_occurrences(self):
        template = gym(is_all_day=True)
        assert template.start == datetime(2024, 3, 4, 0, 0)
        assert template.end == datetime(2024, 3, 4, 23, 59, 59)
        occurrences = template.expand_occurrences()
        assert all(event.is_all_day for event in occurrences)
        assert [event.date for event in occurrences] == [date(2024, 3, 4), date(2024, 3, 6), date(2024, 3, 8)]

    def test_occurrences_between(self):
        template = gym(occurrences=6)
        window = template.occurrences_between(date(2024, 3, 6), date(2024, 3, 11))
        assert [event.start.date() for event in window] == [date(2024, 3, 6), date(2024, 3, 8), date(2024, 3, 11)]

    def test_occurrences_between_rejects_reversed_range(self):
        with pytest.raises(ValueError):
            gym().occurrences_between(date(2024, 3, 10), date(2024, 3, 1))


class TestValidation:
    def test_both_termination_rules_rejected(self):
        with pytest.raises(InvalidEventError):
            gym(until=date(2024, 3, 31))

    def test_missing_termination_rule_rejected(self):
        with pytest.raises(InvalidEventError):
            gym(occurrences=None)

    def test_non_positive_count_rejected(self):
        with pytest.raises(InvalidEventError):
            gym(occurrences=0)

    def test_until_before_start_rejected(self):
        with pytest.raises(InvalidEventError):
            gym(occurrences=None, until=date(2024, 3, 1))

    def test_until_before_first_matching_weekday_rejected(self):
        # 2024-03-04 is a Monday; the first Friday is 2024-03-08.
        with pytest.raises(InvalidEventError):
            gym(weekdays="F", occurrences=None, until=date(2024, 3, 5))

    def test_until_on_first_matching_weekday_accepted(self):
        template = gym(weekdays="F", occurrences=None, until=date(2024, 3, 8))
        assert template.first_occurrence_date() == date(2024, 3, 8)
        assert [event.start.date() for event in template.expand_occurrences()] == [date(2024, 3, 8)]

    def test_empty_weekdays_rejected(self):
        with pytest.raises(InvalidEventError):
            gym(weekdays=frozenset())

    def test_end_before_start_rejected(self):
        with pytest.raises(InvalidEventError):
            gym(end=datetime(2024, 3, 4, 17, 0))


class TestBuilder:
    def test_builds_template(self):
        series_id = uuid4()
        template = (
            RecurringEventBuilder("Yoga", datetime(2024, 3, 4, 7, 0), datetime(2024, 3, 4, 8, 0), "MW")
            .description("Morning class")
            .location("Studio")
            .public(False)
            .until(date(2024, 3, 13))
            .series_id(series_id)
            .build()
        )
        assert template.id == series_id
        assert template.location == "Studio"
        assert not template.is_public
        assert len(template.expand_occurrences()) == 4

    def test_builder_validates(self):
        builder = RecurringEventBuilder("Yoga", datetime(2024, 3, 4, 7, 0), datetime(2024, 3, 4, 8, 0), "MW")
        with pytest.raises(InvalidEventError):
            builder.build()
