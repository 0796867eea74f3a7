from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Iterable, List, Optional, Union
from uuid import UUID, uuid4, uuid5

from ..utils.dates import end_of_day, parse_datetime, parse_time, start_of_day
from .enums import EventProperty, Weekday, parse_weekdays
from .errors import InvalidEventError

_TRUE_PUBLIC = {"public", "true"}
_TRUE_PRIVATE = {"private", "true"}
_FALSE_PUBLIC = {"private", "false"}
_FALSE_PRIVATE = {"public", "false"}


def _require_subject(subject: Optional[str]) -> str:
    if subject is None or not str(subject).strip():
        raise InvalidEventError("Event subject cannot be null or empty")
    return str(subject)


def _require_interval(start: Optional[datetime], end: Optional[datetime]) -> None:
    if start is None:
        raise InvalidEventError("Start date/time cannot be null")
    if end is None:
        raise InvalidEventError("End date/time cannot be null")
    if end < start:
        raise InvalidEventError("End date/time must not be before start date/time")


@dataclass(slots=True)
class Event:
    """A named time interval, or an all-day date, with descriptive metadata.

    ``start`` and ``end`` are naive wall-clock values. Events held by a
    :class:`~timeboard.services.calendar.Calendar` are UTC-normalized; the
    calendar hands out local-time views for display and editing.
    """

    subject: str
    start: datetime
    end: datetime
    description: str = ""
    location: str = ""
    is_public: bool = True
    is_all_day: bool = False
    date: Optional[date] = None
    series_id: Optional[UUID] = None
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        self.subject = _require_subject(self.subject)
        _require_interval(self.start, self.end)
        self.description = self.description or ""
        self.location = self.location or ""
        if self.is_all_day and self.date is None:
            self.date = self.start.date()

    @classmethod
    def timed(
        cls,
        subject: str,
        start: datetime,
        end: datetime,
        description: Optional[str] = None,
        location: Optional[str] = None,
        is_public: bool = True,
    ) -> "Event":
        return cls(
            subject=subject,
            start=start,
            end=end,
            description=description or "",
            location=location or "",
            is_public=is_public,
        )

    @classmethod
    def all_day(
        cls,
        subject: str,
        day: date,
        description: Optional[str] = None,
        location: Optional[str] = None,
        is_public: bool = True,
    ) -> "Event":
        """Create an event spanning ``day`` from 00:00:00 to 23:59:59."""

        return cls(
            subject=subject,
            start=start_of_day(day),
            end=end_of_day(day),
            description=description or "",
            location=location or "",
            is_public=is_public,
            is_all_day=True,
            date=day,
        )

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def is_recurring(self) -> bool:
        return self.series_id is not None

    def spans_multiple_days(self) -> bool:
        return self.start.date() != self.end.date()

    def conflicts_with(self, other: Optional["Event"]) -> bool:
        """Two events conflict when their closed intervals overlap."""

        if other is None:
            return False
        return self.start <= other.end and other.start <= self.end

    def copy_with(self, *, keep_id: bool = False, **changes: Any) -> "Event":
        if not keep_id:
            changes.setdefault("id", uuid4())
        return dataclasses.replace(self, **changes)

    def update_property(self, name: str, value: str) -> None:
        """Apply a textual edit to one property.

        Time values may be ``YYYY-MM-DDThh:mm[:ss]`` or a bare ``hh:mm[:ss]``
        which keeps the date of the bound being edited. Editing either bound
        turns an all-day event into a timed one. On any failure the event is
        left untouched and :class:`InvalidEventError` is raised.
        """

        prop = EventProperty.resolve(name)
        if value is None:
            raise InvalidEventError(f"A value is required to update {prop.value}")

        if prop is EventProperty.SUBJECT:
            self.subject = _require_subject(value)
        elif prop is EventProperty.DESCRIPTION:
            self.description = value
        elif prop is EventProperty.LOCATION:
            self.location = value
        elif prop is EventProperty.START:
            new_start = self._resolve_time(value, self.start)
            _require_interval(new_start, self.end)
            self.start = new_start
            self._drop_all_day()
        elif prop is EventProperty.END:
            new_end = self._resolve_time(value, self.end)
            _require_interval(self.start, new_end)
            self.end = new_end
            self._drop_all_day()
        elif prop is EventProperty.VISIBILITY:
            self.is_public = _parse_flag(value, truthy=_TRUE_PUBLIC, falsy=_FALSE_PUBLIC, label="visibility")
        elif prop is EventProperty.PRIVATE:
            self.is_public = not _parse_flag(value, truthy=_TRUE_PRIVATE, falsy=_FALSE_PRIVATE, label="private")

    def _drop_all_day(self) -> None:
        self.is_all_day = False
        self.date = None

    @staticmethod
    def _resolve_time(value: str, current: datetime) -> datetime:
        text = value.strip()
        try:
            if "T" in text:
                return parse_datetime(text)
            return datetime.combine(current.date(), parse_time(text))
        except ValueError as exc:
            raise InvalidEventError(str(exc)) from exc


def _parse_flag(value: str, *, truthy: set[str], falsy: set[str], label: str) -> bool:
    key = value.strip().lower()
    if key in truthy:
        return True
    if key in falsy:
        return False
    raise InvalidEventError(f"Invalid value for {label}: {value}")


@dataclass(slots=True)
class RecurringEvent:
    """Template expanding into dated occurrences on a weekly weekday pattern.

    Exactly one termination rule applies: ``occurrences`` (count) or
    ``until`` (inclusive last date).
    """

    subject: str
    start: datetime
    end: datetime
    weekdays: frozenset[Weekday]
    occurrences: Optional[int] = None
    until: Optional[date] = None
    description: str = ""
    location: str = ""
    is_public: bool = True
    is_all_day: bool = False
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        self.subject = _require_subject(self.subject)
        if isinstance(self.weekdays, str):
            self.weekdays = parse_weekdays(self.weekdays)
        else:
            self.weekdays = frozenset(self.weekdays or ())
        if not self.weekdays:
            raise InvalidEventError("Repeat days cannot be null or empty.")
        if self.is_all_day:
            first_day = self.start.date()
            self.start = start_of_day(first_day)
            self.end = end_of_day(first_day)
        _require_interval(self.start, self.end)
        if self.occurrences is not None and self.until is not None:
            raise InvalidEventError("Cannot specify both occurrences and until date")
        if self.occurrences is None and self.until is None:
            raise InvalidEventError("Must specify either occurrences or until date")
        if self.occurrences is not None and self.occurrences < 1:
            raise InvalidEventError("Occurrence count must be at least 1")
        if self.until is not None and self.until < self.first_occurrence_date():
            raise InvalidEventError("Until date must not be before the first occurrence")
        self.description = self.description or ""
        self.location = self.location or ""

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def first_occurrence_date(self) -> date:
        """First date on or after the template start whose weekday repeats."""

        current = self.start.date()
        while Weekday.of(current) not in self.weekdays:
            current += timedelta(days=1)
        return current

    def expand_occurrences(self) -> List[Event]:
        occurrences: list[Event] = []
        current = self.start.date()
        while True:
            if self.until is not None and current > self.until:
                break
            if self.occurrences is not None and len(occurrences) >= self.occurrences:
                break
            if Weekday.of(current) in self.weekdays:
                occurrences.append(self._occurrence_on(current))
            current += timedelta(days=1)
        return occurrences

    def occurrences_between(self, start_date: date, end_date: date) -> List[Event]:
        if start_date > end_date:
            raise ValueError("Start date cannot be after end date")
        return [
            occurrence
            for occurrence in self.expand_occurrences()
            if start_date <= occurrence.start.date() <= end_date
        ]

    def _occurrence_on(self, day: date) -> Event:
        start = datetime.combine(day, self.start.time())
        return Event(
            subject=self.subject,
            start=start,
            end=start + self.duration,
            description=self.description,
            location=self.location,
            is_public=self.is_public,
            is_all_day=self.is_all_day,
            date=day if self.is_all_day else None,
            series_id=self.id,
            id=uuid5(self.id, day.isoformat()),
        )


class RecurringEventBuilder:
    """Fluent construction of :class:`RecurringEvent` templates."""

    def __init__(
        self,
        subject: str,
        start: datetime,
        end: datetime,
        weekdays: Union[str, Iterable[Weekday]],
    ) -> None:
        self._subject = subject
        self._start = start
        self._end = end
        self._weekdays = weekdays
        self._description = ""
        self._location = ""
        self._is_public = True
        self._is_all_day = False
        self._occurrences: Optional[int] = None
        self._until: Optional[date] = None
        self._series_id: Optional[UUID] = None

    def description(self, text: Optional[str]) -> "RecurringEventBuilder":
        self._description = text or ""
        return self

    def location(self, text: Optional[str]) -> "RecurringEventBuilder":
        self._location = text or ""
        return self

    def public(self, is_public: bool) -> "RecurringEventBuilder":
        self._is_public = is_public
        return self

    def all_day(self, is_all_day: bool = True) -> "RecurringEventBuilder":
        self._is_all_day = is_all_day
        return self

    def occurrences(self, count: int) -> "RecurringEventBuilder":
        self._occurrences = count
        return self

    def until(self, last_day: date) -> "RecurringEventBuilder":
        self._until = last_day
        return self

    def series_id(self, identifier: UUID) -> "RecurringEventBuilder":
        self._series_id = identifier
        return self

    def build(self) -> RecurringEvent:
        extra = {"id": self._series_id} if self._series_id is not None else {}
        return RecurringEvent(
            subject=self._subject,
            start=self._start,
            end=self._end,
            weekdays=self._weekdays,
            occurrences=self._occurrences,
            until=self._until,
            description=self._description,
            location=self._location,
            is_public=self._is_public,
            is_all_day=self._is_all_day,
            **extra,
        )
