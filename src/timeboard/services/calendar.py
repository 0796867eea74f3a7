from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Optional, Union
from uuid import UUID

from ..domain import (
    ConflictingEventError,
    Event,
    EventNotFoundError,
    InvalidEventError,
    RecurringEvent,
    RecurringEventBuilder,
    Weekday,
)
from .timezones import TimezoneService

if TYPE_CHECKING:
    from ..data.export import CsvExporter

logger = logging.getLogger(__name__)

EventFilter = Callable[[Event], bool]

_SYNCED_FIELDS = ("subject", "start", "end", "description", "location", "is_public", "is_all_day", "date")


@dataclass(slots=True)
class Calendar:
    """A named, timezone-tagged collection of events.

    Every datetime crossing this API is a local wall-clock time in
    ``timezone``; events are stored UTC-normalized under the same ids. No two
    stored events overlap, checked at insertion only.
    """

    name: str
    timezone: str
    timezones: TimezoneService = field(default_factory=TimezoneService)
    _events: List[Event] = field(default_factory=list, init=False, repr=False)
    _recurring: List[RecurringEvent] = field(default_factory=list, init=False, repr=False)
    _events_by_id: Dict[UUID, Event] = field(default_factory=dict, init=False, repr=False)
    _recurring_by_id: Dict[UUID, RecurringEvent] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        self.timezones.zone(self.timezone)

    def __str__(self) -> str:
        return self.name

    @property
    def event_count(self) -> int:
        return len(self._events)

    # Time frames ---------------------------------------------------------
    def to_utc(self, event: Event) -> Event:
        return event.copy_with(
            keep_id=True,
            start=self.timezones.to_utc(event.start, self.timezone),
            end=self.timezones.to_utc(event.end, self.timezone),
        )

    def to_local(self, event: Event) -> Event:
        return event.copy_with(
            keep_id=True,
            start=self.timezones.from_utc(event.start, self.timezone),
            end=self.timezones.from_utc(event.end, self.timezone),
        )

    # Insertion -----------------------------------------------------------
    def add_event(self, event: Event, auto_decline: bool = False) -> bool:
        """Insert ``event`` unless it overlaps an existing one.

        On overlap, raises :class:`ConflictingEventError` when ``auto_decline``
        is set and returns ``False`` otherwise.
        """

        if event is None:
            raise InvalidEventError("Event cannot be null")
        if event.id in self._events_by_id:
            raise InvalidEventError(f"Event {event.id} is already in calendar '{self.name}'")
        stored = self.to_utc(event)
        conflict = self._first_conflict(stored)
        if conflict is not None:
            return self._decline(stored, conflict, auto_decline)
        self._insert(stored)
        logger.info("Added event '%s' to calendar '%s'", stored.subject, self.name)
        return True

    def add_recurring_event(self, recurring: RecurringEvent, auto_decline: bool = False) -> bool:
        """Insert every occurrence of ``recurring`` or none of them."""

        if recurring is None:
            raise InvalidEventError("Recurring event cannot be null")
        if recurring.id in self._recurring_by_id:
            raise InvalidEventError(f"Series {recurring.id} is already in calendar '{self.name}'")
        occurrences = [self.to_utc(occurrence) for occurrence in recurring.expand_occurrences()]
        if not occurrences:
            raise InvalidEventError(f"Recurring event '{recurring.subject}' has no occurrences")
        _ensure_no_self_overlap(recurring, occurrences)
        for occurrence in occurrences:
            conflict = self._first_conflict(occurrence)
            if conflict is not None:
                return self._decline(occurrence, conflict, auto_decline)

        self._recurring.append(recurring)
        self._recurring_by_id[recurring.id] = recurring
        for occurrence in occurrences:
            self._insert(occurrence)
        logger.info(
            "Added recurring event '%s' (%d occurrences) to calendar '%s'",
            recurring.subject,
            len(occurrences),
            self.name,
        )
        return True

    def create_event(
        self,
        subject: str,
        start: datetime,
        end: datetime,
        *,
        description: Optional[str] = None,
        location: Optional[str] = None,
        is_public: bool = True,
        auto_decline: bool = False,
    ) -> bool:
        event = Event.timed(subject, start, end, description, location, is_public)
        return self.add_event(event, auto_decline)

    def create_all_day_event(
        self,
        subject: str,
        day: date,
        *,
        description: Optional[str] = None,
        location: Optional[str] = None,
        is_public: bool = True,
        auto_decline: bool = False,
    ) -> bool:
        event = Event.all_day(subject, day, description, location, is_public)
        return self.add_event(event, auto_decline)

    def create_recurring_event(
        self,
        subject: str,
        start: datetime,
        end: datetime,
        weekdays: Union[str, Iterable[Weekday]],
        *,
        occurrences: Optional[int] = None,
        until: Optional[date] = None,
        all_day: bool = False,
        description: Optional[str] = None,
        location: Optional[str] = None,
        is_public: bool = True,
        auto_decline: bool = False,
    ) -> bool:
        builder = (
            RecurringEventBuilder(subject, start, end, weekdays)
            .description(description)
            .location(location)
            .public(is_public)
            .all_day(all_day)
        )
        if occurrences is not None:
            builder.occurrences(occurrences)
        if until is not None:
            builder.until(until)
        return self.add_recurring_event(builder.build(), auto_decline)

    # Lookup --------------------------------------------------------------
    def find_event(self, subject: str, start: datetime) -> Optional[Event]:
        """Return the first event with this exact subject and local start."""

        stored = self._find_stored(subject, start)
        return self.to_local(stored) if stored is not None else None

    def get_event(self, event_id: UUID) -> Event:
        stored = self._events_by_id.get(event_id)
        if stored is None:
            raise EventNotFoundError(f"Event not found: {event_id}")
        return self.to_local(stored)

    def get_recurring_event(self, series_id: UUID) -> RecurringEvent:
        recurring = self._recurring_by_id.get(series_id)
        if recurring is None:
            raise EventNotFoundError(f"Recurring event not found: {series_id}")
        return recurring

    def get_all_recurring_events(self) -> List[RecurringEvent]:
        return list(self._recurring)

    def events_in_series(self, series_id: UUID) -> List[Event]:
        return self._local_views(event for event in self._events if event.series_id == series_id)

    # Editing -------------------------------------------------------------
    def edit_single_event(self, subject: str, start: datetime, property_name: str, value: str) -> bool:
        stored = self._find_stored(subject, start)
        if stored is None:
            logger.warning("No event '%s' starting %s in calendar '%s'", subject, start, self.name)
            return False
        return self._apply_edit(stored, property_name, value)

    def edit_events_from_date(self, subject: str, start: datetime, property_name: str, value: str) -> int:
        threshold = self.timezones.to_utc(start, self.timezone)
        matching = [event for event in self._events if event.subject == subject and event.start >= threshold]
        return sum(1 for event in matching if self._apply_edit(event, property_name, value))

    def edit_all_events(self, subject: str, property_name: str, value: str) -> int:
        matching = [event for event in self._events if event.subject == subject]
        return sum(1 for event in matching if self._apply_edit(event, property_name, value))

    def update_event(self, event_id: UUID, replacement: Event) -> bool:
        """Replace a stored event, keeping its id and series membership."""

        existing = self._events_by_id.get(event_id)
        if existing is None:
            raise EventNotFoundError(f"Event not found: {event_id}")
        candidate = self.to_utc(replacement).copy_with(keep_id=True, id=event_id, series_id=existing.series_id)
        conflict = self._first_conflict(candidate, ignore=event_id)
        if conflict is not None:
            raise ConflictingEventError(
                f"The updated event '{candidate.subject}' conflicts with '{conflict.subject}'"
            )
        self._events[self._events.index(existing)] = candidate
        self._events_by_id[event_id] = candidate
        logger.info("Updated event %s in calendar '%s'", event_id, self.name)
        return True

    # Queries -------------------------------------------------------------
    def get_all_events(self) -> List[Event]:
        return self._local_views(self._events)

    def get_filtered_events(self, predicate: EventFilter) -> List[Event]:
        return [event for event in self.get_all_events() if predicate(event)]

    def get_events_on_date(self, day: date) -> List[Event]:
        if day is None:
            raise ValueError("Date cannot be null")
        return self.get_events_in_range(day, day)

    def get_events_in_range(self, start_date: date, end_date: date) -> List[Event]:
        if start_date is None or end_date is None:
            raise ValueError("Dates cannot be null")
        if start_date > end_date:
            raise ValueError("Start date cannot be after end date")
        return self.get_filtered_events(lambda event: _within_dates(event, start_date, end_date))

    def is_busy(self, moment: datetime) -> bool:
        if moment is None:
            raise ValueError("DateTime cannot be null")
        return any(_covers(event, moment) for event in self.get_all_events())

    # Export --------------------------------------------------------------
    def export_data(self, file_path: str, exporter: "CsvExporter") -> str:
        if file_path is None or not str(file_path).strip():
            raise ValueError("File path cannot be null or empty")
        if exporter is None:
            raise ValueError("Exporter cannot be null")
        written = exporter.export(file_path, self.get_all_events())
        logger.info("Exported %d events from '%s' to %s", self.event_count, self.name, written)
        return written

    # Calendar properties -------------------------------------------------
    def rename(self, name: str) -> None:
        self.name = name

    def set_timezone(self, zone_id: str) -> None:
        """Move the calendar to ``zone_id`` keeping every event's local wall-clock time."""

        self.timezones.zone(zone_id)
        if zone_id == self.timezone:
            return
        previous = self.timezone
        for event in self._events:
            event.start = self.timezones.to_utc(self.timezones.from_utc(event.start, previous), zone_id)
            event.end = self.timezones.to_utc(self.timezones.from_utc(event.end, previous), zone_id)
        self.timezone = zone_id
        logger.info("Calendar '%s' timezone changed from %s to %s", self.name, previous, zone_id)

    # Internals -----------------------------------------------------------
    def _insert(self, stored: Event) -> None:
        self._events.append(stored)
        self._events_by_id[stored.id] = stored

    def _first_conflict(self, candidate: Event, *, ignore: Optional[UUID] = None) -> Optional[Event]:
        for existing in self._events:
            if existing.id != ignore and candidate.conflicts_with(existing):
                return existing
        return None

    def _decline(self, candidate: Event, conflict: Event, auto_decline: bool) -> bool:
        message = f"Event '{candidate.subject}' conflicts with existing event '{conflict.subject}'"
        if auto_decline:
            raise ConflictingEventError(message)
        logger.info("%s in calendar '%s'; not added", message, self.name)
        return False

    def _find_stored(self, subject: str, start: datetime) -> Optional[Event]:
        if subject is None or start is None:
            raise ValueError("Subject and start date/time cannot be null")
        utc_start = self.timezones.to_utc(start, self.timezone)
        for event in self._events:
            if event.subject == subject and event.start == utc_start:
                return event
        return None

    def _apply_edit(self, stored: Event, property_name: str, value: str) -> bool:
        local = self.to_local(stored)
        try:
            local.update_property(property_name, value)
            updated = self.to_utc(local)
        except InvalidEventError as exc:
            logger.warning("Rejected edit of %s on '%s': %s", property_name, stored.subject, exc)
            return False
        for name in _SYNCED_FIELDS:
            setattr(stored, name, getattr(updated, name))
        return True

    def _local_views(self, events: Iterable[Event]) -> List[Event]:
        return sorted((self.to_local(event) for event in events), key=lambda item: (item.start, item.subject))


def _ensure_no_self_overlap(recurring: RecurringEvent, occurrences: List[Event]) -> None:
    ordered = sorted(occurrences, key=lambda item: item.start)
    for current, following in zip(ordered, ordered[1:]):
        if current.conflicts_with(following):
            raise InvalidEventError(
                f"Recurring event '{recurring.subject}' overlaps itself on {following.start.date().isoformat()}"
            )


def _within_dates(event: Event, start_date: date, end_date: date) -> bool:
    if event.is_all_day and event.date is not None:
        return start_date <= event.date <= end_date
    return event.start.date() <= end_date and event.end.date() >= start_date


def _covers(event: Event, moment: datetime) -> bool:
    if event.is_all_day and event.date is not None:
        return moment.date() == event.date
    return event.start <= moment <= event.end


__all__ = ["Calendar", "EventFilter"]
