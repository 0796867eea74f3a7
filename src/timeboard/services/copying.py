from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List

from ..domain import ConflictingEventError, Event, EventNotFoundError, InvalidEventError
from ..utils.dates import end_of_day, start_of_day
from .calendar import Calendar
from .manager import CalendarManager
from .timezones import TimezoneConverter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CopySummary:
    copied: int
    total: int
    target: str
    scope: str

    @property
    def failed(self) -> int:
        return self.total - self.copied

    @property
    def ok(self) -> bool:
        return self.total == 0 or self.copied > 0

    @property
    def message(self) -> str:
        if self.total == 0:
            return f"No events found {self.scope} to copy."
        if self.copied == self.total:
            return f"Successfully copied all {self.total} events to calendar '{self.target}'."
        if self.copied == 0:
            return f"Failed to copy any events to calendar '{self.target}'."
        return f"Copied {self.copied} out of {self.total} events to calendar '{self.target}'."


class EventCopier:
    """Copies events from the manager's active calendar into another calendar.

    Timed events keep their absolute instant after the date shift, so the
    target shows the wall-clock time adjusted for the zone offset. All-day
    events stay all-day on the shifted date.
    """

    def __init__(self, manager: CalendarManager) -> None:
        self.manager = manager

    def copy_event(self, subject: str, source_start: datetime, target_calendar: str, target_start: datetime) -> Event:
        source = self.manager.get_active_calendar()
        target = self.manager.get_calendar(target_calendar)
        event = source.find_event(subject, source_start)
        if event is None:
            raise EventNotFoundError(
                f"Event not found: {subject} at {source_start.isoformat(timespec='minutes')}"
            )

        if event.is_all_day:
            moved = event.copy_with(
                start=start_of_day(target_start.date()),
                end=end_of_day(target_start.date()),
                date=target_start.date(),
                series_id=None,
            )
        else:
            moved = event.copy_with(start=target_start, end=target_start + event.duration, series_id=None)
        copied = _convert(moved, self._converter(source, target))
        target.add_event(copied, auto_decline=True)
        logger.info("Copied '%s' from '%s' to '%s'", subject, source.name, target.name)
        return copied

    def copy_events_on(self, day: date, target_calendar: str, target_date: date) -> CopySummary:
        source = self.manager.get_active_calendar()
        target = self.manager.get_calendar(target_calendar)
        events = source.get_events_on_date(day)
        return self._copy_all(events, source, target, target_date - day, f"on {day.isoformat()}")

    def copy_events_between(
        self,
        start_date: date,
        end_date: date,
        target_calendar: str,
        target_start: date,
    ) -> CopySummary:
        source = self.manager.get_active_calendar()
        target = self.manager.get_calendar(target_calendar)
        events = source.get_events_in_range(start_date, end_date)
        scope = f"between {start_date.isoformat()} and {end_date.isoformat()}"
        return self._copy_all(events, source, target, target_start - start_date, scope)

    def _copy_all(
        self,
        events: List[Event],
        source: Calendar,
        target: Calendar,
        delta: timedelta,
        scope: str,
    ) -> CopySummary:
        convert = self._converter(source, target)
        copied = 0
        for event in events:
            shifted = event.copy_with(
                start=event.start + delta,
                end=event.end + delta,
                date=event.date + delta if event.date is not None else None,
                series_id=None,
            )
            try:
                target.add_event(_convert(shifted, convert), auto_decline=True)
            except (ConflictingEventError, InvalidEventError) as exc:
                logger.warning("Skipped '%s' while copying to '%s': %s", event.subject, target.name, exc)
                continue
            copied += 1

        summary = CopySummary(copied=copied, total=len(events), target=target.name, scope=scope)
        logger.info(summary.message)
        return summary

    def _converter(self, source: Calendar, target: Calendar) -> TimezoneConverter:
        return self.manager.timezones.build_converter(source.timezone, target.timezone)


def _convert(event: Event, convert: TimezoneConverter) -> Event:
    if event.is_all_day:
        return event
    return event.copy_with(keep_id=True, start=convert(event.start), end=convert(event.end))


__all__ = ["CopySummary", "EventCopier"]
