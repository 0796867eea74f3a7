"""Domain models for calendar scheduling."""

from __future__ import annotations

from .enums import EditScope, EventProperty, Weekday, format_weekdays, parse_weekdays
from .errors import (
    CalendarError,
    CalendarNotFoundError,
    CommandSyntaxError,
    ConflictingEventError,
    DuplicateCalendarError,
    EventNotFoundError,
    InvalidCalendarNameError,
    InvalidEventError,
    InvalidTimezoneError,
)
from .models import Event, RecurringEvent, RecurringEventBuilder

__all__ = [
    "CalendarError",
    "CalendarNotFoundError",
    "CommandSyntaxError",
    "ConflictingEventError",
    "DuplicateCalendarError",
    "EditScope",
    "Event",
    "EventNotFoundError",
    "EventProperty",
    "InvalidCalendarNameError",
    "InvalidEventError",
    "InvalidTimezoneError",
    "RecurringEvent",
    "RecurringEventBuilder",
    "Weekday",
    "format_weekdays",
    "parse_weekdays",
]
