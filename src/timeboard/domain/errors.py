from __future__ import annotations


class CalendarError(Exception):
    """Base class for recoverable calendar failures surfaced to callers."""


class InvalidEventError(CalendarError, ValueError):
    """Raised when event parameters, property edits, or recurrence rules are malformed."""


class ConflictingEventError(CalendarError):
    """Raised when an insertion would overlap an existing event and auto-decline is on."""


class EventNotFoundError(CalendarError, LookupError):
    """Raised when an event lookup by subject and start (or by id) matches nothing."""


class CalendarNotFoundError(CalendarError, LookupError):
    """Raised when a calendar name is not registered or no calendar is active."""


class DuplicateCalendarError(CalendarError):
    """Raised when creating or renaming onto an already registered calendar name."""


class InvalidTimezoneError(CalendarError, ValueError):
    """Raised when a timezone identifier is not a recognised IANA zone."""


class InvalidCalendarNameError(CalendarError, ValueError):
    """Raised when a calendar name is empty, too long, or has forbidden characters."""


class CommandSyntaxError(CalendarError, ValueError):
    """Raised when command text does not match any known command shape."""


__all__ = [
    "CalendarError",
    "CalendarNotFoundError",
    "CommandSyntaxError",
    "ConflictingEventError",
    "DuplicateCalendarError",
    "EventNotFoundError",
    "InvalidCalendarNameError",
    "InvalidEventError",
    "InvalidTimezoneError",
]
