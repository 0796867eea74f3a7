"""Application services orchestrating calendars, copying and timezone handling."""

from __future__ import annotations

from .calendar import Calendar
from .context import ServiceContext
from .copying import CopySummary, EventCopier
from .manager import CalendarManager, CalendarNameValidator
from .timezones import TimezoneService

__all__ = [
    "Calendar",
    "CalendarManager",
    "CalendarNameValidator",
    "CopySummary",
    "EventCopier",
    "ServiceContext",
    "TimezoneService",
]
