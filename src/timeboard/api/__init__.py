"""JSON payloads for command results and calendar data."""

from __future__ import annotations

from .models import CalendarPayload, CommandResultPayload, EventPayload, RecurringEventPayload
from .serializers import (
    dumps,
    serialize_calendar,
    serialize_event,
    serialize_recurring_event,
    serialize_result,
)

__all__ = [
    "CalendarPayload",
    "CommandResultPayload",
    "EventPayload",
    "RecurringEventPayload",
    "dumps",
    "serialize_calendar",
    "serialize_event",
    "serialize_recurring_event",
    "serialize_result",
]
