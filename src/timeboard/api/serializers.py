from __future__ import annotations

from typing import Any, Dict

import orjson

from ..commands import CommandResult
from ..domain import Event, RecurringEvent
from ..services import Calendar
from .models import CalendarPayload, CommandResultPayload, EventPayload, RecurringEventPayload


def serialize_event(event: Event) -> Dict[str, Any]:
    return EventPayload.from_domain(event).model_dump()


def serialize_recurring_event(recurring: RecurringEvent) -> Dict[str, Any]:
    return RecurringEventPayload.from_domain(recurring).model_dump()


def serialize_calendar(calendar: Calendar, *, active: bool = False) -> Dict[str, Any]:
    return CalendarPayload(
        name=calendar.name,
        timezone=calendar.timezone,
        active=active,
        event_count=calendar.event_count,
    ).model_dump()


def serialize_result(result: CommandResult) -> Dict[str, Any]:
    return CommandResultPayload(
        ok=result.ok,
        message=result.message,
        events=[EventPayload.from_domain(event) for event in result.events],
        exit_requested=result.exit_requested,
    ).model_dump()


def dumps(payload: Any, *, indent: bool = False) -> str:
    option = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(payload, option=option).decode("utf-8")
