from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain import Event, RecurringEvent, format_weekdays


class EventPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    subject: str
    start: str
    end: str
    all_day: bool = Field(default=False)
    date: Optional[str] = Field(default=None)
    description: str = Field(default="")
    location: str = Field(default="")
    public: bool = Field(default=True)
    series_id: Optional[str] = Field(default=None)

    @classmethod
    def from_domain(cls, event: Event) -> "EventPayload":
        return cls(
            id=str(event.id),
            subject=event.subject,
            start=_iso(event.start),
            end=_iso(event.end),
            all_day=event.is_all_day,
            date=_iso(event.date),
            description=event.description,
            location=event.location,
            public=event.is_public,
            series_id=str(event.series_id) if event.series_id else None,
        )


class RecurringEventPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    subject: str
    start: str
    end: str
    weekdays: str
    occurrences: Optional[int] = Field(default=None)
    until: Optional[str] = Field(default=None)
    all_day: bool = Field(default=False)
    description: str = Field(default="")
    location: str = Field(default="")
    public: bool = Field(default=True)

    @classmethod
    def from_domain(cls, recurring: RecurringEvent) -> "RecurringEventPayload":
        return cls(
            id=str(recurring.id),
            subject=recurring.subject,
            start=_iso(recurring.start),
            end=_iso(recurring.end),
            weekdays=format_weekdays(recurring.weekdays),
            occurrences=recurring.occurrences,
            until=_iso(recurring.until),
            all_day=recurring.is_all_day,
            description=recurring.description,
            location=recurring.location,
            public=recurring.is_public,
        )


class CalendarPayload(BaseModel):
    name: str
    timezone: str
    active: bool = Field(default=False)
    event_count: int = Field(default=0)


class CommandResultPayload(BaseModel):
    ok: bool
    message: str
    events: List[EventPayload] = Field(default_factory=list)
    exit_requested: bool = Field(default=False)


def _iso(value: Optional[date | datetime]) -> Optional[str]:
    return value.isoformat() if value else None
