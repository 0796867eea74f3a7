from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Iterable

from .errors import InvalidEventError


class Weekday(str, Enum):
    MONDAY = "M"
    TUESDAY = "T"
    WEDNESDAY = "W"
    THURSDAY = "R"
    FRIDAY = "F"
    SATURDAY = "S"
    SUNDAY = "U"

    @property
    def index(self) -> int:
        return _WEEKDAY_ORDER.index(self)

    @classmethod
    def of(cls, day: date) -> "Weekday":
        return _WEEKDAY_ORDER[day.weekday()]


_WEEKDAY_ORDER = (
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
    Weekday.SATURDAY,
    Weekday.SUNDAY,
)


def parse_weekdays(codes: str) -> frozenset[Weekday]:
    """Parse a weekday pattern such as ``"MWF"`` into a set of weekdays."""

    if not codes or not codes.strip():
        raise InvalidEventError("Weekday pattern cannot be empty")
    weekdays = set()
    for code in codes.strip().upper():
        try:
            weekdays.add(Weekday(code))
        except ValueError as exc:
            raise InvalidEventError(f"Invalid weekday character: {code}") from exc
    return frozenset(weekdays)


def format_weekdays(weekdays: Iterable[Weekday]) -> str:
    return "".join(day.value for day in sorted(weekdays, key=lambda item: item.index))


class EventProperty(str, Enum):
    SUBJECT = "subject"
    DESCRIPTION = "description"
    LOCATION = "location"
    START = "start"
    END = "end"
    VISIBILITY = "visibility"
    PRIVATE = "private"

    @classmethod
    def resolve(cls, name: str) -> "EventProperty":
        key = (name or "").strip().lower()
        if key not in _PROPERTY_ALIASES:
            raise InvalidEventError(f"Unknown event property: {name}")
        return _PROPERTY_ALIASES[key]


_PROPERTY_ALIASES = {
    "subject": EventProperty.SUBJECT,
    "name": EventProperty.SUBJECT,
    "description": EventProperty.DESCRIPTION,
    "location": EventProperty.LOCATION,
    "start": EventProperty.START,
    "starttime": EventProperty.START,
    "startdatetime": EventProperty.START,
    "end": EventProperty.END,
    "endtime": EventProperty.END,
    "enddatetime": EventProperty.END,
    "visibility": EventProperty.VISIBILITY,
    "ispublic": EventProperty.VISIBILITY,
    "public": EventProperty.VISIBILITY,
    "private": EventProperty.PRIVATE,
}


class EditScope(str, Enum):
    SINGLE = "single"
    FROM_DATE = "series_from_date"
    ALL = "all"
