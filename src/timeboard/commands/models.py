from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import ClassVar, Optional, Union

from ..domain import EditScope


class CommandKind(str, Enum):
    CREATE_CALENDAR = "create_calendar"
    USE_CALENDAR = "use_calendar"
    EDIT_CALENDAR = "edit_calendar"
    CREATE_EVENT = "create_event"
    CREATE_ALL_DAY_EVENT = "create_all_day_event"
    CREATE_RECURRING_EVENT = "create_recurring_event"
    EDIT_EVENTS = "edit_events"
    COPY_EVENT = "copy_event"
    COPY_EVENTS_ON = "copy_events_on"
    COPY_EVENTS_BETWEEN = "copy_events_between"
    PRINT_EVENTS_ON = "print_events_on"
    PRINT_EVENTS_RANGE = "print_events_range"
    SHOW_STATUS = "show_status"
    EXPORT_CALENDAR = "export_calendar"
    IMPORT_CALENDAR = "import_calendar"
    EXIT = "exit"


class CalendarProperty(str, Enum):
    NAME = "name"
    TIMEZONE = "timezone"


@dataclass(frozen=True)
class CreateCalendar:
    kind: ClassVar[CommandKind] = CommandKind.CREATE_CALENDAR
    name: str
    timezone: str


@dataclass(frozen=True)
class UseCalendar:
    kind: ClassVar[CommandKind] = CommandKind.USE_CALENDAR
    name: str


@dataclass(frozen=True)
class EditCalendar:
    kind: ClassVar[CommandKind] = CommandKind.EDIT_CALENDAR
    name: str
    property: CalendarProperty
    value: str


@dataclass(frozen=True)
class CreateEvent:
    kind: ClassVar[CommandKind] = CommandKind.CREATE_EVENT
    subject: str
    start: datetime
    end: datetime
    auto_decline: bool = False
    description: Optional[str] = None
    location: Optional[str] = None
    is_public: bool = True


@dataclass(frozen=True)
class CreateAllDayEvent:
    kind: ClassVar[CommandKind] = CommandKind.CREATE_ALL_DAY_EVENT
    subject: str
    day: date
    auto_decline: bool = False
    description: Optional[str] = None
    location: Optional[str] = None
    is_public: bool = True


@dataclass(frozen=True)
class CreateRecurringEvent:
    """Timed or all-day series; exactly one of ``occurrences``/``until`` is set."""

    kind: ClassVar[CommandKind] = CommandKind.CREATE_RECURRING_EVENT
    subject: str
    start: datetime
    end: datetime
    weekdays: str
    occurrences: Optional[int] = None
    until: Optional[date] = None
    all_day: bool = False
    auto_decline: bool = False
    description: Optional[str] = None
    location: Optional[str] = None
    is_public: bool = True


@dataclass(frozen=True)
class EditEvents:
    kind: ClassVar[CommandKind] = CommandKind.EDIT_EVENTS
    scope: EditScope
    property: str
    subject: str
    value: str
    start: Optional[datetime] = None
    end: Optional[datetime] = None


@dataclass(frozen=True)
class CopyEvent:
    kind: ClassVar[CommandKind] = CommandKind.COPY_EVENT
    subject: str
    source_start: datetime
    target: str
    target_start: datetime


@dataclass(frozen=True)
class CopyEventsOn:
    kind: ClassVar[CommandKind] = CommandKind.COPY_EVENTS_ON
    day: date
    target: str
    target_day: date


@dataclass(frozen=True)
class CopyEventsBetween:
    kind: ClassVar[CommandKind] = CommandKind.COPY_EVENTS_BETWEEN
    start_date: date
    end_date: date
    target: str
    target_start: date


@dataclass(frozen=True)
class PrintEventsOn:
    kind: ClassVar[CommandKind] = CommandKind.PRINT_EVENTS_ON
    day: date


@dataclass(frozen=True)
class PrintEventsRange:
    kind: ClassVar[CommandKind] = CommandKind.PRINT_EVENTS_RANGE
    start: datetime
    end: datetime


@dataclass(frozen=True)
class ShowStatus:
    kind: ClassVar[CommandKind] = CommandKind.SHOW_STATUS
    moment: datetime


@dataclass(frozen=True)
class ExportCalendar:
    kind: ClassVar[CommandKind] = CommandKind.EXPORT_CALENDAR
    path: Optional[str] = None


@dataclass(frozen=True)
class ImportCalendar:
    kind: ClassVar[CommandKind] = CommandKind.IMPORT_CALENDAR
    path: str


@dataclass(frozen=True)
class Exit:
    kind: ClassVar[CommandKind] = CommandKind.EXIT


Command = Union[
    CreateCalendar,
    UseCalendar,
    EditCalendar,
    CreateEvent,
    CreateAllDayEvent,
    CreateRecurringEvent,
    EditEvents,
    CopyEvent,
    CopyEventsOn,
    CopyEventsBetween,
    PrintEventsOn,
    PrintEventsRange,
    ShowStatus,
    ExportCalendar,
    ImportCalendar,
    Exit,
]
