from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..domain import CalendarError, EditScope, Event
from ..services import Calendar, CalendarManager, ServiceContext
from .models import (
    CalendarProperty,
    Command,
    CommandKind,
    CopyEvent,
    CopyEventsBetween,
    CopyEventsOn,
    CreateAllDayEvent,
    CreateCalendar,
    CreateEvent,
    CreateRecurringEvent,
    EditCalendar,
    EditEvents,
    Exit,
    ExportCalendar,
    ImportCalendar,
    PrintEventsOn,
    PrintEventsRange,
    ShowStatus,
    UseCalendar,
)
from .parser import CommandParser

logger = logging.getLogger(__name__)

Handler = Callable[[Any], "CommandResult"]


@dataclass(frozen=True)
class CommandResult:
    ok: bool
    message: str
    events: List[Event] = field(default_factory=list)
    exit_requested: bool = False


def describe_event(event: Event) -> str:
    if event.is_all_day:
        when = f"{event.date.isoformat() if event.date else event.start.date().isoformat()} (all day)"
    else:
        when = f"{event.start.isoformat(timespec='minutes')} to {event.end.isoformat(timespec='minutes')}"
    text = f"{event.subject} - {when}"
    if event.location:
        text += f" at {event.location}"
    if not event.is_public:
        text += " [private]"
    return text


class CommandExecutor:
    """Runs parsed commands against the calendars held by a :class:`ServiceContext`."""

    def __init__(self, context: ServiceContext, parser: Optional[CommandParser] = None) -> None:
        self.context = context
        self.parser = parser or CommandParser()
        self._handlers: Dict[CommandKind, Handler] = {
            CommandKind.CREATE_CALENDAR: self._create_calendar,
            CommandKind.USE_CALENDAR: self._use_calendar,
            CommandKind.EDIT_CALENDAR: self._edit_calendar,
            CommandKind.CREATE_EVENT: self._create_event,
            CommandKind.CREATE_ALL_DAY_EVENT: self._create_all_day_event,
            CommandKind.CREATE_RECURRING_EVENT: self._create_recurring_event,
            CommandKind.EDIT_EVENTS: self._edit_events,
            CommandKind.COPY_EVENT: self._copy_event,
            CommandKind.COPY_EVENTS_ON: self._copy_events_on,
            CommandKind.COPY_EVENTS_BETWEEN: self._copy_events_between,
            CommandKind.PRINT_EVENTS_ON: self._print_events_on,
            CommandKind.PRINT_EVENTS_RANGE: self._print_events_range,
            CommandKind.SHOW_STATUS: self._show_status,
            CommandKind.EXPORT_CALENDAR: self._export_calendar,
            CommandKind.IMPORT_CALENDAR: self._import_calendar,
            CommandKind.EXIT: self._exit,
        }
        missing = [kind.value for kind in CommandKind if kind not in self._handlers]
        if missing:
            raise RuntimeError(f"No handler registered for: {', '.join(missing)}")

    @property
    def manager(self) -> CalendarManager:
        return self.context.manager

    def execute(self, command: Command) -> CommandResult:
        """Dispatch ``command``; domain errors propagate to the caller."""

        logger.debug("Executing %s", command.kind.value)
        return self._handlers[command.kind](command)

    def run_line(self, text: str) -> CommandResult:
        """Parse and execute one line, reporting domain failures as results.

        ``OSError`` from export or import is not converted.
        """

        try:
            return self.execute(self.parser.parse(text))
        except (CalendarError, ValueError) as exc:
            logger.warning("Command failed: %s (%s)", text.strip(), exc)
            return CommandResult(ok=False, message=f"Error: {exc}")

    # Calendars -----------------------------------------------------------
    def _create_calendar(self, command: CreateCalendar) -> CommandResult:
        calendar = self.manager.create_calendar(command.name, command.timezone)
        return CommandResult(True, f"Calendar '{calendar.name}' created with timezone {calendar.timezone}.")

    def _use_calendar(self, command: UseCalendar) -> CommandResult:
        calendar = self.manager.set_active_calendar(command.name)
        return CommandResult(True, f"Now using calendar '{calendar.name}'.")

    def _edit_calendar(self, command: EditCalendar) -> CommandResult:
        if command.property is CalendarProperty.NAME:
            calendar = self.manager.rename_calendar(command.name, command.value)
            return CommandResult(True, f"Calendar '{command.name}' renamed to '{calendar.name}'.")
        calendar = self.manager.edit_calendar_timezone(command.name, command.value)
        return CommandResult(True, f"Calendar '{calendar.name}' timezone set to {calendar.timezone}.")

    # Events --------------------------------------------------------------
    def _active(self) -> Calendar:
        return self.manager.get_active_calendar()

    def _create_event(self, command: CreateEvent) -> CommandResult:
        added = self._active().create_event(
            command.subject,
            command.start,
            command.end,
            description=command.description,
            location=command.location,
            is_public=command.is_public,
            auto_decline=command.auto_decline,
        )
        return _creation_result(command.subject, added)

    def _create_all_day_event(self, command: CreateAllDayEvent) -> CommandResult:
        added = self._active().create_all_day_event(
            command.subject,
            command.day,
            description=command.description,
            location=command.location,
            is_public=command.is_public,
            auto_decline=command.auto_decline,
        )
        return _creation_result(command.subject, added)

    def _create_recurring_event(self, command: CreateRecurringEvent) -> CommandResult:
        added = self._active().create_recurring_event(
            command.subject,
            command.start,
            command.end,
            command.weekdays,
            occurrences=command.occurrences,
            until=command.until,
            all_day=command.all_day,
            description=command.description,
            location=command.location,
            is_public=command.is_public,
            auto_decline=command.auto_decline,
        )
        return _creation_result(command.subject, added, recurring=True)

    def _edit_events(self, command: EditEvents) -> CommandResult:
        calendar = self._active()
        if command.scope is EditScope.SINGLE:
            event = calendar.find_event(command.subject, command.start)
            if event is None or (command.end is not None and event.end != command.end):
                return CommandResult(False, f"Event '{command.subject}' not found.")
            edited = calendar.edit_single_event(command.subject, command.start, command.property, command.value)
            if not edited:
                return CommandResult(False, f"Failed to update {command.property} of '{command.subject}'.")
            return CommandResult(True, f"Updated {command.property} of '{command.subject}'.")

        if command.scope is EditScope.FROM_DATE:
            count = calendar.edit_events_from_date(command.subject, command.start, command.property, command.value)
        else:
            count = calendar.edit_all_events(command.subject, command.property, command.value)
        if count == 0:
            return CommandResult(False, f"No events named '{command.subject}' were updated.")
        return CommandResult(True, f"Updated {command.property} of {count} '{command.subject}' events.")

    # Copying -------------------------------------------------------------
    def _copy_event(self, command: CopyEvent) -> CommandResult:
        copied = self.context.copier.copy_event(
            command.subject, command.source_start, command.target, command.target_start
        )
        return CommandResult(True, f"Event '{copied.subject}' copied to calendar '{command.target}'.")

    def _copy_events_on(self, command: CopyEventsOn) -> CommandResult:
        summary = self.context.copier.copy_events_on(command.day, command.target, command.target_day)
        return CommandResult(summary.ok, summary.message)

    def _copy_events_between(self, command: CopyEventsBetween) -> CommandResult:
        summary = self.context.copier.copy_events_between(
            command.start_date, command.end_date, command.target, command.target_start
        )
        return CommandResult(summary.ok, summary.message)

    # Queries -------------------------------------------------------------
    def _print_events_on(self, command: PrintEventsOn) -> CommandResult:
        events = self._active().get_events_on_date(command.day)
        if not events:
            return CommandResult(True, f"No events on {command.day.isoformat()}.")
        return CommandResult(True, f"Events on {command.day.isoformat()}:", events)

    def _print_events_range(self, command: PrintEventsRange) -> CommandResult:
        if command.start > command.end:
            return CommandResult(False, "Start must not be after end.")
        candidates = self._active().get_events_in_range(command.start.date(), command.end.date())
        events = [event for event in candidates if event.start <= command.end and event.end >= command.start]
        span = f"{command.start.isoformat(timespec='minutes')} and {command.end.isoformat(timespec='minutes')}"
        if not events:
            return CommandResult(True, f"No events between {span}.")
        return CommandResult(True, f"Events between {span}:", events)

    def _show_status(self, command: ShowStatus) -> CommandResult:
        busy = self._active().is_busy(command.moment)
        return CommandResult(True, "Busy" if busy else "Available")

    # Exchange ------------------------------------------------------------
    def _export_calendar(self, command: ExportCalendar) -> CommandResult:
        export = self.context.settings.export
        target = export.default_path if command.path is None else export.resolve(command.path)
        written = self._active().export_data(str(target), self.context.exporter)
        return CommandResult(True, f"Calendar exported to {written}")

    def _import_calendar(self, command: ImportCalendar) -> CommandResult:
        source = self.context.settings.export.resolve(command.path)
        events = self.context.importer.read(source)
        calendar = self._active()
        added = sum(1 for event in events if calendar.add_event(event))
        return CommandResult(
            added > 0 or not events,
            f"Imported {added} of {len(events)} events into calendar '{calendar.name}'.",
        )

    def _exit(self, command: Exit) -> CommandResult:
        return CommandResult(True, "Exiting.", exit_requested=True)


def _creation_result(subject: str, added: bool, *, recurring: bool = False) -> CommandResult:
    noun = "Recurring event" if recurring else "Event"
    if added:
        return CommandResult(True, f"{noun} '{subject}' created.")
    return CommandResult(False, f"{noun} '{subject}' conflicts with an existing event and was not created.")


__all__ = ["CommandExecutor", "CommandResult", "describe_event"]
