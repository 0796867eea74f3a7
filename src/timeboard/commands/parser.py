from __future__ import annotations

import logging
import re
from datetime import datetime
from re import Match, Pattern
from typing import Callable, List, Optional, Tuple

from ..domain import CommandSyntaxError, EditScope
from ..utils.dates import end_of_day, parse_date, parse_datetime, start_of_day
from .models import (
    CalendarProperty,
    Command,
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

logger = logging.getLogger(__name__)

CommandBuilder = Callable[[Match[str]], Command]

_DATE = r"\d{4}-\d{2}-\d{2}"
_DATETIME = r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(?::\d{2})?"
_DATE_OR_DATETIME = rf"{_DATE}(?:T\d{{2}}:\d{{2}}(?::\d{{2}})?)?"
_QUOTED_OR_WORD = r"\"[^\"]+\"|'[^']+'|\S+"
_VALUE = r"\"[^\"]*\"|'[^']*'|.+"
_DETAILS = r"(?:\s+desc\s+\"(?P<desc>[^\"]*)\")?(?:\s+at\s+\"(?P<loc>[^\"]*)\")?(?:\s+(?P<private>private))?"
_REPEATS = rf"(?:\s+repeats\s+(?P<days>[MTWRFSU]+)\s+(?:for\s+(?P<count>\d+)\s+times|until\s+(?P<until>{_DATE})))?"


def unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
        return text[1:-1]
    return text


def _parse_bound(text: str, *, upper: bool) -> datetime:
    if "T" in text:
        return parse_datetime(text)
    day = parse_date(text)
    return end_of_day(day) if upper else start_of_day(day)


class CommandParser:
    """Turns one line of the command language into a typed command.

    Patterns are tried in registration order; the first full match wins.
    """

    def __init__(self) -> None:
        self._patterns: List[Tuple[str, Pattern[str], CommandBuilder]] = []
        self._register_defaults()

    def register_pattern(self, name: str, pattern: str, builder: CommandBuilder) -> None:
        if not name or not pattern or builder is None:
            raise ValueError("Pattern registration parameters cannot be empty")
        self._patterns.append((name, re.compile(pattern), builder))

    def parse(self, text: Optional[str]) -> Command:
        line = (text or "").strip()
        if not line:
            raise CommandSyntaxError("Command cannot be empty")
        for name, pattern, builder in self._patterns:
            match = pattern.fullmatch(line)
            if match is None:
                continue
            logger.debug("Matched '%s' as %s", line, name)
            try:
                return builder(match)
            except CommandSyntaxError:
                raise
            except ValueError as exc:
                raise CommandSyntaxError(str(exc)) from exc
        raise CommandSyntaxError(f"Unrecognized command: {line}")

    def _register_defaults(self) -> None:
        self.register_pattern(
            "create_calendar",
            rf"create calendar --name (?P<name>{_QUOTED_OR_WORD}) --timezone (?P<zone>\S+)",
            lambda m: CreateCalendar(name=unquote(m["name"]), timezone=m["zone"]),
        )
        self.register_pattern(
            "use_calendar",
            rf"use calendar --name (?P<name>{_QUOTED_OR_WORD})",
            lambda m: UseCalendar(name=unquote(m["name"])),
        )
        self.register_pattern(
            "edit_calendar",
            rf"edit calendar --name (?P<name>{_QUOTED_OR_WORD}) --property (?P<prop>\w+) (?P<value>{_VALUE})",
            self._edit_calendar,
        )
        self.register_pattern(
            "create_timed_event",
            rf"create event (?P<auto>--autoDecline )?(?P<subject>{_QUOTED_OR_WORD}) "
            rf"from (?P<start>{_DATETIME}) to (?P<end>{_DATETIME}){_REPEATS}{_DETAILS}",
            self._create_timed,
        )
        self.register_pattern(
            "create_all_day_event",
            rf"create event (?P<auto>--autoDecline )?(?P<subject>{_QUOTED_OR_WORD}) "
            rf"on (?P<day>{_DATE}){_REPEATS}{_DETAILS}",
            self._create_all_day,
        )
        self.register_pattern(
            "edit_single_event",
            rf"edit event (?P<prop>\w+) (?P<subject>{_QUOTED_OR_WORD}) from (?P<start>{_DATETIME})"
            rf"(?: to (?P<end>{_DATETIME}))? with (?P<value>{_VALUE})",
            lambda m: EditEvents(
                scope=EditScope.SINGLE,
                property=m["prop"],
                subject=unquote(m["subject"]),
                value=unquote(m["value"]),
                start=parse_datetime(m["start"]),
                end=parse_datetime(m["end"]) if m["end"] else None,
            ),
        )
        self.register_pattern(
            "edit_events_from_date",
            rf"edit events (?P<prop>\w+) (?P<subject>{_QUOTED_OR_WORD}) from (?P<start>{_DATETIME}) "
            rf"with (?P<value>{_VALUE})",
            lambda m: EditEvents(
                scope=EditScope.FROM_DATE,
                property=m["prop"],
                subject=unquote(m["subject"]),
                value=unquote(m["value"]),
                start=parse_datetime(m["start"]),
            ),
        )
        self.register_pattern(
            "edit_all_events",
            rf"edit events (?P<prop>\w+) (?P<subject>{_QUOTED_OR_WORD}) (?P<value>{_VALUE})",
            lambda m: EditEvents(
                scope=EditScope.ALL,
                property=m["prop"],
                subject=unquote(m["subject"]),
                value=unquote(m["value"]),
            ),
        )
        self.register_pattern(
            "copy_event",
            rf"copy event (?P<subject>{_QUOTED_OR_WORD}) on (?P<start>{_DATETIME}) "
            rf"--target (?P<target>{_QUOTED_OR_WORD}) to (?P<to>{_DATETIME})",
            lambda m: CopyEvent(
                subject=unquote(m["subject"]),
                source_start=parse_datetime(m["start"]),
                target=unquote(m["target"]),
                target_start=parse_datetime(m["to"]),
            ),
        )
        self.register_pattern(
            "copy_events_on",
            rf"copy events on (?P<day>{_DATE}) --target (?P<target>{_QUOTED_OR_WORD}) to (?P<to>{_DATE})",
            lambda m: CopyEventsOn(
                day=parse_date(m["day"]),
                target=unquote(m["target"]),
                target_day=parse_date(m["to"]),
            ),
        )
        self.register_pattern(
            "copy_events_between",
            rf"copy events between (?P<start>{_DATE}) and (?P<end>{_DATE}) "
            rf"--target (?P<target>{_QUOTED_OR_WORD}) to (?P<to>{_DATE})",
            lambda m: CopyEventsBetween(
                start_date=parse_date(m["start"]),
                end_date=parse_date(m["end"]),
                target=unquote(m["target"]),
                target_start=parse_date(m["to"]),
            ),
        )
        self.register_pattern(
            "print_events_on",
            rf"print events on (?P<day>{_DATE})",
            lambda m: PrintEventsOn(day=parse_date(m["day"])),
        )
        self.register_pattern(
            "print_events_range",
            rf"print events from (?P<start>{_DATE_OR_DATETIME}) to (?P<end>{_DATE_OR_DATETIME})",
            lambda m: PrintEventsRange(
                start=_parse_bound(m["start"], upper=False),
                end=_parse_bound(m["end"], upper=True),
            ),
        )
        self.register_pattern(
            "show_status",
            rf"show status on (?P<moment>{_DATETIME})",
            lambda m: ShowStatus(moment=parse_datetime(m["moment"])),
        )
        self.register_pattern(
            "export_calendar",
            r"export cal(?: (?P<path>.+))?",
            lambda m: ExportCalendar(path=unquote(m["path"].strip()) if m["path"] else None),
        )
        self.register_pattern(
            "import_calendar",
            r"import cal (?P<path>.+)",
            lambda m: ImportCalendar(path=unquote(m["path"].strip())),
        )
        self.register_pattern("exit", r"exit", lambda m: Exit())

    @staticmethod
    def _edit_calendar(match: Match[str]) -> EditCalendar:
        try:
            prop = CalendarProperty(match["prop"].lower())
        except ValueError as exc:
            raise CommandSyntaxError(f"Unsupported calendar property: {match['prop']}") from exc
        return EditCalendar(name=unquote(match["name"]), property=prop, value=unquote(match["value"]))

    @staticmethod
    def _create_timed(match: Match[str]) -> Command:
        start = parse_datetime(match["start"])
        end = parse_datetime(match["end"])
        details = _details(match)
        if match["days"]:
            return CreateRecurringEvent(subject=unquote(match["subject"]), start=start, end=end, **_repeat(match), **details)
        return CreateEvent(subject=unquote(match["subject"]), start=start, end=end, **details)

    @staticmethod
    def _create_all_day(match: Match[str]) -> Command:
        day = parse_date(match["day"])
        details = _details(match)
        if match["days"]:
            return CreateRecurringEvent(
                subject=unquote(match["subject"]),
                start=start_of_day(day),
                end=end_of_day(day),
                all_day=True,
                **_repeat(match),
                **details,
            )
        return CreateAllDayEvent(subject=unquote(match["subject"]), day=day, **details)


def _details(match: Match[str]) -> dict:
    return {
        "auto_decline": bool(match["auto"]),
        "description": match["desc"],
        "location": match["loc"],
        "is_public": not match["private"],
    }


def _repeat(match: Match[str]) -> dict:
    return {
        "weekdays": match["days"],
        "occurrences": int(match["count"]) if match["count"] else None,
        "until": parse_date(match["until"]) if match["until"] else None,
    }


__all__ = ["CommandParser", "unquote"]
