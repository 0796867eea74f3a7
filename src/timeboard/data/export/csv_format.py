from __future__ import annotations

import csv
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Sequence, Union

from ...domain import Event, InvalidEventError
from ...utils.dates import parse_date, parse_time

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

CSV_HEADER = (
    "Subject",
    "Start Date",
    "Start Time",
    "End Date",
    "End Time",
    "All Day",
    "Description",
    "Location",
    "Public",
)

_DATE_FORMAT = "%Y-%m-%d"
_TIME_FORMAT = "%H:%M"


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


def _parse_bool(value: str) -> bool:
    key = value.strip().lower()
    if key == "true":
        return True
    if key == "false":
        return False
    raise ValueError(f"Expected true or false, got '{value}'")


class CsvExporter:
    """Writes local-time events as CSV rows, one per event, sorted by start."""

    def export(self, path: PathLike, events: Iterable[Event]) -> str:
        target = Path(path).expanduser()
        target.parent.mkdir(parents=True, exist_ok=True)
        ordered = sorted(events, key=lambda event: (event.start, event.subject))
        with target.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle, lineterminator="\n")
            writer.writerow(CSV_HEADER)
            writer.writerows(self.row(event) for event in ordered)
        logger.debug("Wrote %d events to %s", len(ordered), target)
        return str(target)

    @staticmethod
    def row(event: Event) -> List[str]:
        if event.is_all_day:
            day = (event.date or event.start.date()).strftime(_DATE_FORMAT)
            start_date, start_time, end_date, end_time = day, "", day, ""
        else:
            start_date = event.start.strftime(_DATE_FORMAT)
            start_time = event.start.strftime(_TIME_FORMAT)
            end_date = event.end.strftime(_DATE_FORMAT)
            end_time = event.end.strftime(_TIME_FORMAT)
        return [
            event.subject,
            start_date,
            start_time,
            end_date,
            end_time,
            _format_bool(event.is_all_day),
            event.description,
            event.location,
            _format_bool(event.is_public),
        ]


class CsvImporter:
    """Reads files produced by :class:`CsvExporter` back into events."""

    def read(self, path: PathLike) -> List[Event]:
        source = Path(path).expanduser()
        with source.open("r", newline="", encoding="utf-8") as handle:
            reader = csv.reader(handle)
            header = next(reader, None)
            if header is None or tuple(header) != CSV_HEADER:
                raise ValueError(f"Unexpected CSV header in {source}: {header}")
            events: List[Event] = []
            for line_number, row in enumerate(reader, start=2):
                if not any(cell.strip() for cell in row):
                    continue
                try:
                    events.append(self.parse_row(row))
                except ValueError as exc:
                    raise InvalidEventError(f"Line {line_number}: {exc}") from exc
        logger.debug("Read %d events from %s", len(events), source)
        return events

    @staticmethod
    def parse_row(row: Sequence[str]) -> Event:
        if len(row) != len(CSV_HEADER):
            raise ValueError(f"Expected {len(CSV_HEADER)} columns, got {len(row)}")
        subject, start_date, start_time, end_date, end_time, all_day, description, location, public = row
        is_public = _parse_bool(public)
        if _parse_bool(all_day):
            return Event.all_day(subject, parse_date(start_date), description, location, is_public)
        start = datetime.combine(parse_date(start_date), parse_time(start_time))
        end = datetime.combine(parse_date(end_date), parse_time(end_time))
        return Event.timed(subject, start, end, description, location, is_public)
