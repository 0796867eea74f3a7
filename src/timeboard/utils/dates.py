from __future__ import annotations

from datetime import date, datetime, time

_DATETIME_FORMATS = ("%Y-%m-%dT%H:%M", "%Y-%m-%dT%H:%M:%S")
_TIME_FORMATS = ("%H:%M", "%H:%M:%S")

END_OF_DAY = time(23, 59, 59)


def parse_date(value: str) -> date:
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError) as exc:
        raise ValueError(f"Invalid date format: {value}. Expected format: YYYY-MM-DD") from exc


def parse_datetime(value: str) -> datetime:
    text = (value or "").strip()
    for fmt in _DATETIME_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise ValueError(
        f"Invalid date time format: {value}. Expected format: YYYY-MM-DDThh:mm or YYYY-MM-DDThh:mm:ss"
    )


def parse_time(value: str) -> time:
    text = (value or "").strip()
    for fmt in _TIME_FORMATS:
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Invalid time format: {value}. Expected format: HH:MM")


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, END_OF_DAY)
