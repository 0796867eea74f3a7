from __future__ import annotations

import logging
import re
from typing import Callable, Dict, List, Optional, TypeVar

from ..config import get_settings
from ..domain import (
    CalendarNotFoundError,
    DuplicateCalendarError,
    InvalidCalendarNameError,
)
from .calendar import Calendar
from .timezones import TimezoneService

logger = logging.getLogger(__name__)

T = TypeVar("T")

CalendarOperation = Callable[[Calendar], T]

_NAME_PATTERN = re.compile(r"\w+")


class CalendarNameValidator:
    """Normalizes and validates calendar names.

    Surrounding matching quotes are removed, then the name must be a
    non-empty run of letters, digits and underscores.
    """

    def __init__(self, max_length: int = 100) -> None:
        self.max_length = max_length

    @staticmethod
    def normalize(name: Optional[str]) -> str:
        if name is None:
            return ""
        text = name.strip()
        if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
            text = text[1:-1]
        return text

    def validate(self, name: Optional[str]) -> str:
        if name is None:
            raise InvalidCalendarNameError("Calendar name cannot be null")
        normalized = self.normalize(name)
        if not normalized:
            raise InvalidCalendarNameError("Calendar name cannot be empty")
        if len(normalized) > self.max_length:
            raise InvalidCalendarNameError(
                f"Calendar name cannot be longer than {self.max_length} characters"
            )
        if not _NAME_PATTERN.fullmatch(normalized):
            raise InvalidCalendarNameError(f"Invalid calendar name: {name}")
        return normalized


class CalendarManager:
    """Registry of named calendars with a single active-calendar pointer."""

    def __init__(
        self,
        timezones: Optional[TimezoneService] = None,
        validator: Optional[CalendarNameValidator] = None,
    ) -> None:
        settings = get_settings().calendar
        self.timezones = timezones or TimezoneService(settings.default_timezone)
        self.validator = validator or CalendarNameValidator(settings.max_name_length)
        self._calendars: Dict[str, Calendar] = {}
        self._active: Optional[str] = None

    # Registry ------------------------------------------------------------
    def create_calendar(self, name: str, timezone: Optional[str] = None) -> Calendar:
        zone_id = timezone or self.timezones.default_timezone
        self.timezones.zone(zone_id)
        normalized = self.validator.validate(name)
        if normalized in self._calendars:
            raise DuplicateCalendarError(f"Calendar with name '{normalized}' already exists")

        calendar = Calendar(name=normalized, timezone=zone_id, timezones=self.timezones)
        self._calendars[normalized] = calendar
        if self._active is None:
            self._active = normalized
        logger.info("Created calendar '%s' (%s)", normalized, zone_id)
        return calendar

    def get_calendar(self, name: str) -> Calendar:
        calendar = self._calendars.get(self.validator.normalize(name))
        if calendar is None:
            raise CalendarNotFoundError(f"Calendar not found: {name}")
        return calendar

    def has_calendar(self, name: Optional[str]) -> bool:
        return self.validator.normalize(name) in self._calendars

    def calendar_names(self) -> List[str]:
        return sorted(self._calendars)

    @property
    def calendar_count(self) -> int:
        return len(self._calendars)

    def remove_calendar(self, name: str) -> Calendar:
        calendar = self.get_calendar(name)
        del self._calendars[calendar.name]
        if self._active == calendar.name:
            self._active = next(iter(self._calendars), None)
        logger.info("Removed calendar '%s'", calendar.name)
        return calendar

    # Active calendar -----------------------------------------------------
    def set_active_calendar(self, name: str) -> Calendar:
        calendar = self.get_calendar(name)
        self._active = calendar.name
        logger.info("Active calendar is now '%s'", calendar.name)
        return calendar

    def get_active_calendar(self) -> Calendar:
        if self._active is None:
            raise CalendarNotFoundError("No active calendar")
        return self._calendars[self._active]

    @property
    def active_calendar_name(self) -> Optional[str]:
        return self._active

    def execute_on_calendar(self, name: str, operation: CalendarOperation[T]) -> T:
        return operation(self.get_calendar(name))

    # Calendar properties -------------------------------------------------
    def edit_calendar_timezone(self, name: str, timezone: str) -> Calendar:
        self.timezones.zone(timezone)
        calendar = self.get_calendar(name)
        calendar.set_timezone(timezone)
        return calendar

    def rename_calendar(self, old_name: str, new_name: str) -> Calendar:
        calendar = self.get_calendar(old_name)
        normalized = self.validator.validate(new_name)
        if normalized == calendar.name:
            return calendar
        if normalized in self._calendars:
            raise DuplicateCalendarError(f"Calendar with name '{normalized}' already exists")

        previous = calendar.name
        del self._calendars[previous]
        calendar.rename(normalized)
        self._calendars[normalized] = calendar
        if self._active == previous:
            self._active = normalized
        logger.info("Renamed calendar '%s' to '%s'", previous, normalized)
        return calendar


__all__ = ["CalendarManager", "CalendarNameValidator", "CalendarOperation"]
