from __future__ import annotations

from dataclasses import dataclass, field

from ..config import AppSettings, get_settings
from ..data import CsvExporter, CsvImporter
from .copying import EventCopier
from .manager import CalendarManager
from .timezones import TimezoneService


@dataclass(slots=True)
class ServiceContext:
    """Aggregate root for services to share settings, the calendar registry and CSV exchange."""

    settings: AppSettings = field(default_factory=get_settings)
    timezones: TimezoneService = field(init=False)
    manager: CalendarManager = field(init=False)
    copier: EventCopier = field(init=False)
    exporter: CsvExporter = field(default_factory=CsvExporter)
    importer: CsvImporter = field(default_factory=CsvImporter)

    def __post_init__(self) -> None:
        self.timezones = TimezoneService(self.settings.calendar.default_timezone)
        self.manager = CalendarManager(timezones=self.timezones)
        self.copier = EventCopier(self.manager)

    def ensure_default_calendar(self) -> None:
        name = self.settings.calendar.default_calendar
        if not self.manager.has_calendar(name):
            self.manager.create_calendar(name, self.timezones.default_timezone)
        self.manager.set_active_calendar(name)
