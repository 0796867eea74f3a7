from __future__ import annotations

import pytest

from timeboard.commands import CommandExecutor
from timeboard.config import get_settings
from timeboard.services import Calendar, CalendarManager, ServiceContext, TimezoneService


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("TIMEBOARD_DEFAULT_TIMEZONE", "America/New_York")
    monkeypatch.setenv("TIMEBOARD_DEFAULT_CALENDAR", "Default")
    monkeypatch.setenv("TIMEBOARD_MAX_CALENDAR_NAME", "100")
    monkeypatch.setenv("TIMEBOARD_EXPORT_DIR", str(tmp_path / "exports"))
    monkeypatch.setenv("TIMEBOARD_EXPORT_FILENAME", "calendar.csv")
    monkeypatch.setenv("TIMEBOARD_LOG_DIR", str(tmp_path / "logs"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def timezones() -> TimezoneService:
    return TimezoneService()


@pytest.fixture
def calendar(timezones) -> Calendar:
    return Calendar(name="Work", timezone="America/New_York", timezones=timezones)


@pytest.fixture
def manager() -> CalendarManager:
    return CalendarManager()


@pytest.fixture
def context() -> ServiceContext:
    ctx = ServiceContext()
    ctx.ensure_default_calendar()
    return ctx


@pytest.fixture
def executor(context) -> CommandExecutor:
    return CommandExecutor(context)
