from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

from .paths import EXPORT_DIR, LOG_DIR

load_dotenv()


@dataclass(frozen=True)
class CalendarSettings:
    default_timezone: str
    default_calendar: str
    max_name_length: int


@dataclass(frozen=True)
class ExportSettings:
    directory: Path
    default_filename: str

    @property
    def default_path(self) -> Path:
        return self.directory / self.default_filename

    def resolve(self, filename: str) -> Path:
        """Relative export targets land in the configured export directory."""

        candidate = Path(filename).expanduser()
        if candidate.is_absolute():
            return candidate
        return self.directory / candidate


@dataclass(frozen=True)
class LoggingSettings:
    level: str
    directory: Path

    @property
    def log_file(self) -> Path:
        return self.directory / "timeboard.log"


@dataclass(frozen=True)
class AppSettings:
    calendar: CalendarSettings
    export: ExportSettings
    logging: LoggingSettings


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _path_from_env(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    return Path(raw).expanduser() if raw else default


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    calendar = CalendarSettings(
        default_timezone=os.getenv("TIMEBOARD_DEFAULT_TIMEZONE", "America/New_York"),
        default_calendar=os.getenv("TIMEBOARD_DEFAULT_CALENDAR", "Default"),
        max_name_length=_int_from_env("TIMEBOARD_MAX_CALENDAR_NAME", 100),
    )

    export = ExportSettings(
        directory=_path_from_env("TIMEBOARD_EXPORT_DIR", EXPORT_DIR),
        default_filename=os.getenv("TIMEBOARD_EXPORT_FILENAME", "calendar.csv"),
    )

    logging_settings = LoggingSettings(
        level=os.getenv("TIMEBOARD_LOG_LEVEL", "INFO").upper(),
        directory=_path_from_env("TIMEBOARD_LOG_DIR", LOG_DIR),
    )

    return AppSettings(calendar=calendar, export=export, logging=logging_settings)
