"""Configuration models and helpers."""

from __future__ import annotations

from .paths import APP_NAME, DATA_DIR, ensure_data_dir
from .settings import AppSettings, CalendarSettings, ExportSettings, LoggingSettings, get_settings

__all__ = [
    "APP_NAME",
    "AppSettings",
    "CalendarSettings",
    "DATA_DIR",
    "ExportSettings",
    "LoggingSettings",
    "ensure_data_dir",
    "get_settings",
]
