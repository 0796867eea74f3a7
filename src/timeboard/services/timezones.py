from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from typing import Callable, List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones

from ..domain import InvalidTimezoneError

logger = logging.getLogger(__name__)

UTC_ZONE = "UTC"

TimezoneConverter = Callable[[datetime], datetime]


@lru_cache(maxsize=256)
def _load_zone(zone_id: str) -> ZoneInfo:
    return ZoneInfo(zone_id)


@dataclass(frozen=True)
class TimezoneService:
    """Validation and conversion between IANA zones and naive UTC wall clocks.

    Calendars store naive datetimes holding the UTC wall-clock value. Local
    times falling in a DST gap or fold resolve with ``fold=0``.
    """

    default_zone: str = "America/New_York"

    @property
    def default_timezone(self) -> str:
        return self.default_zone

    def is_valid_timezone(self, zone_id: str | None) -> bool:
        if not zone_id or not zone_id.strip():
            return False
        try:
            _load_zone(zone_id)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            return False
        return True

    def zone(self, zone_id: str) -> ZoneInfo:
        if not self.is_valid_timezone(zone_id):
            raise InvalidTimezoneError(f"Invalid timezone: {zone_id}")
        return _load_zone(zone_id)

    def available_timezones(self) -> List[str]:
        return sorted(available_timezones())

    def to_utc(self, local: datetime, zone_id: str) -> datetime:
        zone = self.zone(zone_id)
        aware = local.replace(tzinfo=zone)
        return aware.astimezone(timezone.utc).replace(tzinfo=None)

    def from_utc(self, utc: datetime, zone_id: str) -> datetime:
        zone = self.zone(zone_id)
        aware = utc.replace(tzinfo=timezone.utc)
        return aware.astimezone(zone).replace(tzinfo=None)

    def convert(self, value: datetime, from_zone: str, to_zone: str) -> datetime:
        return self.from_utc(self.to_utc(value, from_zone), to_zone)

    def build_converter(self, from_zone: str, to_zone: str) -> TimezoneConverter:
        # Validate eagerly so a bad zone fails at build time rather than per event.
        self.zone(from_zone)
        self.zone(to_zone)
        logger.debug("Built timezone converter %s -> %s", from_zone, to_zone)

        def _convert(value: datetime) -> datetime:
            return self.convert(value, from_zone, to_zone)

        return _convert


__all__ = ["TimezoneConverter", "TimezoneService", "UTC_ZONE"]
