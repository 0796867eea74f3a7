"""Tests for the timezone service."""

from datetime import datetime

import pytest

from timeboard.domain import InvalidTimezoneError
from timeboard.services import TimezoneService


class TestValidation:
    @pytest.mark.parametrize("zone", ["America/New_York", "Asia/Kolkata", "Europe/London", "UTC"])
    def test_known_zones_are_valid(self, timezones, zone):
        assert timezones.is_valid_timezone(zone)

    @pytest.mark.parametrize("zone", ["", "   ", None, "Mars/Olympus", "America", "not a zone"])
    def test_unknown_zones_are_invalid(self, timezones, zone):
        assert not timezones.is_valid_timezone(zone)

    def test_zone_raises_for_invalid_identifier(self, timezones):
        with pytest.raises(InvalidTimezoneError):
            timezones.zone("Nowhere/Special")

    def test_default_timezone(self):
        assert TimezoneService().default_timezone == "America/New_York"
        assert TimezoneService("Asia/Kolkata").default_timezone == "Asia/Kolkata"

    def test_available_timezones_sorted(self, timezones):
        zones = timezones.available_timezones()
        assert "America/New_York" in zones
        assert zones == sorted(zones)


class TestConversion:
    def test_to_utc_during_daylight_time(self, timezones):
        assert timezones.to_utc(datetime(2024, 3, 26, 9, 0), "America/New_York") == datetime(2024, 3, 26, 13, 0)

    def test_to_utc_during_standard_time(self, timezones):
        assert timezones.to_utc(datetime(2024, 1, 15, 9, 0), "America/New_York") == datetime(2024, 1, 15, 14, 0)

    def test_from_utc_half_hour_offset(self, timezones):
        assert timezones.from_utc(datetime(2024, 4, 1, 22, 0), "Asia/Kolkata") == datetime(2024, 4, 2, 3, 30)

    @pytest.mark.parametrize("zone", ["America/New_York", "Asia/Kolkata", "Australia/Sydney", "UTC"])
    @pytest.mark.parametrize(
        "local",
        [
            datetime(2024, 1, 1, 0, 0),
            datetime(2024, 3, 26, 9, 15),
            datetime(2024, 7, 4, 23, 59, 59),
            datetime(2024, 12, 31, 12, 0),
        ],
    )
    def test_round_trip_preserves_local_time(self, timezones, zone, local):
        assert timezones.from_utc(timezones.to_utc(local, zone), zone) == local

    def test_convert_between_zones(self, timezones):
        converted = timezones.convert(datetime(2024, 4, 1, 18, 0), "America/New_York", "Asia/Kolkata")
        assert converted == datetime(2024, 4, 2, 3, 30)

    def test_build_converter(self, timezones):
        convert = timezones.build_converter("America/New_York", "Europe/London")
        assert convert(datetime(2024, 4, 1, 9, 0)) == datetime(2024, 4, 1, 14, 0)

    def test_build_converter_validates_eagerly(self, timezones):
        with pytest.raises(InvalidTimezoneError):
            timezones.build_converter("America/New_York", "Bad/Zone")
