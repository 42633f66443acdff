"""Tests for request parameter building."""

from __future__ import annotations

import datetime as dt

import pytest

from owm_client.clients.enums import Country
from owm_client.clients.exceptions import InvalidArgument
from owm_client.clients.params import (
    CityId,
    CityName,
    Coordinates,
    TimeRange,
    ZipCode,
    format_city_name,
    format_number,
    format_pollution_datetime,
    format_zip_code,
    location_params,
    resolve_count,
    to_epoch_seconds,
)


class TestFormatting:
    def test_city_name_with_country(self):
        assert format_city_name("London", Country.UNITED_KINGDOM) == "London,GB"

    def test_city_name_without_country(self):
        assert format_city_name("London") == "London"

    def test_zip_code(self):
        assert format_zip_code(94040, Country.UNITED_STATES) == "94040,US"

    def test_zip_code_defaults_to_us(self):
        assert format_zip_code("94040") == "94040,US"

    @pytest.mark.parametrize(
        "value, expected",
        [
            (51.51, "51.51"),
            (-0.13, "-0.13"),
            (0.0, "0.0"),
            (180.0, "180.0"),
            (10, "10"),
            (1e-05, "0.00001"),
            (-2.5e-07, "-0.00000025"),
            (1.5e-16, "0.00000000000000015"),
        ],
    )
    def test_number_in_plain_notation(self, value, expected):
        assert format_number(value) == expected

    def test_small_coordinates_in_params(self):
        assert Coordinates(1e-05, -2.5e-07).to_params() == {"lat": "0.00001", "lon": "-0.00000025"}


class TestLocations:
    """Tests for RequestLocation variants."""

    @pytest.mark.parametrize(
        "location, expected",
        [
            (CityName("London", Country.UNITED_KINGDOM), {"q": "London,GB"}),
            (CityId(2643743), {"id": "2643743"}),
            (Coordinates(51.51, -0.13), {"lat": "51.51", "lon": "-0.13"}),
            (ZipCode(94040), {"zip": "94040,US"}),
        ],
    )
    def test_location_params(self, location, expected):
        assert location_params(location) == expected

    def test_zip_code_disallowed(self):
        with pytest.raises(InvalidArgument):
            location_params(ZipCode(94040), allow_zip=False)

    def test_blank_city_name_rejected(self):
        with pytest.raises(InvalidArgument, match="City name"):
            CityName("  ")

    def test_blank_zip_code_rejected(self):
        with pytest.raises(InvalidArgument, match="Zip code"):
            ZipCode("")

    @pytest.mark.parametrize("lat, lon", [(-90.5, 0.0), (0.0, 180.5)])
    def test_coordinates_out_of_range(self, lat, lon):
        with pytest.raises(InvalidArgument):
            Coordinates(lat, lon)

    def test_coordinate_bounds_inclusive(self):
        assert Coordinates(-90.0, 180.0).to_params() == {"lat": "-90.0", "lon": "180.0"}


class TestEpochConversion:
    """Tests for datetime to epoch second conversion."""

    def test_int_passes_through(self):
        assert to_epoch_seconds(1600000000) == 1600000000

    def test_aware_datetime(self):
        value = dt.datetime.fromtimestamp(1_600_000_000_000 / 1000, tz=dt.timezone.utc)
        assert to_epoch_seconds(value) == 1600000000

    def test_sub_second_part_truncated(self):
        value = dt.datetime(2020, 9, 13, 12, 26, 40, 999000, tzinfo=dt.timezone.utc)
        assert to_epoch_seconds(value) == 1600000000

    def test_pre_epoch_truncates_toward_zero(self):
        value = dt.datetime(1969, 12, 31, 23, 59, 58, 500000, tzinfo=dt.timezone.utc)
        assert to_epoch_seconds(value) == -1

    def test_other_timezone(self):
        tz = dt.timezone(dt.timedelta(hours=2))
        value = dt.datetime(2020, 9, 13, 14, 26, 40, tzinfo=tz)
        assert to_epoch_seconds(value) == 1600000000

    def test_naive_datetime_is_local_time(self):
        value = dt.datetime(2020, 9, 13, 12, 0, 0)
        assert to_epoch_seconds(value) == int(value.timestamp())

    def test_date_is_local_midnight(self):
        value = dt.date(2020, 9, 13)
        assert to_epoch_seconds(value) == int(dt.datetime(2020, 9, 13).timestamp())

    @pytest.mark.parametrize("value", [True, "1600000000", 1.5])
    def test_unsupported_values(self, value):
        with pytest.raises(InvalidArgument):
            to_epoch_seconds(value)


class TestTimeRange:
    def test_normalizes_bounds(self):
        start = dt.datetime(2020, 9, 13, 12, 26, 40, tzinfo=dt.timezone.utc)
        time_range = TimeRange(start, 1600003600)
        assert time_range.start == 1600000000
        assert time_range.to_params() == {"start": "1600000000", "end": "1600003600"}

    def test_equal_bounds_allowed(self):
        assert TimeRange(5, 5).to_params() == {"start": "5", "end": "5"}

    def test_end_before_start_rejected(self):
        with pytest.raises(InvalidArgument):
            TimeRange(10, 5)


class TestCounts:
    def test_default_applied(self):
        assert resolve_count(None, 16) == 16

    def test_explicit_count(self):
        assert resolve_count(3, 16) == 3

    def test_non_positive_rejected(self):
        with pytest.raises(InvalidArgument):
            resolve_count(0, 16)


class TestPollutionDatetime:
    def test_current(self):
        assert format_pollution_datetime() == "current"

    def test_iso_string_passes_through(self):
        assert format_pollution_datetime("2016-03-01T12:00Z") == "2016-03-01T12:00Z"

    def test_date(self):
        assert format_pollution_datetime(dt.date(2016, 3, 1)) == "2016-03-01Z"

    def test_datetime_converted_to_utc(self):
        tz = dt.timezone(dt.timedelta(hours=-5))
        assert format_pollution_datetime(dt.datetime(2016, 3, 1, 7, 0, tzinfo=tz)) == "2016-03-01T12:00:00Z"

    def test_blank_rejected(self):
        with pytest.raises(InvalidArgument):
            format_pollution_datetime(" ")
