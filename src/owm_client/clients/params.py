"""Request parameter building for OpenWeatherMap endpoints.

This module turns typed inputs (locations, time ranges, record counts) into
the query-parameter and path-segment strings the service expects.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Optional, Union

from .constants import POLLUTION_CURRENT
from .enums import Country
from .exceptions import InvalidArgument


# ─────────────────────────────────────────────────────────────────────────────
# Constants
# ─────────────────────────────────────────────────────────────────────────────

DEFAULT_COUNTRY = Country.UNITED_STATES
_EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)
_ONE_MILLISECOND = dt.timedelta(milliseconds=1)

TimeValue = Union[int, dt.datetime, dt.date]


# ─────────────────────────────────────────────────────────────────────────────
# Value Formatting Helpers
# ─────────────────────────────────────────────────────────────────────────────

def format_city_name(name: str, country: Optional[Country] = None) -> str:
    """Return ``name`` or ``name,CODE`` as used by the ``q`` parameter."""
    if country is None:
        return name
    return f"{name},{Country(country).value}"


def format_zip_code(zip_code: Union[int, str], country: Optional[Country] = None) -> str:
    """Return ``zip,CODE``; the country defaults to the United States."""
    return f"{zip_code},{Country(country or DEFAULT_COUNTRY).value}"


def format_number(value: float) -> str:
    """Return ``value`` in plain decimal notation, never with an exponent."""
    text = repr(value)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    return text


def validate_count(count: int) -> int:
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise InvalidArgument(f"Record count must be a positive integer, got {count!r}")
    return count


def resolve_count(count: Optional[int], default: int) -> int:
    """Apply ``default`` when ``count`` is omitted and validate the result."""
    if count is None:
        return default
    return validate_count(count)


# ─────────────────────────────────────────────────────────────────────────────
# Date/Time Helpers
# ─────────────────────────────────────────────────────────────────────────────

def _as_aware(value: TimeValue) -> dt.datetime:
    if not isinstance(value, dt.datetime):
        value = dt.datetime.combine(value, dt.time())
    if value.tzinfo is None:
        # Naive values are local time, like datetime.timestamp()
        value = value.astimezone()
    return value


def to_epoch_seconds(value: TimeValue) -> int:
    """Convert a timestamp or calendar value to whole epoch seconds.

    Integers are taken as epoch seconds already. Calendar values are converted
    to milliseconds and divided by 1000, truncating toward zero.
    """
    if isinstance(value, bool):
        raise InvalidArgument("Booleans are not valid timestamps")
    if isinstance(value, int):
        return value
    if not isinstance(value, dt.date):
        raise InvalidArgument(f"Unsupported time value: {value!r}")
    millis = (_as_aware(value) - _EPOCH) // _ONE_MILLISECOND
    seconds = abs(millis) // 1000
    return seconds if millis >= 0 else -seconds


def format_pollution_datetime(when: Union[str, dt.datetime, dt.date] = POLLUTION_CURRENT) -> str:
    """Format the datetime path segment of a pollution lookup.

    Strings (``"current"`` or an ISO 8601 value) pass through unchanged,
    dates become ``YYYY-MM-DDZ`` and datetimes are rendered in UTC.
    """
    if isinstance(when, str):
        if not when.strip():
            raise InvalidArgument("Pollution datetime must not be blank")
        return when
    if isinstance(when, dt.datetime):
        return _as_aware(when).astimezone(dt.timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    if isinstance(when, dt.date):
        return f"{when.isoformat()}Z"
    raise InvalidArgument(f"Unsupported pollution datetime: {when!r}")


# ─────────────────────────────────────────────────────────────────────────────
# Locations
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CityName:
    """City name, optionally qualified with a country."""
    name: str
    country: Optional[Country] = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise InvalidArgument("City name must not be empty")

    def to_params(self) -> Dict[str, str]:
        return {"q": format_city_name(self.name, self.country)}


@dataclass(frozen=True)
class CityId:
    city_id: int

    def to_params(self) -> Dict[str, str]:
        return {"id": str(self.city_id)}


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidArgument(f"Latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidArgument(f"Longitude out of range: {self.longitude}")

    def to_params(self) -> Dict[str, str]:
        return {"lat": format_number(self.latitude), "lon": format_number(self.longitude)}


@dataclass(frozen=True)
class ZipCode:
    """Postal code; the service needs a country, United States by default."""
    zip_code: Union[int, str]
    country: Country = DEFAULT_COUNTRY

    def __post_init__(self) -> None:
        if not str(self.zip_code).strip():
            raise InvalidArgument("Zip code must not be empty")

    def to_params(self) -> Dict[str, str]:
        return {"zip": format_zip_code(self.zip_code, self.country)}


RequestLocation = Union[CityName, CityId, Coordinates, ZipCode]


def location_params(location: RequestLocation, *, allow_zip: bool = True) -> Dict[str, str]:
    """Return the query parameters identifying ``location``."""
    if not isinstance(location, (CityName, CityId, Coordinates, ZipCode)):
        raise InvalidArgument(f"Unsupported location: {location!r}")
    if isinstance(location, ZipCode) and not allow_zip:
        raise InvalidArgument("This endpoint does not support zip code lookups")
    return location.to_params()


# ─────────────────────────────────────────────────────────────────────────────
# Time Range
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class TimeRange:
    """Start/end pair stored as epoch seconds.

    Accepts epoch seconds, ``datetime`` or ``date`` values for either bound.
    """
    start: int
    end: int

    def __post_init__(self) -> None:
        start = to_epoch_seconds(self.start)
        end = to_epoch_seconds(self.end)
        if end < start:
            raise InvalidArgument("Time range end must not be before its start")
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    def to_params(self) -> Dict[str, str]:
        return {"start": str(self.start), "end": str(self.end)}


__all__ = [
    "DEFAULT_COUNTRY",
    "TimeValue",
    "format_city_name",
    "format_zip_code",
    "format_number",
    "validate_count",
    "resolve_count",
    "to_epoch_seconds",
    "format_pollution_datetime",
    "CityName",
    "CityId",
    "Coordinates",
    "ZipCode",
    "RequestLocation",
    "location_params",
    "TimeRange",
]
