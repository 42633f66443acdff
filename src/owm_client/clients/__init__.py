"""OpenWeatherMap API Client Package.

This package provides a typed, thread-safe interface to the OpenWeatherMap
API with support for:
- Free and pro subscription tiers
- Type-safe responses via Pydantic models
- Dependency injection for the HTTP client (testability)
- Per-client proxy configuration

Example usage:
    >>> from owm_client.clients import OWM, Unit, Country
    >>> owm = OWM("your-key").set_units(Unit.METRIC)
    >>> weather = owm.current_weather_by_city_name("London", Country.UNITED_KINGDOM)

    # Pro tier adds the history area:
    >>> from owm_client.clients import OWMPro
    >>> pro = OWMPro("your-key")
    >>> pro.historical_weather_by_city_id(2643743, start=1609459200, end=1609545600)
"""

from __future__ import annotations

# Re-export client classes
from .client import OWM
from .pro import OWMPro

# Re-export enums and errors
from .enums import (
    Accuracy,
    Country,
    HistoricalType,
    Language,
    PollutantType,
    ProxyType,
    Unit,
)
from .exceptions import APIException, InvalidArgument, OWMError

# Re-export models
from .models import (
    AccumulatedWeather,
    AccumulatedWeatherList,
    AirPollution,
    City,
    ClientConfig,
    CurrentWeather,
    DailyWeather,
    DailyWeatherForecast,
    FeelsLike,
    HistoricalWeather,
    HistoricalWeatherList,
    HourlyWeather,
    HourlyWeatherForecast,
    OWMListModel,
    OWMModel,
    Temp,
    UVIndex,
    UVIndexList,
)

# Re-export request building blocks
from .params import (
    CityId,
    CityName,
    Coordinates,
    RequestLocation,
    TimeRange,
    ZipCode,
)
from .proxy import ProxyConfig, ProxyMode
from .transport import HTTPClient, HTTPResponse, RequestsHTTPClient

__all__ = [
    # Clients
    "OWM",
    "OWMPro",
    # Enums
    "Accuracy",
    "Country",
    "HistoricalType",
    "Language",
    "PollutantType",
    "ProxyType",
    "Unit",
    # Errors
    "OWMError",
    "InvalidArgument",
    "APIException",
    # Models
    "OWMListModel",
    "OWMModel",
    "ClientConfig",
    "City",
    "CurrentWeather",
    "HourlyWeather",
    "HourlyWeatherForecast",
    "Temp",
    "FeelsLike",
    "DailyWeather",
    "DailyWeatherForecast",
    "AccumulatedWeather",
    "AccumulatedWeatherList",
    "HistoricalWeather",
    "HistoricalWeatherList",
    "UVIndex",
    "UVIndexList",
    "AirPollution",
    # Requests
    "CityName",
    "CityId",
    "Coordinates",
    "ZipCode",
    "RequestLocation",
    "TimeRange",
    # Transport
    "ProxyConfig",
    "ProxyMode",
    "HTTPClient",
    "HTTPResponse",
    "RequestsHTTPClient",
]
