"""Typed client for the OpenWeatherMap web service."""

from __future__ import annotations

from owm_client.clients import (
    OWM,
    Accuracy,
    APIException,
    Country,
    HistoricalType,
    InvalidArgument,
    Language,
    OWMError,
    OWMPro,
    PollutantType,
    ProxyConfig,
    ProxyType,
    TimeRange,
    Unit,
)

__version__ = "0.1.0"

__all__ = [
    "OWM",
    "OWMPro",
    "OWMError",
    "InvalidArgument",
    "APIException",
    "Accuracy",
    "Country",
    "HistoricalType",
    "Language",
    "PollutantType",
    "ProxyConfig",
    "ProxyType",
    "TimeRange",
    "Unit",
    "__version__",
]
