from __future__ import annotations
# Service areas
AREA_WEATHER = "weather"
AREA_POLLUTION = "pollution"
AREA_HISTORY = "history"
AREA_MISC = "misc"

# Base URLs per tier
FREE_BASE_URLS = {
    AREA_WEATHER: "https://api.openweathermap.org/data/2.5/",
    AREA_POLLUTION: "https://api.openweathermap.org/pollution/v1/",
    AREA_MISC: "https://api.openweathermap.org/data/2.5/",
}
PRO_BASE_URLS = {
    AREA_WEATHER: "https://pro.openweathermap.org/data/2.5/",
    AREA_POLLUTION: "https://api.openweathermap.org/pollution/v1/",
    AREA_HISTORY: "https://history.openweathermap.org/data/2.5/",
    AREA_MISC: "https://api.openweathermap.org/data/2.5/",
}

# Record count defaults
DAILY_FORECAST_MAX_COUNT = 16
PRO_DAILY_FORECAST_MAX_COUNT = 16
HISTORICAL_WEATHER_DEFAULT_COUNT = 1
UV_INDEX_HISTORY_DEFAULT_COUNT = 5

# Pollution lookups use this instead of a timestamp for the latest reading
POLLUTION_CURRENT = "current"

# Transport defaults
DEFAULT_TIMEOUT_SECONDS = 30

__all__ = [
    "AREA_WEATHER",
    "AREA_POLLUTION",
    "AREA_HISTORY",
    "AREA_MISC",
    "FREE_BASE_URLS",
    "PRO_BASE_URLS",
    "DAILY_FORECAST_MAX_COUNT",
    "PRO_DAILY_FORECAST_MAX_COUNT",
    "HISTORICAL_WEATHER_DEFAULT_COUNT",
    "UV_INDEX_HISTORY_DEFAULT_COUNT",
    "POLLUTION_CURRENT",
    "DEFAULT_TIMEOUT_SECONDS",
]
