"""Client configuration and response models for the OpenWeatherMap API.

Response models mirror the JSON documents returned by the service. The
service guarantees none of its fields, so every field is optional; use
``has()`` to tell a populated value from an absent one.
"""
from __future__ import annotations
from typing import Any, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .enums import Accuracy, Language, Unit
from .exceptions import InvalidArgument
from .proxy import ProxyConfig


class OWMModel(BaseModel):
    """Base class for response models."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def has(self, name: str) -> bool:
        """Return True if the field called ``name`` holds a value.

        ``name`` may be the attribute name or the service's field name (``"list"``).
        """
        if name not in type(self).model_fields:
            for field_name, field in type(self).model_fields.items():
                if field.alias == name:
                    name = field_name
                    break
        return getattr(self, name, None) is not None

    @classmethod
    def from_payload(cls, payload: Any) -> "OWMModel":
        return cls.model_validate(payload)

    def to_json(self, pretty: bool = False) -> str:
        """Serialize using the service's field names, leaving out absent fields."""
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2 if pretty else None)


class OWMListModel(OWMModel):
    """Model whose records sit under ``list``; bare array bodies are wrapped."""

    @classmethod
    def from_payload(cls, payload: Any) -> "OWMListModel":
        if isinstance(payload, list):
            payload = {"list": payload}
        return cls.model_validate(payload)


# ─────────────────────────────────────────────────────────────────────────────
# Shared parts
# ─────────────────────────────────────────────────────────────────────────────

class Coord(OWMModel):
    lon: Optional[float] = None
    lat: Optional[float] = None


class WeatherCondition(OWMModel):
    """Condition code with its group, description and icon id."""
    id: Optional[int] = None
    main: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None


class MainData(OWMModel):
    temp: Optional[float] = None
    feels_like: Optional[float] = None
    temp_min: Optional[float] = None
    temp_max: Optional[float] = None
    pressure: Optional[float] = None
    sea_level: Optional[float] = None
    grnd_level: Optional[float] = None
    humidity: Optional[float] = None
    temp_kf: Optional[float] = None


class Wind(OWMModel):
    speed: Optional[float] = None
    deg: Optional[float] = None
    gust: Optional[float] = None


class Clouds(OWMModel):
    all: Optional[float] = None


class Precipitation(OWMModel):
    """Rain or snow volume for the last one or three hours."""
    one_hour: Optional[float] = Field(None, alias="1h")
    three_hours: Optional[float] = Field(None, alias="3h")


class SystemData(OWMModel):
    type: Optional[int] = None
    id: Optional[int] = None
    message: Optional[float] = None
    country: Optional[str] = None
    sunrise: Optional[int] = None
    sunset: Optional[int] = None
    pod: Optional[str] = None


class City(OWMModel):
    id: Optional[int] = None
    name: Optional[str] = None
    coord: Optional[Coord] = None
    country: Optional[str] = None
    population: Optional[int] = None
    timezone: Optional[int] = None
    sunrise: Optional[int] = None
    sunset: Optional[int] = None


# ─────────────────────────────────────────────────────────────────────────────
# Current weather
# ─────────────────────────────────────────────────────────────────────────────

class CurrentWeather(OWMModel):
    """Current conditions for one location."""
    coord: Optional[Coord] = None
    weather: Optional[List[WeatherCondition]] = None
    base: Optional[str] = None
    main: Optional[MainData] = None
    visibility: Optional[int] = None
    wind: Optional[Wind] = None
    clouds: Optional[Clouds] = None
    rain: Optional[Precipitation] = None
    snow: Optional[Precipitation] = None
    dt: Optional[int] = None
    sys: Optional[SystemData] = None
    timezone: Optional[int] = None
    id: Optional[int] = None
    name: Optional[str] = None
    cod: Optional[Union[int, str]] = None


# ─────────────────────────────────────────────────────────────────────────────
# Forecasts
# ─────────────────────────────────────────────────────────────────────────────

class HourlyWeather(OWMModel):
    dt: Optional[int] = None
    main: Optional[MainData] = None
    weather: Optional[List[WeatherCondition]] = None
    clouds: Optional[Clouds] = None
    wind: Optional[Wind] = None
    visibility: Optional[int] = None
    pop: Optional[float] = None
    rain: Optional[Precipitation] = None
    snow: Optional[Precipitation] = None
    sys: Optional[SystemData] = None
    dt_txt: Optional[str] = None


class HourlyWeatherForecast(OWMModel):
    """Forecast in hourly (pro) or three-hourly (free) steps."""
    cod: Optional[Union[int, str]] = None
    message: Optional[Union[float, str]] = None
    cnt: Optional[int] = None
    items: Optional[List[HourlyWeather]] = Field(None, alias="list")
    city: Optional[City] = None


class Temp(OWMModel):
    """Temperatures over the parts of one day."""
    day: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    night: Optional[float] = None
    eve: Optional[float] = None
    morn: Optional[float] = None


class FeelsLike(OWMModel):
    day: Optional[float] = None
    night: Optional[float] = None
    eve: Optional[float] = None
    morn: Optional[float] = None


class DailyWeather(OWMModel):
    dt: Optional[int] = None
    sunrise: Optional[int] = None
    sunset: Optional[int] = None
    temp: Optional[Temp] = None
    feels_like: Optional[FeelsLike] = None
    pressure: Optional[float] = None
    humidity: Optional[float] = None
    weather: Optional[List[WeatherCondition]] = None
    speed: Optional[float] = None
    deg: Optional[float] = None
    gust: Optional[float] = None
    clouds: Optional[float] = None
    pop: Optional[float] = None
    rain: Optional[float] = None
    snow: Optional[float] = None


class DailyWeatherForecast(OWMModel):
    city: Optional[City] = None
    cod: Optional[Union[int, str]] = None
    message: Optional[Union[float, str]] = None
    cnt: Optional[int] = None
    items: Optional[List[DailyWeather]] = Field(None, alias="list")


# ─────────────────────────────────────────────────────────────────────────────
# History (pro tier)
# ─────────────────────────────────────────────────────────────────────────────

class AccumulatedWeather(OWMModel):
    """Accumulated value for one day of the requested period."""
    date: Optional[str] = None
    temp: Optional[float] = None
    rain: Optional[float] = None
    snow: Optional[float] = None
    count: Optional[int] = None


class AccumulatedWeatherList(OWMListModel):
    """Accumulated values per day; the service may answer with a bare array."""
    cod: Optional[Union[int, str]] = None
    message: Optional[Union[float, str]] = None
    items: Optional[List[AccumulatedWeather]] = Field(None, alias="list")


class HistoricalWeather(OWMModel):
    dt: Optional[int] = None
    main: Optional[MainData] = None
    wind: Optional[Wind] = None
    clouds: Optional[Clouds] = None
    weather: Optional[List[WeatherCondition]] = None
    rain: Optional[Precipitation] = None
    snow: Optional[Precipitation] = None


class HistoricalWeatherList(OWMModel):
    message: Optional[str] = None
    cod: Optional[Union[int, str]] = None
    city_id: Optional[int] = None
    calctime: Optional[float] = None
    cnt: Optional[int] = None
    items: Optional[List[HistoricalWeather]] = Field(None, alias="list")


# ─────────────────────────────────────────────────────────────────────────────
# UV index and pollution
# ─────────────────────────────────────────────────────────────────────────────

class UVIndex(OWMModel):
    lat: Optional[float] = None
    lon: Optional[float] = None
    date_iso: Optional[str] = None
    date: Optional[int] = None
    value: Optional[float] = None


class UVIndexList(OWMListModel):
    """UV index readings; the service answers these lookups with a bare array."""
    items: Optional[List[UVIndex]] = Field(None, alias="list")


class PollutionLocation(OWMModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class AirPollution(OWMModel):
    """Pollutant reading; ``data`` is a list of samples for CO, SO2 and a single value for O3, NO2."""
    time: Optional[str] = None
    location: Optional[PollutionLocation] = None
    data: Optional[Any] = None


# ─────────────────────────────────────────────────────────────────────────────
# Client configuration
# ─────────────────────────────────────────────────────────────────────────────

class ClientConfig(BaseModel):
    """Immutable configuration snapshot for one client.

    Attributes:
        api_key: OpenWeatherMap API key, never empty or blank.
        units: Unit system for returned values.
        language: Language for condition descriptions.
        accuracy: Name search strictness.
        proxy: Proxy used by every transport.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., repr=False)
    units: Unit = Unit.STANDARD
    language: Language = Language.ENGLISH
    accuracy: Accuracy = Accuracy.LIKE
    proxy: ProxyConfig = Field(default_factory=ProxyConfig.system)

    @field_validator("api_key")
    @classmethod
    def api_key_not_blank(cls, v: str) -> str:
        """Reject empty and whitespace-only keys."""
        if not v or not v.strip():
            raise ValueError("API key can't be empty/blank. Get an API key from OpenWeatherMap.org")
        return v

    @classmethod
    def create(cls, **values: Any) -> "ClientConfig":
        try:
            return cls(**values)
        except ValidationError as exc:
            raise InvalidArgument(str(exc)) from exc

    def replace(self, **changes: Any) -> "ClientConfig":
        """Return a new validated snapshot with ``changes`` applied."""
        return self.create(**{**dict(self), **changes})


__all__ = [
    "OWMModel",
    "OWMListModel",
    # Shared parts
    "Coord",
    "WeatherCondition",
    "MainData",
    "Wind",
    "Clouds",
    "Precipitation",
    "SystemData",
    "City",
    # Responses
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
    "PollutionLocation",
    "AirPollution",
    # Config
    "ClientConfig",
]
