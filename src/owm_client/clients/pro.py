from __future__ import annotations
import logging
from typing import Mapping, Optional, Union

from .client import OWM
from .constants import (
    AREA_HISTORY,
    AREA_WEATHER,
    HISTORICAL_WEATHER_DEFAULT_COUNT,
    PRO_BASE_URLS,
    PRO_DAILY_FORECAST_MAX_COUNT,
)
from .enums import Country, HistoricalType
from .models import AccumulatedWeatherList, HistoricalWeatherList, HourlyWeatherForecast
from .params import (
    CityId,
    CityName,
    Coordinates,
    RequestLocation,
    TimeRange,
    TimeValue,
    ZipCode,
    location_params,
    resolve_count,
)

LOGGER = logging.getLogger(__name__)


# Client for the paid subscription tiers
class OWMPro(OWM):
    """OpenWeatherMap client for the pro subscription tier.

    Adds the history service area (accumulated and historical weather) and the
    hourly forecast, and sends weather requests to the pro host.

    History endpoints take a location as a city id, a city name or coordinates;
    zip codes are not accepted there.
    """

    BASE_URLS: Mapping[str, str] = PRO_BASE_URLS
    DAILY_FORECAST_DEFAULT_COUNT: int = PRO_DAILY_FORECAST_MAX_COUNT

    # ─────────────────────────────────────────────────────────────────────
    # Hourly forecast (4 days)
    # ─────────────────────────────────────────────────────────────────────

    def four_day_hourly_forecast(self, location: RequestLocation) -> HourlyWeatherForecast:
        return self._execute(AREA_WEATHER, "forecast/hourly", location_params(location), HourlyWeatherForecast)

    def four_day_hourly_forecast_by_city_name(
        self, city_name: str, country: Optional[Country] = None
    ) -> HourlyWeatherForecast:
        return self.four_day_hourly_forecast(CityName(city_name, country))

    def four_day_hourly_forecast_by_city_id(self, city_id: int) -> HourlyWeatherForecast:
        return self.four_day_hourly_forecast(CityId(city_id))

    def four_day_hourly_forecast_by_coords(self, latitude: float, longitude: float) -> HourlyWeatherForecast:
        return self.four_day_hourly_forecast(Coordinates(latitude, longitude))

    def four_day_hourly_forecast_by_zip_code(
        self, zip_code: Union[int, str], country: Country = Country.UNITED_STATES
    ) -> HourlyWeatherForecast:
        return self.four_day_hourly_forecast(ZipCode(zip_code, country))

    # ─────────────────────────────────────────────────────────────────────
    # Accumulated precipitation
    # ─────────────────────────────────────────────────────────────────────

    def accumulated_precipitation(self, location: RequestLocation, time_range: TimeRange) -> AccumulatedWeatherList:
        """Precipitation summed per day over ``time_range``."""
        params = location_params(location, allow_zip=False)
        params.update(time_range.to_params())
        return self._execute(AREA_HISTORY, "history/accumulated_precipitation", params, AccumulatedWeatherList)

    def accumulated_precipitation_by_city_id(
        self, city_id: int, start: TimeValue, end: TimeValue
    ) -> AccumulatedWeatherList:
        return self.accumulated_precipitation(CityId(city_id), TimeRange(start, end))

    def accumulated_precipitation_by_city_name(
        self, city_name: str, start: TimeValue, end: TimeValue, country: Optional[Country] = None
    ) -> AccumulatedWeatherList:
        return self.accumulated_precipitation(CityName(city_name, country), TimeRange(start, end))

    def accumulated_precipitation_by_coords(
        self, latitude: float, longitude: float, start: TimeValue, end: TimeValue
    ) -> AccumulatedWeatherList:
        return self.accumulated_precipitation(Coordinates(latitude, longitude), TimeRange(start, end))

    # ─────────────────────────────────────────────────────────────────────
    # Accumulated temperature
    # ─────────────────────────────────────────────────────────────────────

    def accumulated_temperature(
        self, location: RequestLocation, time_range: TimeRange, threshold: int
    ) -> AccumulatedWeatherList:
        """Temperature summed per day over ``time_range``, counting only values above ``threshold``."""
        params = location_params(location, allow_zip=False)
        params.update(time_range.to_params())
        params["threshold"] = str(threshold)
        return self._execute(AREA_HISTORY, "history/accumulated_temperature", params, AccumulatedWeatherList)

    def accumulated_temperature_by_city_id(
        self, city_id: int, start: TimeValue, end: TimeValue, threshold: int
    ) -> AccumulatedWeatherList:
        return self.accumulated_temperature(CityId(city_id), TimeRange(start, end), threshold)

    def accumulated_temperature_by_city_name(
        self,
        city_name: str,
        start: TimeValue,
        end: TimeValue,
        threshold: int,
        country: Optional[Country] = None,
    ) -> AccumulatedWeatherList:
        return self.accumulated_temperature(CityName(city_name, country), TimeRange(start, end), threshold)

    def accumulated_temperature_by_coords(
        self, latitude: float, longitude: float, start: TimeValue, end: TimeValue, threshold: int
    ) -> AccumulatedWeatherList:
        return self.accumulated_temperature(Coordinates(latitude, longitude), TimeRange(start, end), threshold)

    # ─────────────────────────────────────────────────────────────────────
    # Historical weather
    # ─────────────────────────────────────────────────────────────────────

    def historical_weather(
        self,
        location: RequestLocation,
        time_range: TimeRange,
        count: Optional[int] = None,
        historical_type: HistoricalType = HistoricalType.HOUR,
    ) -> HistoricalWeatherList:
        """Recorded weather over ``time_range``; one record unless ``count`` says otherwise."""
        params = location_params(location, allow_zip=False)
        params["type"] = HistoricalType(historical_type).value
        params.update(time_range.to_params())
        params["cnt"] = str(resolve_count(count, HISTORICAL_WEATHER_DEFAULT_COUNT))
        return self._execute(AREA_HISTORY, "history/city", params, HistoricalWeatherList)

    def historical_weather_by_city_id(
        self,
        city_id: int,
        start: TimeValue,
        end: TimeValue,
        count: Optional[int] = None,
        historical_type: HistoricalType = HistoricalType.HOUR,
    ) -> HistoricalWeatherList:
        return self.historical_weather(CityId(city_id), TimeRange(start, end), count, historical_type)

    def historical_weather_by_city_name(
        self,
        city_name: str,
        start: TimeValue,
        end: TimeValue,
        count: Optional[int] = None,
        historical_type: HistoricalType = HistoricalType.HOUR,
        country: Optional[Country] = None,
    ) -> HistoricalWeatherList:
        return self.historical_weather(CityName(city_name, country), TimeRange(start, end), count, historical_type)

    def historical_weather_by_coords(
        self,
        latitude: float,
        longitude: float,
        start: TimeValue,
        end: TimeValue,
        count: Optional[int] = None,
        historical_type: HistoricalType = HistoricalType.HOUR,
    ) -> HistoricalWeatherList:
        return self.historical_weather(
            Coordinates(latitude, longitude), TimeRange(start, end), count, historical_type
        )


__all__ = ["OWMPro"]
