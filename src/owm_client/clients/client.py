from __future__ import annotations
import datetime as dt
import logging
import threading
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, TypeVar, Union

from .constants import (
    AREA_MISC,
    AREA_POLLUTION,
    AREA_WEATHER,
    DAILY_FORECAST_MAX_COUNT,
    DEFAULT_TIMEOUT_SECONDS,
    FREE_BASE_URLS,
    POLLUTION_CURRENT,
    UV_INDEX_HISTORY_DEFAULT_COUNT,
)
from .enums import Accuracy, Country, Language, PollutantType, ProxyType, Unit
from .exceptions import APIException, InvalidArgument
from .models import (
    AirPollution,
    ClientConfig,
    CurrentWeather,
    DailyWeatherForecast,
    HourlyWeatherForecast,
    OWMModel,
    UVIndex,
    UVIndexList,
)
from .params import (
    CityId,
    CityName,
    Coordinates,
    RequestLocation,
    TimeRange,
    ZipCode,
    format_number,
    format_pollution_datetime,
    location_params,
    resolve_count,
    validate_count,
)
from .proxy import ProxyConfig
from .transport import (
    EndpointTransport,
    HTTPClientFactory,
    areas_affected_by,
    build_transport,
    default_http_client_factory,
)

LOGGER = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=OWMModel)


# Main client class for the free tier
class OWM:
    """OpenWeatherMap client for the free subscription tier.

    Configuration is held as an immutable :class:`ClientConfig` snapshot. Each
    setter validates a new snapshot and rebuilds the transports that depend on
    the changed fields; the swap happens under a lock shared with request
    dispatch, so a request always runs against one consistent configuration.

    Example:
        >>> owm = OWM("your-api-key").set_units(Unit.METRIC)
        >>> weather = owm.current_weather_by_city_name("London", Country.UNITED_KINGDOM)
        >>> weather.main.temp if weather.has("main") else None
    """

    BASE_URLS: Mapping[str, str] = FREE_BASE_URLS
    DAILY_FORECAST_DEFAULT_COUNT: int = DAILY_FORECAST_MAX_COUNT

    def __init__(
        self,
        api_key: str,
        *,
        units: Unit = Unit.STANDARD,
        language: Language = Language.ENGLISH,
        accuracy: Accuracy = Accuracy.LIKE,
        proxy: Optional[ProxyConfig] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        base_urls: Optional[Mapping[str, str]] = None,
        http_client_factory: Optional[HTTPClientFactory] = None,
    ) -> None:
        self._lock = threading.RLock()
        self._timeout = timeout
        self._http_client_factory = http_client_factory or default_http_client_factory
        self._base_urls: Dict[str, str] = dict(self.BASE_URLS)
        if base_urls:
            unknown = set(base_urls) - set(self._base_urls)
            if unknown:
                raise InvalidArgument(f"Unknown service areas: {', '.join(sorted(unknown))}")
            self._base_urls.update(base_urls)

        self._config = ClientConfig.create(
            api_key=api_key,
            units=units,
            language=language,
            accuracy=accuracy,
            proxy=proxy or ProxyConfig.system(),
        )
        self._transports: Dict[str, EndpointTransport] = {
            area: self._build_transport(area, self._config) for area in self._base_urls
        }
        self._retired: List[EndpointTransport] = []

    @classmethod
    def from_settings(cls, settings: Any, **kwargs: Any) -> "OWM":
        """Build a client from :class:`owm_client.config.settings.Settings`."""
        return cls(
            settings.api_key,
            units=settings.units,
            language=settings.language,
            accuracy=settings.accuracy,
            proxy=settings.proxy_config(),
            timeout=settings.timeout,
            **kwargs,
        )

    def close(self) -> None:
        """Close the current transports and every transport a setter replaced.

        Replaced transports stay open until here so requests already running on
        them can finish.
        """
        with self._lock:
            transports = list(self._transports.values()) + self._retired
            self._retired = []
        for transport in transports:
            transport.close()

    def __enter__(self) -> "OWM":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        config = self.config
        return (
            f"{type(self).__name__}(units={config.units.value}, language={config.language.value}, "
            f"accuracy={config.accuracy.value}, proxy={config.proxy.describe()})"
        )

    # ─────────────────────────────────────────────────────────────────────
    # Configuration
    # ─────────────────────────────────────────────────────────────────────

    @property
    def config(self) -> ClientConfig:
        with self._lock:
            return self._config

    @property
    def api_key(self) -> str:
        return self.config.api_key

    @property
    def units(self) -> Unit:
        return self.config.units

    @property
    def language(self) -> Language:
        return self.config.language

    @property
    def accuracy(self) -> Accuracy:
        return self.config.accuracy

    @property
    def proxy(self) -> ProxyConfig:
        return self.config.proxy

    @property
    def service_areas(self) -> Tuple[str, ...]:
        return tuple(self._base_urls)

    def set_api_key(self, api_key: str) -> "OWM":
        """Replace the API key; empty or blank keys raise InvalidArgument."""
        return self._reconfigure(api_key=api_key)

    def set_units(self, units: Unit) -> "OWM":
        return self._reconfigure(units=units)

    def set_language(self, language: Language) -> "OWM":
        return self._reconfigure(language=language)

    def set_accuracy(self, accuracy: Accuracy) -> "OWM":
        return self._reconfigure(accuracy=accuracy)

    def set_proxy(
        self,
        proxy: Union[ProxyConfig, str],
        port: Optional[int] = None,
        *,
        username: Optional[str] = None,
        password: Optional[str] = None,
        proxy_type: ProxyType = ProxyType.HTTP,
    ) -> "OWM":
        """Route every request through a proxy.

        Accepts either a ready :class:`ProxyConfig` or a host and port, with
        optional credentials. Credentials are only accepted together with an
        explicit host and port.
        """
        if isinstance(proxy, ProxyConfig):
            if port is not None or username is not None or password is not None:
                raise InvalidArgument("Pass either a ProxyConfig or host/port arguments, not both")
            return self._reconfigure(proxy=proxy)
        if not proxy or port is None:
            raise InvalidArgument("A proxy host and port are required")
        return self._reconfigure(
            proxy=ProxyConfig.manual(proxy, port, proxy_type, username=username, password=password)
        )

    def set_no_proxy(self) -> "OWM":
        """Connect directly, ignoring environment proxies."""
        return self._reconfigure(proxy=ProxyConfig.direct())

    def reset_proxy(self) -> "OWM":
        """Go back to the system proxy; any proxy credentials are dropped."""
        return self._reconfigure(proxy=ProxyConfig.system())

    def _build_transport(self, area: str, config: ClientConfig) -> EndpointTransport:
        return build_transport(
            area,
            config,
            self._base_urls[area],
            http_client_factory=self._http_client_factory,
            timeout=self._timeout,
        )

    def _reconfigure(self, **changes: Any) -> "OWM":
        with self._lock:
            # Validation happens before any state changes
            config = self._config.replace(**changes)
            affected = areas_affected_by(changes, self._transports)
            rebuilt = {area: self._build_transport(area, config) for area in affected}
            self._retired.extend(self._transports[area] for area in rebuilt)
            self._config = config
            self._transports.update(rebuilt)
        LOGGER.debug(
            "Configuration changed (%s); rebuilt transports: %s",
            ", ".join(sorted(changes)),
            ", ".join(affected) or "none",
        )
        return self

    def _transport(self, area: str) -> EndpointTransport:
        with self._lock:
            try:
                return self._transports[area]
            except KeyError:
                raise InvalidArgument(
                    f"{type(self).__name__} has no '{area}' service area"
                ) from None

    # ─────────────────────────────────────────────────────────────────────
    # Dispatch
    # ─────────────────────────────────────────────────────────────────────

    def _execute(
        self,
        area: str,
        path: str,
        params: Optional[Mapping[str, str]],
        model: Type[ModelT],
    ) -> ModelT:
        transport = self._transport(area)
        response = transport.get(path, params)
        if response.body is None:
            if not response.ok:
                raise APIException(response.status_code, response.reason, detail=response.error_text)
            # Success without a body is not an error
            LOGGER.warning(
                "Empty response body from %s (HTTP %d); returning empty %s",
                transport.url_for(path),
                response.status_code,
                model.__name__,
            )
            return model()
        return model.from_payload(response.body)

    # ─────────────────────────────────────────────────────────────────────
    # Current weather
    # ─────────────────────────────────────────────────────────────────────

    def current_weather(self, location: RequestLocation) -> CurrentWeather:
        return self._execute(AREA_WEATHER, "weather", location_params(location), CurrentWeather)

    def current_weather_by_city_name(self, city_name: str, country: Optional[Country] = None) -> CurrentWeather:
        return self.current_weather(CityName(city_name, country))

    def current_weather_by_city_id(self, city_id: int) -> CurrentWeather:
        return self.current_weather(CityId(city_id))

    def current_weather_by_coords(self, latitude: float, longitude: float) -> CurrentWeather:
        return self.current_weather(Coordinates(latitude, longitude))

    def current_weather_by_zip_code(
        self, zip_code: Union[int, str], country: Country = Country.UNITED_STATES
    ) -> CurrentWeather:
        return self.current_weather(ZipCode(zip_code, country))

    # ─────────────────────────────────────────────────────────────────────
    # 5 day / 3 hour forecast
    # ─────────────────────────────────────────────────────────────────────

    def hourly_weather_forecast(self, location: RequestLocation) -> HourlyWeatherForecast:
        return self._execute(AREA_WEATHER, "forecast", location_params(location), HourlyWeatherForecast)

    def hourly_weather_forecast_by_city_name(
        self, city_name: str, country: Optional[Country] = None
    ) -> HourlyWeatherForecast:
        return self.hourly_weather_forecast(CityName(city_name, country))

    def hourly_weather_forecast_by_city_id(self, city_id: int) -> HourlyWeatherForecast:
        return self.hourly_weather_forecast(CityId(city_id))

    def hourly_weather_forecast_by_coords(self, latitude: float, longitude: float) -> HourlyWeatherForecast:
        return self.hourly_weather_forecast(Coordinates(latitude, longitude))

    def hourly_weather_forecast_by_zip_code(
        self, zip_code: Union[int, str], country: Country = Country.UNITED_STATES
    ) -> HourlyWeatherForecast:
        return self.hourly_weather_forecast(ZipCode(zip_code, country))

    # ─────────────────────────────────────────────────────────────────────
    # Daily forecast
    # ─────────────────────────────────────────────────────────────────────

    def daily_weather_forecast(
        self, location: RequestLocation, count: Optional[int] = None
    ) -> DailyWeatherForecast:
        """Daily forecast; ``count`` defaults to the tier's maximum number of days."""
        params = location_params(location)
        params["cnt"] = str(resolve_count(count, self.DAILY_FORECAST_DEFAULT_COUNT))
        return self._execute(AREA_WEATHER, "forecast/daily", params, DailyWeatherForecast)

    def daily_weather_forecast_by_city_name(
        self, city_name: str, country: Optional[Country] = None, count: Optional[int] = None
    ) -> DailyWeatherForecast:
        return self.daily_weather_forecast(CityName(city_name, country), count)

    def daily_weather_forecast_by_city_id(self, city_id: int, count: Optional[int] = None) -> DailyWeatherForecast:
        return self.daily_weather_forecast(CityId(city_id), count)

    def daily_weather_forecast_by_coords(
        self, latitude: float, longitude: float, count: Optional[int] = None
    ) -> DailyWeatherForecast:
        return self.daily_weather_forecast(Coordinates(latitude, longitude), count)

    def daily_weather_forecast_by_zip_code(
        self,
        zip_code: Union[int, str],
        country: Country = Country.UNITED_STATES,
        count: Optional[int] = None,
    ) -> DailyWeatherForecast:
        return self.daily_weather_forecast(ZipCode(zip_code, country), count)

    # ─────────────────────────────────────────────────────────────────────
    # UV index
    # ─────────────────────────────────────────────────────────────────────

    def current_uv_index(self, latitude: float, longitude: float) -> UVIndex:
        return self._execute(AREA_MISC, "uvi", Coordinates(latitude, longitude).to_params(), UVIndex)

    def uv_index_forecast(self, latitude: float, longitude: float, count: Optional[int] = None) -> UVIndexList:
        """UV index forecast; the service picks the number of days unless ``count`` is given."""
        params = Coordinates(latitude, longitude).to_params()
        if count is not None:
            params["cnt"] = str(validate_count(count))
        return self._execute(AREA_MISC, "uvi/forecast", params, UVIndexList)

    def uv_index_history(
        self,
        latitude: float,
        longitude: float,
        time_range: TimeRange,
        count: Optional[int] = None,
    ) -> UVIndexList:
        params = Coordinates(latitude, longitude).to_params()
        params["cnt"] = str(resolve_count(count, UV_INDEX_HISTORY_DEFAULT_COUNT))
        params.update(time_range.to_params())
        return self._execute(AREA_MISC, "uvi/history", params, UVIndexList)

    # ─────────────────────────────────────────────────────────────────────
    # Air pollution
    # ─────────────────────────────────────────────────────────────────────

    def air_pollution(
        self,
        latitude: float,
        longitude: float,
        when: Union[str, dt.datetime, dt.date] = POLLUTION_CURRENT,
        pollutant: PollutantType = PollutantType.CO,
    ) -> AirPollution:
        """Pollutant reading for a location, addressed by path segments.

        ``when`` is ``"current"``, an ISO 8601 string, a date or a datetime.
        """
        coords = Coordinates(latitude, longitude)
        path = (
            f"{PollutantType(pollutant).value}/"
            f"{format_number(coords.latitude)},{format_number(coords.longitude)}/"
            f"{format_pollution_datetime(when)}.json"
        )
        return self._execute(AREA_POLLUTION, path, None, AirPollution)


__all__ = ["OWM"]
