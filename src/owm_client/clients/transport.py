"""HTTP transports, one per OpenWeatherMap service area.

An :class:`EndpointTransport` couples an HTTP client (already configured with
the client's proxy) with a base URL and the query parameters every request to
that area must carry. Transports are never mutated: a configuration change
produces new ones via :func:`build_transport`.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, Iterable, Mapping, Optional, Protocol, Tuple
import requests

from .constants import AREA_WEATHER, DEFAULT_TIMEOUT_SECONDS
from .enums import Unit
from .models import ClientConfig
from .proxy import ProxyConfig

LOGGER = logging.getLogger(__name__)

# Configuration fields that only reach the weather area
WEATHER_ONLY_FIELDS: FrozenSet[str] = frozenset({"units", "language", "accuracy"})
# Query parameters never written to logs
_REDACTED_PARAMS = frozenset({"appid"})


@dataclass(frozen=True)
class HTTPResponse:
    """What a transport reports back for one request.

    Attributes:
        status_code: HTTP status code.
        reason: HTTP status message.
        body: Decoded JSON body, or None when the call returned no body.
        error_text: Error message of an unsuccessful response, if any.
    """

    status_code: int
    reason: str
    body: Any = None
    error_text: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


# HTTP Client Protocol
class HTTPClient(Protocol):
    def get(self, url: str, params: Dict[str, str], timeout: float) -> HTTPResponse:
        ...

    def close(self) -> None:
        ...


HTTPClientFactory = Callable[[ProxyConfig], HTTPClient]


class RequestsHTTPClient:
    """HTTP client backed by a pooled ``requests.Session`` bound to one proxy."""

    def __init__(self, proxy: Optional[ProxyConfig] = None) -> None:
        self._proxy = proxy or ProxyConfig.system()
        self._session: Optional[requests.Session] = None

    @property
    def proxy(self) -> ProxyConfig:
        return self._proxy

    def _get_session(self) -> requests.Session:
        if self._session is None:
            session = requests.Session()
            # Environment proxies apply only in system mode
            session.trust_env = self._proxy.trust_env
            self._session = session
        return self._session

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> "RequestsHTTPClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def get(self, url: str, params: Dict[str, str], timeout: float) -> HTTPResponse:
        session = self._get_session()
        proxies = self._proxy.as_requests_proxies() or None
        # Connection errors and timeouts propagate as requests exceptions
        response = session.get(url, params=params, proxies=proxies, timeout=timeout)
        try:
            if not response.ok:
                return HTTPResponse(
                    status_code=response.status_code,
                    reason=response.reason or "",
                    error_text=_error_detail(response),
                )
            body = None
            if response.content and response.content.strip():
                # Malformed JSON raises requests.JSONDecodeError
                body = response.json()
            return HTTPResponse(status_code=response.status_code, reason=response.reason or "", body=body)
        finally:
            response.close()


def _error_detail(response: requests.Response) -> Optional[str]:
    """Pull the service's error message out of an unsuccessful response."""
    try:
        body = response.json()
    except (ValueError, requests.JSONDecodeError):
        return response.text[:500] or None
    if isinstance(body, dict):
        detail = body.get("message") or body.get("error")
        if detail:
            return str(detail)
    return response.text[:500] or None


def default_http_client_factory(proxy: ProxyConfig) -> HTTPClient:
    return RequestsHTTPClient(proxy)


class EndpointTransport:
    """Base URL, default query parameters and HTTP client for one service area."""

    def __init__(
        self,
        area: str,
        base_url: str,
        default_params: Mapping[str, str],
        http_client: HTTPClient,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._area = area
        self._base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self._default_params = dict(default_params)
        self._http_client = http_client
        self._timeout = timeout

    @property
    def area(self) -> str:
        return self._area

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def default_params(self) -> Dict[str, str]:
        return dict(self._default_params)

    @property
    def http_client(self) -> HTTPClient:
        return self._http_client

    def url_for(self, path: str = "") -> str:
        return f"{self._base_url}{path.lstrip('/')}"

    def get(self, path: str = "", params: Optional[Mapping[str, str]] = None) -> HTTPResponse:
        """Issue one blocking GET; call parameters come first, area defaults after."""
        url = self.url_for(path)
        query: Dict[str, str] = dict(params or {})
        query.update(self._default_params)
        LOGGER.debug(
            "GET %s params=%s",
            url,
            {k: ("***" if k in _REDACTED_PARAMS else v) for k, v in query.items()},
        )
        return self._http_client.get(url, query, self._timeout)

    def close(self) -> None:
        self._http_client.close()


def build_default_params(area: str, config: ClientConfig) -> Dict[str, str]:
    """Return the query parameters every request to ``area`` carries.

    Units are left out when STANDARD, which is the service default.
    """
    params = {"appid": config.api_key}
    if area == AREA_WEATHER:
        params["type"] = config.accuracy.value
        params["lang"] = config.language.value
        if config.units is not Unit.STANDARD:
            params["units"] = config.units.value
    return params


def build_transport(
    area: str,
    config: ClientConfig,
    base_url: str,
    http_client_factory: HTTPClientFactory = default_http_client_factory,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> EndpointTransport:
    """Create a fresh transport for ``area`` from the current configuration."""
    return EndpointTransport(
        area=area,
        base_url=base_url,
        default_params=build_default_params(area, config),
        http_client=http_client_factory(config.proxy),
        timeout=timeout,
    )


def areas_affected_by(changed_fields: Iterable[str], areas: Iterable[str]) -> Tuple[str, ...]:
    """Return the areas whose transports depend on any of ``changed_fields``."""
    changed = set(changed_fields)
    areas = tuple(areas)
    if not changed:
        return ()
    if changed <= WEATHER_ONLY_FIELDS:
        return tuple(area for area in areas if area == AREA_WEATHER)
    return areas


__all__ = [
    "WEATHER_ONLY_FIELDS",
    "HTTPResponse",
    "HTTPClient",
    "HTTPClientFactory",
    "RequestsHTTPClient",
    "default_http_client_factory",
    "EndpointTransport",
    "build_default_params",
    "build_transport",
    "areas_affected_by",
]
