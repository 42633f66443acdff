#!/usr/bin/env python3
from __future__ import annotations
import argparse
import logging
import sys
from typing import Callable, Dict, Optional, Tuple

import requests
from pydantic import ValidationError

from owm_client.clients import (
    OWM,
    Accuracy,
    CityId,
    CityName,
    Coordinates,
    Country,
    InvalidArgument,
    Language,
    OWMError,
    OWMModel,
    OWMPro,
    PollutantType,
    RequestLocation,
    Unit,
    ZipCode,
)
from owm_client.config import create_client, get_settings
from owm_client.utils.logging_config import configure_logging

LOGGER = logging.getLogger(__name__)

ENDPOINTS = ("current", "hourly", "daily", "uvi", "pollution")
# Endpoints addressed by coordinates only
COORDS_ONLY_ENDPOINTS = frozenset({"uvi", "pollution"})


def _parse_coords(value: str) -> Tuple[float, float]:
    """Parse ``LAT,LON``."""
    try:
        lat, lon = (float(part) for part in value.split(","))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"Invalid coordinates '{value}'. Expected format: LAT,LON"
        ) from exc
    return lat, lon


def _parse_proxy(value: str) -> Tuple[str, int]:
    """Parse ``HOST:PORT``."""
    host, sep, port = value.rpartition(":")
    if not sep or not host or not port.isdigit():
        raise argparse.ArgumentTypeError(
            f"Invalid proxy '{value}'. Expected format: HOST:PORT"
        )
    return host, int(port)


def _parse_country(value: str) -> Country:
    try:
        return Country(value.upper())
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Unknown country code '{value}'") from exc


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser for the owm-client CLI."""
    parser = argparse.ArgumentParser(
        prog="owm-client",
        description="Query the OpenWeatherMap API and print the response as JSON.",
    )
    parser.add_argument(
        "endpoint",
        choices=ENDPOINTS,
        help="Which endpoint to call",
    )
    location = parser.add_mutually_exclusive_group(required=True)
    location.add_argument("--city", help="City name, e.g. London")
    location.add_argument("--city-id", type=int, help="OpenWeatherMap city id")
    location.add_argument("--coords", type=_parse_coords, help="Coordinates as LAT,LON")
    location.add_argument("--zip", dest="zip_code", help="Zip code (country defaults to US)")
    parser.add_argument(
        "--country",
        type=_parse_country,
        help="ISO 3166 country code for --city or --zip",
    )
    parser.add_argument(
        "--count",
        type=int,
        help="Number of records (daily forecast and UV index forecast)",
    )
    parser.add_argument(
        "--pollutant",
        choices=[p.value for p in PollutantType],
        default=PollutantType.CO.value,
        help="Pollutant for the pollution endpoint (default: co)",
    )
    parser.add_argument(
        "--when",
        default="current",
        help="Pollution datetime: 'current' or ISO 8601 (default: current)",
    )
    parser.add_argument("--units", choices=[u.value for u in Unit], help="Unit system")
    parser.add_argument("--lang", choices=[lang.value for lang in Language], help="Description language")
    parser.add_argument("--accuracy", choices=[a.value for a in Accuracy], help="Name search accuracy")
    parser.add_argument(
        "--api-key",
        help="Override API key (default: OWM_API_KEY)",
    )
    parser.add_argument(
        "--pro",
        action="store_true",
        help="Use the pro tier endpoints",
    )
    parser.add_argument(
        "--proxy",
        type=_parse_proxy,
        help="Route requests through HOST:PORT",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Indent the JSON output",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def _location(args: argparse.Namespace) -> RequestLocation:
    if args.city is not None:
        return CityName(args.city, args.country)
    if args.city_id is not None:
        return CityId(args.city_id)
    if args.coords is not None:
        return Coordinates(*args.coords)
    return ZipCode(args.zip_code, args.country or Country.UNITED_STATES)


def _build_client(args: argparse.Namespace) -> OWM:
    """Create a client from settings, then apply command line overrides."""
    if args.api_key:
        client: OWM = (OWMPro if args.pro else OWM)(args.api_key)
    else:
        settings = get_settings()
        client = OWMPro.from_settings(settings) if args.pro else create_client(settings)
    if args.units:
        client.set_units(Unit(args.units))
    if args.lang:
        client.set_language(Language(args.lang))
    if args.accuracy:
        client.set_accuracy(Accuracy(args.accuracy))
    if args.proxy:
        client.set_proxy(*args.proxy)
    return client


def _call(client: OWM, args: argparse.Namespace) -> OWMModel:
    if args.endpoint in COORDS_ONLY_ENDPOINTS:
        if args.coords is None:
            raise InvalidArgument(f"The '{args.endpoint}' endpoint needs --coords")
        lat, lon = args.coords
        if args.endpoint == "uvi":
            if args.count is not None:
                return client.uv_index_forecast(lat, lon, args.count)
            return client.current_uv_index(lat, lon)
        return client.air_pollution(lat, lon, args.when, PollutantType(args.pollutant))

    location = _location(args)
    handlers: Dict[str, Callable[[], OWMModel]] = {
        "current": lambda: client.current_weather(location),
        "hourly": lambda: client.hourly_weather_forecast(location),
        "daily": lambda: client.daily_weather_forecast(location, args.count),
    }
    return handlers[args.endpoint]()


def run_cli(argv: Optional[list[str]] = None) -> int:
    """Execute CLI with given arguments.

    Args:
        argv: Command-line arguments (uses sys.argv if None).

    Returns:
        Process exit status: 0 on success, 1 on API, network or response
        errors, 2 on invalid configuration.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        client = _build_client(args)
    except (ValidationError, InvalidArgument) as e:
        LOGGER.error("Configuration validation failed: %s", e)
        return 2

    try:
        with client:
            result = _call(client, args)
    except ValidationError as e:
        LOGGER.error("Invalid response for '%s': %s", args.endpoint, e)
        return 1
    except OWMError as e:
        LOGGER.error("Request '%s' failed: %s", args.endpoint, e)
        return 1
    except requests.RequestException as e:
        LOGGER.error("API connection failed for '%s': %s", args.endpoint, e)
        return 1

    print(result.to_json(pretty=args.pretty))
    return 0


def main() -> None:  # pragma: no cover - CLI entrypoint
    """CLI entry point."""
    sys.exit(run_cli())


if __name__ == "__main__":  # pragma: no cover - CLI execution path
    main()
