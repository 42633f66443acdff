"""Centralized configuration management using Pydantic Settings.

This module provides type-safe, validated configuration loading from environment
variables and .env files. The API key and proxy credentials should be managed
here instead of hardcoding them in application code.

Example .env file:
    OWM_API_KEY=your_api_key
    OWM_TIER=pro
    OWM_UNITS=metric
    OWM_PROXY_HOST=proxy.local
    OWM_PROXY_PORT=3128

Example:
    >>> from owm_client.config import create_client
    >>> with create_client() as owm:
    ...     owm.current_weather_by_city_id(2643743)
"""

from __future__ import annotations

import logging
import threading
from typing import Literal, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from owm_client.clients.client import OWM
from owm_client.clients.constants import DEFAULT_TIMEOUT_SECONDS
from owm_client.clients.enums import Accuracy, Language, ProxyType, Unit
from owm_client.clients.exceptions import InvalidArgument
from owm_client.clients.pro import OWMPro
from owm_client.clients.proxy import ProxyConfig

LOGGER = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Root settings container for the OpenWeatherMap client.

    All configuration is loaded from ``OWM_``-prefixed environment variables or
    a .env file. A missing API key raises ValidationError.
    """

    model_config = SettingsConfigDict(
        env_prefix="OWM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str = Field(
        ...,
        repr=False,
        description="OpenWeatherMap API key (REQUIRED)",
    )
    tier: Literal["free", "pro"] = Field(
        default="free",
        description="Subscription tier; selects OWM or OWMPro",
    )
    units: Unit = Field(
        default=Unit.STANDARD,
        description="Unit system: standard, metric or imperial",
    )
    language: Language = Field(
        default=Language.ENGLISH,
        description="Language code for condition descriptions",
    )
    accuracy: Accuracy = Field(
        default=Accuracy.LIKE,
        description="Name search accuracy: like or accurate",
    )
    proxy_host: Optional[str] = Field(
        default=None,
        description="Proxy hostname; unset means the system proxy",
    )
    proxy_port: Optional[int] = Field(
        default=None,
        ge=1,
        le=65535,
        description="Proxy port number",
    )
    proxy_type: ProxyType = Field(
        default=ProxyType.HTTP,
        description="Proxy protocol: http or socks5h",
    )
    proxy_username: Optional[str] = Field(
        default=None,
        description="Proxy user name",
    )
    proxy_password: Optional[str] = Field(
        default=None,
        repr=False,
        description="Proxy password",
    )
    timeout: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        description="HTTP timeout in seconds",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Reject empty and whitespace-only keys."""
        if not v.strip():
            raise ValueError("OWM_API_KEY can't be empty/blank")
        return v

    @field_validator("tier", mode="before")
    @classmethod
    def normalize_tier(cls, v: object) -> object:
        return v.strip().lower() if isinstance(v, str) else v

    def proxy_config(self) -> ProxyConfig:
        """Build the client proxy from the proxy_* settings.

        Raises:
            InvalidArgument: If credentials are set without a proxy host and port.
        """
        if self.proxy_host is None and self.proxy_port is None:
            if self.proxy_username is not None or self.proxy_password is not None:
                raise InvalidArgument("Proxy credentials require OWM_PROXY_HOST and OWM_PROXY_PORT")
            return ProxyConfig.system()
        return ProxyConfig.manual(
            self.proxy_host,
            self.proxy_port,
            self.proxy_type,
            username=self.proxy_username,
            password=self.proxy_password,
        )


# Lazy initialization - only create settings when accessed
_settings: Optional[Settings] = None
_settings_lock = threading.Lock()


def get_settings() -> Settings:
    """Get or create the Settings singleton (thread-safe).

    This function uses double-checked locking to ensure thread-safe
    initialization of the Settings singleton.

    Returns:
        Settings instance loaded from environment variables/.env file.

    Raises:
        ValidationError: If required configuration is missing.
    """
    global _settings

    # First check without lock (fast path)
    if _settings is not None:
        return _settings

    with _settings_lock:
        # Double-check after acquiring lock
        if _settings is None:
            LOGGER.info("Initializing Settings from environment variables and .env file")
            try:
                _settings = Settings()
            except ValidationError as e:
                LOGGER.error("Configuration validation failed: %s", e)
                raise
            LOGGER.info("Settings initialized successfully (tier=%s)", _settings.tier)

    return _settings


def reset_settings() -> None:
    """Drop the cached Settings so the next get_settings() reloads them."""
    global _settings
    with _settings_lock:
        _settings = None


def create_client(settings: Optional[Settings] = None) -> OWM:
    """Build an OWM (free tier) or OWMPro client from settings.

    Args:
        settings: Settings to use; defaults to get_settings().

    Returns:
        A configured client. The caller owns it and should close it.
    """
    settings = settings or get_settings()
    client_cls = OWMPro if settings.tier == "pro" else OWM
    return client_cls.from_settings(settings)


__all__ = ["Settings", "get_settings", "reset_settings", "create_client"]
