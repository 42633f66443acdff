"""Configuration management for the OpenWeatherMap client."""

from __future__ import annotations

from .settings import Settings, create_client, get_settings, reset_settings

__all__ = ["Settings", "get_settings", "reset_settings", "create_client"]
