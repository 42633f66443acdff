"""Exceptions raised by the OpenWeatherMap clients."""
from __future__ import annotations
from typing import Optional


class OWMError(Exception):
    """Base exception for all OpenWeatherMap client errors."""
    pass


class InvalidArgument(OWMError, ValueError):
    """A configuration value or request parameter was rejected locally.

    Raised before any network activity takes place.
    """
    pass


class APIException(OWMError):
    """The service answered with an unsuccessful status and no usable body.

    Attributes:
        code: HTTP status code reported by the transport.
        message: HTTP status message (reason phrase) reported by the transport.
        detail: Error text from the response, when the service sent one.
    """

    def __init__(self, code: int, message: str, *, detail: Optional[str] = None) -> None:
        text = f"HTTP {code}: {message}"
        if detail:
            text = f"{text} (details: {detail})"
        super().__init__(text)
        self.code = code
        self.message = message
        self.detail = detail


__all__ = ["OWMError", "InvalidArgument", "APIException"]
