"""Per-client network proxy configuration."""
from __future__ import annotations
from enum import Enum
from typing import Any, Dict, Optional
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .enums import ProxyType
from .exceptions import InvalidArgument


class ProxyMode(str, Enum):
    SYSTEM = "system"  # whatever the environment (HTTP_PROXY, HTTPS_PROXY, ...) says
    DIRECT = "direct"  # no proxy at all
    MANUAL = "manual"  # explicit host and port


class ProxyConfig(BaseModel):
    """Proxy used by every transport of one client.

    Credentials belong to exactly one manual proxy target; they are rejected
    for system and direct modes.

    Attributes:
        mode: How the proxy is selected.
        host: Proxy host name (manual mode only).
        port: Proxy port (manual mode only).
        proxy_type: Protocol spoken with the proxy.
        username: Proxy user name.
        password: Proxy password.
    """

    model_config = ConfigDict(frozen=True)

    mode: ProxyMode = ProxyMode.SYSTEM
    host: Optional[str] = None
    port: Optional[int] = Field(None, ge=1, le=65535)
    proxy_type: ProxyType = ProxyType.HTTP
    username: Optional[str] = None
    password: Optional[str] = Field(None, repr=False)

    @model_validator(mode="after")
    def check_target(self) -> "ProxyConfig":
        """Validate that host, port and credentials fit the selected mode."""
        if self.mode is ProxyMode.MANUAL:
            if not self.host or not self.host.strip() or self.port is None:
                raise ValueError("manual proxy requires a host and a port")
        elif self.host is not None or self.port is not None:
            raise ValueError(f"{self.mode.value} proxy mode takes no host or port")
        if (self.username is None) != (self.password is None):
            raise ValueError("proxy username and password must be given together")
        if self.username is not None and self.mode is not ProxyMode.MANUAL:
            raise ValueError("proxy credentials require an explicit proxy host and port")
        return self

    @classmethod
    def _build(cls, **values: Any) -> "ProxyConfig":
        try:
            return cls(**values)
        except ValidationError as exc:
            raise InvalidArgument(f"Invalid proxy configuration: {exc}") from exc

    @classmethod
    def system(cls) -> "ProxyConfig":
        """Use the proxy configured in the process environment."""
        return cls._build(mode=ProxyMode.SYSTEM)

    @classmethod
    def direct(cls) -> "ProxyConfig":
        """Connect directly, ignoring any environment proxy."""
        return cls._build(mode=ProxyMode.DIRECT)

    @classmethod
    def manual(
        cls,
        host: str,
        port: int,
        proxy_type: ProxyType = ProxyType.HTTP,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> "ProxyConfig":
        """Route through an explicit proxy, optionally authenticated."""
        return cls._build(
            mode=ProxyMode.MANUAL,
            host=host,
            port=port,
            proxy_type=proxy_type,
            username=username,
            password=password,
        )

    @property
    def has_credentials(self) -> bool:
        return self.username is not None

    @property
    def trust_env(self) -> bool:
        """Whether the HTTP session may pick proxies up from the environment."""
        return self.mode is ProxyMode.SYSTEM

    @property
    def url(self) -> Optional[str]:
        """Proxy URL in the form requests expects, or None when not manual."""
        if self.mode is not ProxyMode.MANUAL:
            return None
        auth = ""
        if self.has_credentials:
            auth = f"{quote(self.username, safe='')}:{quote(self.password, safe='')}@"
        return f"{self.proxy_type.value}://{auth}{self.host}:{self.port}"

    def as_requests_proxies(self) -> Dict[str, str]:
        url = self.url
        if url is None:
            return {}
        return {"http": url, "https": url}

    def describe(self) -> str:
        """Loggable description that never includes the password."""
        if self.mode is not ProxyMode.MANUAL:
            return self.mode.value
        user = f"{self.username}@" if self.has_credentials else ""
        return f"{self.proxy_type.value}://{user}{self.host}:{self.port}"


__all__ = ["ProxyMode", "ProxyConfig"]
