from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional
from urllib.parse import urlparse

from .errors import ConfigurationError

DEFAULT_URL = "ws://localhost:7880"
DEFAULT_API_KEY = "devkey"
DEFAULT_API_SECRET = "secret"


@dataclass
class ConnectionConfig:
    """Where the LiveKit server lives and how to sign tokens for it."""

    url: str = DEFAULT_URL
    api_key: str = DEFAULT_API_KEY
    api_secret: str = DEFAULT_API_SECRET

    def __post_init__(self) -> None:
        scheme = urlparse(self.url).scheme
        if scheme not in ("ws", "wss", "http", "https"):
            raise ConfigurationError(f"Unsupported server url: {self.url!r}")
        if not self.api_key or not self.api_secret:
            raise ConfigurationError("API key and secret must not be empty")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ConnectionConfig":
        env = os.environ if environ is None else environ
        return cls(
            url=env.get("LIVEKIT_URL", DEFAULT_URL),
            api_key=env.get("LIVEKIT_API_KEY", DEFAULT_API_KEY),
            api_secret=env.get("LIVEKIT_API_SECRET", DEFAULT_API_SECRET),
        )

    @classmethod
    def from_host(cls, host: str, port: int, api_key: str, api_secret: str) -> "ConnectionConfig":
        return cls(url=f"ws://{host}:{port}", api_key=api_key, api_secret=api_secret)

    @property
    def http_url(self) -> str:
        """Server url for the HTTP room service."""
        parsed = urlparse(self.url)
        scheme = {"ws": "http", "wss": "https"}.get(parsed.scheme, parsed.scheme)
        return parsed._replace(scheme=scheme).geturl()
