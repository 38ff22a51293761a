"""
Connection configuration for the Yars adapter.

Provides:
- YarsConfig: host, port, context, proxy and query language
- TransportConfig: timeout, retry and pooling options
- JSON load/save and validation
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import urlparse

import httpx

from active_rdf.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080
DEFAULT_CONTEXT = ""
QUERY_LANGUAGE = "n3"

ProxySpec = Union[str, httpx.Proxy]


def validate_proxy(proxy: Any) -> ProxySpec:
    """
    Check that a proxy descriptor can carry HTTP traffic.

    Accepts an httpx.Proxy or a non-empty http(s) URL string.

    Raises:
        ConfigurationError: if the proxy is not usable
    """
    if isinstance(proxy, httpx.Proxy):
        return proxy
    if isinstance(proxy, str) and proxy:
        parsed = urlparse(proxy)
        if parsed.scheme in ("http", "https") and parsed.hostname:
            return proxy
    raise ConfigurationError(f"provided proxy is not a valid HTTP proxy: {proxy!r}")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class TransportConfig:
    """HTTP transport options."""
    timeout: Optional[float] = None  # None = httpx default
    retries: int = 0                 # extra attempts on network failure only
    backoff_seconds: float = 0.5
    pooled: bool = False             # keep one client per adapter

    def __post_init__(self):
        if self.timeout is not None and not _is_number(self.timeout):
            raise ConfigurationError(f"timeout must be a number, got {self.timeout!r}")
        if isinstance(self.retries, bool) or not isinstance(self.retries, int):
            raise ConfigurationError(f"retries must be an integer, got {self.retries!r}")
        if not _is_number(self.backoff_seconds):
            raise ConfigurationError(f"backoff_seconds must be a number, got {self.backoff_seconds!r}")
        if not isinstance(self.pooled, bool):
            raise ConfigurationError(f"pooled must be a boolean, got {self.pooled!r}")
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")
        if self.retries < 0:
            raise ConfigurationError(f"retries must be >= 0, got {self.retries}")
        if self.backoff_seconds < 0:
            raise ConfigurationError(f"backoff_seconds must be >= 0, got {self.backoff_seconds}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timeout": self.timeout,
            "retries": self.retries,
            "backoff_seconds": self.backoff_seconds,
            "pooled": self.pooled,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TransportConfig":
        return cls(
            timeout=data.get("timeout"),
            retries=data.get("retries", 0),
            backoff_seconds=data.get("backoff_seconds", 0.5),
            pooled=data.get("pooled", False),
        )


@dataclass(frozen=True)
class YarsConfig:
    """
    Connection parameters for one Yars store.

    The store is reached at http://{host}:{port}/{context}.
    """
    host: str
    port: int = DEFAULT_PORT
    context: str = DEFAULT_CONTEXT
    proxy: Optional[ProxySpec] = None
    query_language: str = QUERY_LANGUAGE
    transport: TransportConfig = field(default_factory=TransportConfig)

    def __post_init__(self):
        if not isinstance(self.host, str) or not self.host:
            raise ConfigurationError("Yars adapter initialisation error: host is missing")
        if isinstance(self.port, bool) or not isinstance(self.port, int) or not 0 < self.port < 65536:
            raise ConfigurationError(f"Yars adapter initialisation error: invalid port {self.port!r}")
        if not isinstance(self.context, str):
            raise ConfigurationError(f"Yars adapter initialisation error: invalid context {self.context!r}")
        # Leading/trailing slashes are implied by the URL layout
        object.__setattr__(self, "context", self.context.strip("/"))
        if self.proxy is not None:
            validate_proxy(self.proxy)

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def path(self) -> str:
        return f"/{self.context}"

    def to_dict(self) -> Dict[str, Any]:
        proxy = self.proxy
        if isinstance(proxy, httpx.Proxy):
            proxy = str(proxy.url)
        return {
            "host": self.host,
            "port": self.port,
            "context": self.context,
            "proxy": proxy,
            "query_language": self.query_language,
            "transport": self.transport.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "YarsConfig":
        """
        Build a config from a parameter mapping.

        Missing port/context fall back to the defaults; a None value is
        treated as missing.
        """
        if data is None:
            raise ConfigurationError("Yars adapter initialisation error. Parameters are nil.")
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Yars adapter initialisation error: expected a mapping, got {type(data).__name__}"
            )

        transport = data.get("transport") or {}
        if isinstance(transport, Mapping):
            transport = TransportConfig.from_dict(transport)
        elif not isinstance(transport, TransportConfig):
            raise ConfigurationError(f"invalid transport options: {transport!r}")

        port = data.get("port")
        context = data.get("context")
        return cls(
            host=data.get("host"),
            port=DEFAULT_PORT if port is None else port,
            context=DEFAULT_CONTEXT if context is None else context,
            proxy=data.get("proxy"),
            query_language=data.get("query_language") or QUERY_LANGUAGE,
            transport=transport,
        )

    def save(self, path: Union[str, Path]) -> None:
        """Write the config as JSON."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "YarsConfig":
        """Read a config from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid config file {path}: {e}") from e
        logger.debug(f"Loaded Yars config from {path}")
        return cls.from_dict(data)
