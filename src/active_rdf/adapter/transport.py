"""
HTTP transport for the Yars adapter.

Each request opens its own httpx.Client and closes it before returning,
unless pooling is enabled, in which case one client is kept for the
lifetime of the transport. Either way exactly one HTTP request is sent
per call.
"""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

import httpx

from active_rdf.adapter.config import TransportConfig, YarsConfig
from active_rdf.errors import TransportError

logger = logging.getLogger(__name__)


@dataclass
class RequestStats:
    """Counters for requests sent through a transport."""
    success_count: int = 0
    error_count: int = 0
    last_status: Optional[int] = None
    last_latency_ms: Optional[float] = None

    @property
    def success_rate(self) -> float:
        """Share of requests that got an HTTP answer."""
        total = self.success_count + self.error_count
        if total == 0:
            return 0.0
        return self.success_count / total

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success_count": self.success_count,
            "error_count": self.error_count,
            "last_status": self.last_status,
            "last_latency_ms": self.last_latency_ms,
            "success_rate": self.success_rate,
        }


class HttpTransport:
    """
    Sends single HTTP requests to a Yars endpoint.

    Args:
        config: Connection parameters
        transport: Optional httpx transport, e.g. httpx.MockTransport in tests
        log: Logger for request tracing
    """

    def __init__(
        self,
        config: YarsConfig,
        transport: Optional[httpx.BaseTransport] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.config = config
        self.options: TransportConfig = config.transport
        self.stats = RequestStats()
        self._transport = transport
        self._log = log or logger
        self._lock = threading.Lock()
        self._client: Optional[httpx.Client] = None

    def _new_client(self) -> httpx.Client:
        kwargs: Dict[str, Any] = {"base_url": self.config.base_url}
        if self.options.timeout is not None:
            kwargs["timeout"] = self.options.timeout
        if self.config.proxy is not None:
            kwargs["proxy"] = self.config.proxy
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return httpx.Client(**kwargs)

    @contextmanager
    def client(self) -> Iterator[httpx.Client]:
        """Yield a client; per-call clients are closed on exit."""
        if self.options.pooled:
            with self._lock:
                if self._client is None:
                    self._client = self._new_client()
                client = self._client
            yield client
            return

        with self._new_client() as client:
            yield client

    def request(
        self,
        method: str,
        url: str,
        content: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """
        Send one request, retrying only on network failures.

        Args:
            method: HTTP method
            url: Path and query relative to the store's base URL
            content: Request body
            headers: Extra request headers

        Returns:
            The response, whatever its status

        Raises:
            TransportError: if the store could not be reached
        """
        attempts = self.options.retries + 1
        last_error: Optional[httpx.TransportError] = None

        for attempt in range(1, attempts + 1):
            start_time = time.time()
            try:
                with self.client() as client:
                    response = client.request(method, url, content=content, headers=headers)
            except httpx.TransportError as e:
                last_error = e
                with self._lock:
                    self.stats.error_count += 1
                if attempt < attempts:
                    self._log.warning(
                        f"{method} {url} failed ({e!r}), retry {attempt}/{self.options.retries}"
                    )
                    time.sleep(self.options.backoff_seconds * attempt)
                continue

            latency = (time.time() - start_time) * 1000
            with self._lock:
                self.stats.success_count += 1
                self.stats.last_status = response.status_code
                self.stats.last_latency_ms = latency
            self._log.debug(f"{method} {url} -> {response.status_code} {response.reason_phrase} ({latency:.1f} ms)")
            return response

        raise TransportError(
            f"{method} {self.config.base_url}{url} failed after {attempts} attempt(s): {last_error}"
        ) from last_error

    def close(self) -> None:
        """Close the pooled client, if any."""
        with self._lock:
            if self._client is not None:
                self._client.close()
                self._client = None
