"""HTTP transport layer.

The client talks to the network only through the Transport contract:

    send(endpoint, method, headers, body, timeout) -> TransportResponse

HttpxTransport is the default implementation, built on a synchronous
httpx.Client. Status codes are not interpreted here; that is the client's job.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import httpx

from rpcwire.core.errors import RequestTimeoutError, TransportError

logger = logging.getLogger(__name__)


@dataclass
class TransportResponse:
    """Raw HTTP reply handed back to the client.

    Attributes:
        status_code: HTTP status code.
        reason: Reason phrase from the status line (may be empty).
        headers: Header lines in arrival order; repeated names are kept.
        body: Raw response body.
    """

    status_code: int
    reason: str = ""
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: bytes = b""

    def get_all(self, name: str) -> list[str]:
        """Return every value of a header, matched case-insensitively."""
        lowered = name.lower()
        return [value for key, value in self.headers if key.lower() == lowered]


class Transport(ABC):
    """Abstract base class for HTTP transports."""

    @abstractmethod
    def send(
        self,
        endpoint: str,
        method: str,
        headers: dict[str, str],
        body: bytes,
        timeout: float,
    ) -> TransportResponse:
        """Perform one HTTP round trip.

        Raises:
            RequestTimeoutError: If the timeout elapses.
            TransportError: For any other transport-level failure.
        """

    def close(self) -> None:
        """Release any held connections."""

    def __enter__(self) -> Transport:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class HttpxTransport(Transport):
    """Transport backed by httpx.Client.

    The underlying client is created lazily on first use and reused for
    subsequent requests. Redirects are never followed: a redirect status
    reaches the client unchanged and is reported as an HttpError.

    Attributes:
        verify: Verify TLS certificates.
        client: Optional pre-built httpx.Client (e.g. with a MockTransport).
    """

    def __init__(self, verify: bool = True, client: httpx.Client | None = None) -> None:
        self._verify = verify
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(verify=self._verify, follow_redirects=False)
        return self._client

    def send(
        self,
        endpoint: str,
        method: str,
        headers: dict[str, str],
        body: bytes,
        timeout: float,
    ) -> TransportResponse:
        client = self._get_client()
        try:
            response = client.request(
                method,
                endpoint,
                headers=headers,
                content=body,
                timeout=timeout,
            )
        except httpx.TimeoutException as e:
            logger.warning("Request to %s timed out after %ss", endpoint, timeout)
            raise RequestTimeoutError(f"Request timed out after {timeout}s: {e}") from e
        except httpx.ConnectError as e:
            logger.warning("Connection failed to %s: %s", endpoint, e)
            raise TransportError(f"Connection failed: {e}") from e
        except httpx.HTTPError as e:
            logger.warning("HTTP request to %s failed: %s", endpoint, e)
            raise TransportError(f"Could not execute request: {e}") from e

        return TransportResponse(
            status_code=response.status_code,
            reason=response.reason_phrase,
            headers=list(response.headers.multi_items()),
            body=response.content,
        )

    def close(self) -> None:
        """Close the httpx client if this transport created it."""
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    @property
    def is_closed(self) -> bool:
        return self._client is None or self._client.is_closed
