"""HTTP transport used by the request pipeline.

Any object with an async ``send(method, url, headers, body, timeout)``
returning a ``TransportResponse`` can be injected. Implementations signal
failures with ``TransportTimeout`` or ``TransportFailure`` only.
"""

from dataclasses import dataclass
from typing import Mapping, Optional, Protocol

import httpx

from mws_api.core.logger import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """Status code and decoded text body of one HTTP exchange."""

    status_code: int
    body: str


class TransportTimeout(Exception):
    """Socket or connect timeout."""


class TransportFailure(Exception):
    """Any other transport-level failure (DNS, refused connection, TLS...)."""


class Transport(Protocol):
    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[str],
        timeout: float,
    ) -> TransportResponse:
        ...


class HttpxTransport:
    """Async transport backed by ``httpx.AsyncClient``."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        """
        Initialize transport.

        Args:
            client: Optional preconfigured client (e.g. with a MockTransport)
        """
        self.client = client or httpx.AsyncClient()

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[str],
        timeout: float,
    ) -> TransportResponse:
        """
        Perform one HTTP exchange.

        Returns:
            TransportResponse for any HTTP status

        Raises:
            TransportTimeout: On connect/read/write/pool timeouts
            TransportFailure: On any other error (httpx, invalid URL, socket)
        """
        try:
            response = await self.client.request(
                method,
                url,
                headers=dict(headers),
                content=body.encode("utf-8") if body is not None else None,
                timeout=timeout,
            )
        except httpx.TimeoutException as e:
            logger.warning(f"Timeout calling {method} {url}: {type(e).__name__}")
            raise TransportTimeout(str(e)) from e
        except Exception as e:
            logger.error(f"Transport error calling {method} {url}: {e}")
            raise TransportFailure(str(e)) from e

        return TransportResponse(status_code=response.status_code, body=response.text)

    async def close(self) -> None:
        """Close HTTP client connection."""
        await self.client.aclose()
