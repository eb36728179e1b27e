"""
HTTP transport.

The resource clients only need "send a request, get status + body back".
`RequestsTransport` provides that over a `requests.Session`; anything with
the same `send` signature (e.g. a test double) can be passed instead.

No retries are performed; timeouts are the transport's concern.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

import requests

from ..exceptions import UpConnectionError, UpTransportError

logger = logging.getLogger(__name__)


@dataclass
class TransportResponse:
    """Status code and raw body of one HTTP exchange."""

    status_code: int
    body: bytes


class Transport(Protocol):
    def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes | None = None,
    ) -> TransportResponse: ...


def auth_headers(token: str, has_body: bool = False) -> dict[str, str]:
    """Headers sent with every API call."""
    headers = {
        "Authorization": f"Bearer {token}",
        "Accept": "application/json",
    }
    if has_body:
        headers["Content-Type"] = "application/json"
    return headers


class RequestsTransport:
    """
    Transport backed by requests.

    Features:
    - One pooled session per transport
    - Per-request timeout
    - requests exceptions mapped onto the client's error hierarchy
    """

    DEFAULT_TIMEOUT = 30

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session: requests.Session | None = None):
        """
        Initialize transport.

        Args:
            timeout: Request timeout in seconds
            session: Session to use (a new one is created if omitted)
        """
        self.timeout = timeout
        self.session = session or requests.Session()

    def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes | None = None,
    ) -> TransportResponse:
        """Send one request and return its status and body.

        Raises:
            UpConnectionError: Connection failed or timed out
            UpTransportError: Any other request failure
        """
        logger.debug(f"API Request: {method} {url}")

        try:
            response = self.session.request(
                method=method,
                url=url,
                headers=dict(headers),
                data=body,
                timeout=self.timeout,
            )
        except requests.exceptions.ConnectionError as e:
            logger.error(f"Connection error to {url}: {e}")
            raise UpConnectionError(f"Failed to connect to Up at {url}: {e}") from e
        except requests.exceptions.Timeout as e:
            logger.error(f"Timeout for {url}: {e}")
            raise UpConnectionError(f"Request to Up timed out: {e}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error for {url}: {e}")
            raise UpTransportError(f"Request failed: {e}") from e

        logger.debug(f"Response status: {response.status_code}")
        return TransportResponse(status_code=response.status_code, body=response.content)

    def close(self) -> None:
        self.session.close()
