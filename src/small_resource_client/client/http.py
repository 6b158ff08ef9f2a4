"""HTTP transport for the resource server.

This module implements the production transport on top of httpx. It only
moves bytes: status codes are interpreted by Resource and ResourceFactory,
and nothing is retried here.
"""

import logging
from typing import Any, Mapping

import httpx

from .config import ResourceClientConfig
from .exceptions import TransportError
from .transport import TransportResponse

logger = logging.getLogger("small-resource-client")


class HTTPTransport:
    """HTTP transport backed by ``httpx.Client``.

    Implements the ResourceTransport protocol.

    Usage:
        transport = HTTPTransport(config)
        response = transport.request("GET", "/resource/printer/queue", params={"lock": 0})
        transport.close()

    Or as context manager:
        with HTTPTransport(config) as transport:
            ...
    """

    def __init__(
        self,
        config: ResourceClientConfig | None = None,
        http_transport: httpx.BaseTransport | None = None,
    ):
        """Initialize HTTP transport.

        Args:
            config: Client configuration. If None, loads from environment.
            http_transport: Optional httpx transport (e.g. ``httpx.MockTransport``
                in tests) used underneath the client.
        """
        self.config = config or ResourceClientConfig()
        self._http_transport = http_transport
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialize the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.config.server_uri,
                timeout=self.config.timeout,
                headers={"accept": "application/json"},
                transport=self._http_transport,
            )
        return self._client

    def __enter__(self) -> "HTTPTransport":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close client."""
        self.close()

    def close(self) -> None:
        """Close HTTP client and release resources."""
        if self._client:
            self._client.close()
            self._client = None

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        json: Any = None,
        content: bytes | str | None = None,
    ) -> TransportResponse:
        """Execute one request.

        Returns:
            The response whatever its status code

        Raises:
            TransportError: On connection, timeout, protocol, decoding or
                redirect failures
        """
        try:
            response = self.client.request(
                method,
                path,
                params=params,
                headers=headers,
                json=json,
                content=content,
            )
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timeout to {self.config.server_uri}: {e}") from e
        except httpx.TransportError as e:
            raise TransportError(f"Cannot connect to {self.config.server_uri}: {e}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"Request to {self.config.server_uri} failed: {e}") from e

        return TransportResponse(
            status_code=response.status_code,
            content=response.content,
            headers=response.headers,
        )
