"""Transport protocol for resource server communication.

This module defines the single capability the resource client needs from
the network: perform one request and hand back the raw response. Both the
httpx-backed transport and the in-memory fake conform to it, so Resource
and ResourceFactory work with either interchangeably.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, runtime_checkable

import httpx


@dataclass
class TransportResponse:
    """Raw result of one exchange.

    Headers are normalised to ``httpx.Headers`` so lookups are
    case-insensitive whatever casing the server used.
    """

    status_code: int
    content: bytes = b""
    headers: httpx.Headers = field(default_factory=httpx.Headers)

    def __post_init__(self):
        if isinstance(self.content, str):
            self.content = self.content.encode("utf-8")
        self.headers = httpx.Headers(self.headers)

    @property
    def text(self) -> str:
        """Body decoded as UTF-8.

        Raises:
            UnicodeDecodeError: If the body is not valid UTF-8.
        """
        return self.content.decode("utf-8")


@runtime_checkable
class ResourceTransport(Protocol):
    """Protocol defining the transport interface.

    Transports are responsible for:
    - Sending the request to the resource server
    - Returning every received response, whatever its status code
    - Raising TransportError when no response could be obtained

    Transports never retry and never interpret status codes.
    """

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
        """Perform a single exchange.

        Args:
            method: HTTP method (GET, POST, PUT)
            path: Path relative to the server URI, already percent-encoded
            params: Optional query parameters
            headers: Optional request headers
            json: Optional body serialised as JSON by the transport
            content: Optional pre-serialised body

        Returns:
            The response, including non-2xx ones

        Raises:
            TransportError: If unable to connect or the request timed out
        """
        ...

    def close(self) -> None:
        """Release connection pools and clients. Safe to call multiple times."""
        ...
