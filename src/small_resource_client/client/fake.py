"""In-memory transport for tests.

Usage:
    transport = FakeTransport()
    transport.add_response(TransportResponse(202, headers={"X-Ticket": "tk-202"}))
    factory = ResourceFactory(config, transport=transport)
    ...
    assert transport.calls[0].method == "GET"
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from .transport import TransportResponse

Resolver = Callable[["RecordedCall"], TransportResponse]


@dataclass
class RecordedCall:
    """One request as the fake saw it."""

    method: str
    path: str
    params: dict[str, Any] | None = None
    headers: dict[str, str] = field(default_factory=dict)
    json: Any = None
    content: bytes | str | None = None


class FakeTransport:
    """Transport that answers from a FIFO queue.

    Each queued item is consumed by exactly one request and may be a
    TransportResponse, a resolver called with the RecordedCall, or an
    exception instance to raise (e.g. TransportError).
    """

    def __init__(self):
        self.calls: list[RecordedCall] = []
        self.closed = False
        self._queue: deque[TransportResponse | Resolver | BaseException] = deque()

    def add_response(self, response: TransportResponse) -> None:
        self._queue.append(response)

    def add_resolver(self, resolver: Resolver) -> None:
        self._queue.append(resolver)

    def add_error(self, error: BaseException) -> None:
        self._queue.append(error)

    @property
    def pending(self) -> int:
        """Number of queued items not yet consumed."""
        return len(self._queue)

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
        call = RecordedCall(
            method=method.upper(),
            path=path,
            params=dict(params) if params is not None else None,
            headers=dict(headers or {}),
            json=json,
            content=content,
        )
        self.calls.append(call)

        if not self._queue:
            raise RuntimeError("No response queued for FakeTransport")
        item = self._queue.popleft()

        if isinstance(item, BaseException):
            raise item
        if isinstance(item, TransportResponse):
            return item
        response = item(call)
        if not isinstance(response, TransportResponse):
            raise RuntimeError("Resolver must return a TransportResponse")
        return response

    def close(self) -> None:
        self.closed = True
