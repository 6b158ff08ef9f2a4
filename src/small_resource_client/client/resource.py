"""Client handle for a single named resource.

Server API:
    POST   /resource                              -> create (see ResourceFactory)
    GET    /resource/{name}/{selector}?lock=1|0   -> read, optionally requesting the lock
    PUT    /resource/{name}/{selector}            -> write (requires granted ticket)
    POST   /resource/{name}/{selector}/unlock     -> unlock

Every response may carry a ticket header. The handle stores the last one it
saw and replays it on every following request; it never interprets it.
"""

import json
import logging
from typing import Any
from urllib.parse import quote

from .exceptions import ErrorKind, Operation, TransportError, classify_status
from .outcomes import Data, Failure, Pending, Success
from .transport import ResourceTransport, TransportResponse

logger = logging.getLogger("small-resource-client")

API_KEY_HEADER = "x-api-key"
DEFAULT_TICKET_HEADER = "X-Ticket"


def encode_segment(value: str) -> str:
    """Percent-encode a value as a single path segment."""
    return quote(value, safe="")


def read_body(response: TransportResponse) -> str:
    """Return the response body for diagnostics, or "" if it cannot be read."""
    try:
        return response.text
    except Exception:
        return ""


def decode_envelope(text: str) -> Data | Failure:
    """Decode a 200 read body.

    The server double-encodes selector content: the body is a JSON object
    whose ``data`` member is itself a JSON document serialised as a string.
    """
    if not text:
        return Data(None)

    try:
        envelope = json.loads(text)
    except json.JSONDecodeError as e:
        return Failure(ErrorKind.BAD_FORMAT, f"Invalid JSON returned by resource server: {e}")
    if not isinstance(envelope, dict):
        return Failure(ErrorKind.BAD_FORMAT, "Resource server response is not a JSON object")

    raw = envelope.get("data")
    if not isinstance(raw, str):
        return Failure(ErrorKind.BAD_FORMAT, "Resource server response has no JSON-encoded 'data' member")
    try:
        return Data(json.loads(raw))
    except json.JSONDecodeError as e:
        return Failure(ErrorKind.BAD_FORMAT, f"Invalid JSON data: {e}")


class Resource:
    """Handle on one named resource and its ticket.

    A handle is not safe for concurrent use: the ticket is a plain attribute
    overwritten by every response. Use one handle per workflow, or guard it
    with a lock.

    Usage:
        resource = factory.get_resource("printer")
        if resource.try_lock("queue"):
            outcome = resource.read("queue")
            resource.write("queue", {"status": "done"})
            resource.unlock("queue")
    """

    def __init__(
        self,
        name: str,
        transport: ResourceTransport,
        api_key: str | None = None,
        ticket_header: str = DEFAULT_TICKET_HEADER,
        ticket: str | None = None,
    ):
        """Initialize a handle.

        Args:
            name: Resource name on the server
            transport: Transport used for every exchange
            api_key: Value of the x-api-key header
            ticket_header: Header carrying the ticket in both directions
            ticket: Ticket previously issued by the server, if any
        """
        self._name = name
        self._transport = transport
        self._api_key = api_key
        self._ticket_header = ticket_header
        self._ticket = ticket

    def __repr__(self) -> str:
        return f"Resource(name={self._name!r}, ticket={self._ticket!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def ticket(self) -> str | None:
        return self._ticket

    def current_ticket(self) -> str | None:
        """Last ticket received from the server, if any."""
        return self._ticket

    def read(self, selector: str, lock: bool = False) -> Data | Pending | Failure:
        """Fetch selector content, optionally asking for the lock.

        Args:
            selector: Selector within the resource
            lock: Ask the server to grant (or keep) the lock

        Returns:
            Data with the decoded content on 200, Pending on 202 (lock queued,
            ticket stored), or a Failure.
        """
        exchange = self._exchange(
            "read",
            "GET",
            self._path(selector),
            params={"lock": 1 if lock else 0},
        )
        if isinstance(exchange, Failure):
            return exchange

        status = exchange.status_code
        if status == 200:
            try:
                text = exchange.text
            except UnicodeDecodeError as e:
                return Failure(ErrorKind.BAD_FORMAT, f"Response body is not valid UTF-8: {e}", status)
            return decode_envelope(text)
        if status == 202:
            return Pending()

        kind = classify_status("read", status)
        if kind is ErrorKind.NOT_FOUND:
            detail = f"Selector not found ({selector}) for resource {self._name}"
        else:
            detail = f'read failed for "{selector}"'
        return Failure(kind, detail, status, read_body(exchange))

    def try_lock(self, selector: str) -> bool:
        """Probe for the lock on a selector.

        Returns:
            True if the server reports the lock as granted, False while the
            request is pending (the ticket is stored for the next probe).

        Raises:
            ResourceError: If the read failed.
        """
        outcome = self.read(selector, lock=True)
        if isinstance(outcome, Failure):
            outcome.raise_error()
        if isinstance(outcome, Pending):
            return False
        value = outcome.value
        if isinstance(value, dict):
            return bool(value.get("locked", False))
        return False

    def write(self, selector: str, payload: Any) -> Success | Failure:
        """Replace selector content.

        A granted ticket must have been obtained through read(lock=True) or
        try_lock beforehand; without one the request is still sent and the
        server rejects it.
        """
        try:
            body = json.dumps(payload)
        except (TypeError, ValueError) as e:
            return Failure(ErrorKind.BAD_FORMAT, f"Payload is not JSON serialisable: {e}")

        exchange = self._exchange(
            "write",
            "PUT",
            self._path(selector),
            headers={"content-type": "application/json"},
            content=body,
        )
        if isinstance(exchange, Failure):
            return exchange

        kind = classify_status("write", exchange.status_code)
        if kind is None:
            return Success()
        return Failure(
            kind,
            f'write failed for "{selector}"',
            exchange.status_code,
            read_body(exchange),
        )

    def unlock(self, selector: str) -> Success | Failure:
        """Release the lock held on a selector."""
        exchange = self._exchange("unlock", "POST", self._path(selector, "unlock"))
        if isinstance(exchange, Failure):
            return exchange

        kind = classify_status("unlock", exchange.status_code)
        if kind is None:
            return Success()
        return Failure(
            kind,
            f'unlock failed for "{selector}"',
            exchange.status_code,
            read_body(exchange),
        )

    def _path(self, selector: str, action: str | None = None) -> str:
        path = f"/resource/{encode_segment(self._name)}/{encode_segment(selector)}"
        if action:
            path = f"{path}/{action}"
        return path

    def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        headers = dict(extra or {})
        if self._ticket is not None:
            headers[self._ticket_header] = self._ticket
        if self._api_key:
            headers[API_KEY_HEADER] = self._api_key
        return headers

    def _exchange(
        self,
        operation: Operation,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        content: str | None = None,
    ) -> TransportResponse | Failure:
        """Send one request and refresh the ticket from whatever comes back."""
        try:
            response = self._transport.request(
                method,
                path,
                params=params,
                headers=self._headers(headers),
                content=content,
            )
        except TransportError as e:
            logger.warning(f"{operation} {path}: resource server unavailable: {e}")
            return Failure(ErrorKind.SERVER_UNAVAILABLE, f"Failed to contact resource server: {e}")

        ticket = response.headers.get(self._ticket_header)
        if ticket is not None:
            self._ticket = ticket

        logger.debug(
            f"{operation} {method} {path} -> {response.status_code}"
            f"{' (ticket refreshed)' if ticket is not None else ''}"
        )
        return response
