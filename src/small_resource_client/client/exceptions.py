"""Error taxonomy for the resource client."""

from enum import Enum
from typing import Literal

Operation = Literal["create", "read", "write", "unlock"]


class ErrorKind(str, Enum):
    """Tag carried by every failure."""

    SERVER_UNAVAILABLE = "server_unavailable"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    UNAUTHORIZED = "unauthorized"
    BAD_FORMAT = "bad_format"
    NOT_UPDATED = "not_updated"
    UNKNOWN = "unknown"
    LOCK_NOT_ACQUIRED = "lock_not_acquired"


class TransportError(Exception):
    """The transport could not complete the exchange (connect, timeout, DNS)."""
    pass


class ResourceError(Exception):
    """A resource operation failed.

    There is a single exception type; callers branch on ``kind``.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.body = body
        super().__init__(message)

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"HTTP {self.status_code}: {self.message}"
        return self.message


_SUCCESS_STATUSES: dict[str, frozenset[int]] = {
    "create": frozenset({200, 201}),
    "read": frozenset({200, 202}),
    "write": frozenset({200, 204}),
    "unlock": frozenset({200}),
}


def classify_status(operation: Operation, status_code: int) -> ErrorKind | None:
    """Map an operation's HTTP status code to an error kind.

    Args:
        operation: One of "create", "read", "write", "unlock"
        status_code: HTTP status code returned by the server

    Returns:
        None when the status is a success for that operation (202 counts as
        success for "read"), otherwise the matching ErrorKind.
    """
    if status_code in _SUCCESS_STATUSES[operation]:
        return None
    if operation == "create":
        if status_code == 409:
            return ErrorKind.ALREADY_EXISTS
        if status_code == 401:
            return ErrorKind.UNAUTHORIZED
    elif operation == "read":
        if status_code == 404:
            return ErrorKind.NOT_FOUND
    elif operation == "write":
        return ErrorKind.NOT_UPDATED
    return ErrorKind.UNKNOWN
