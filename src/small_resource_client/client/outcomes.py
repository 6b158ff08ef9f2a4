"""Decoded results of a single exchange with the resource server."""

from dataclasses import dataclass
from typing import Any, ClassVar, NoReturn, Union

from .exceptions import ErrorKind, ResourceError


@dataclass(frozen=True)
class Data:
    """Selector content returned by a 200 read."""

    value: Any
    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class Pending:
    """Lock requested but not granted yet; the ticket has been stored for retry."""

    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class Success:
    """Write or unlock accepted."""

    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class Failure:
    """Tagged failure with whatever the server sent back for diagnostics."""

    kind: ErrorKind
    detail: str
    status_code: int | None = None
    body: str | None = None
    ok: ClassVar[bool] = False

    def to_error(self) -> ResourceError:
        return ResourceError(self.kind, self.detail, self.status_code, self.body)

    def raise_error(self) -> NoReturn:
        """Raise this failure as a ResourceError."""
        raise self.to_error()


Outcome = Union[Data, Pending, Success, Failure]
