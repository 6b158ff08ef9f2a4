"""Resource server client.

This package provides the client library for the Small resource server:
named resources whose selectors can be read, locked, written and unlocked,
coordinated through an opaque ticket the server issues on every response.

Usage:
    from small_resource_client.client import ResourceFactory, ResourceClientConfig

    # Auto-configure from environment
    factory = ResourceFactory()
    printer = factory.create_resource("printer", 300)

    if printer.try_lock("queue"):
        printer.write("queue", {"status": "done"})
        printer.unlock("queue")
"""

from .config import ResourceClientConfig
from .exceptions import (
    ErrorKind,
    ResourceError,
    TransportError,
    classify_status,
)
from .factory import ResourceFactory, create_transport
from .fake import FakeTransport, RecordedCall
from .http import HTTPTransport
from .outcomes import Data, Failure, Outcome, Pending, Success
from .polling import acquire_lock, locked
from .resource import Resource
from .transport import ResourceTransport, TransportResponse

__all__ = [
    # Main API
    "ResourceFactory",
    "Resource",
    "ResourceClientConfig",
    # Outcomes
    "Data",
    "Failure",
    "Outcome",
    "Pending",
    "Success",
    # Lock polling
    "acquire_lock",
    "locked",
    # Transport protocol and implementations
    "ResourceTransport",
    "TransportResponse",
    "create_transport",
    "HTTPTransport",
    "FakeTransport",
    "RecordedCall",
    # Errors
    "ErrorKind",
    "ResourceError",
    "TransportError",
    "classify_status",
]
