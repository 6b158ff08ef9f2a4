"""Small Resource Client - Client library and CLI for the Small resource server."""

from small_resource_client.client import Resource, ResourceFactory
from small_resource_client.client.config import ResourceClientConfig
from small_resource_client.client.exceptions import (
    ErrorKind,
    ResourceError,
    TransportError,
)
from small_resource_client.client.outcomes import Data, Failure, Pending, Success

try:
    from importlib.metadata import version
    __version__ = version("small-resource-client")
except Exception:
    __version__ = "0.1.0"  # Fallback for development

__all__ = [
    "Data",
    "ErrorKind",
    "Failure",
    "Pending",
    "Resource",
    "ResourceClientConfig",
    "ResourceError",
    "ResourceFactory",
    "Success",
    "TransportError",
    "__version__",
]
