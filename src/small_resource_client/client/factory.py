"""Factory for resource handles.

This module creates the configured transport and hands out Resource
handles bound to it. Creating a resource is the only factory operation that
talks to the server.
"""

import logging

from .config import ResourceClientConfig
from .exceptions import ErrorKind, ResourceError, TransportError, classify_status
from .resource import API_KEY_HEADER, Resource, read_body
from .transport import ResourceTransport

logger = logging.getLogger("small-resource-client")


def create_transport(config: ResourceClientConfig | None = None) -> ResourceTransport:
    """Create the default transport for a configuration.

    Args:
        config: Client configuration. If None, loads from environment.

    Returns:
        An HTTPTransport bound to ``config.server_uri``.
    """
    from .http import HTTPTransport

    return HTTPTransport(config or ResourceClientConfig())


class ResourceFactory:
    """Create resources on the server and hand out local handles.

    Usage:
        # Auto-configure from environment
        with ResourceFactory() as factory:
            printer = factory.create_resource("printer", 300)

        # Inject a transport (for testing)
        factory = ResourceFactory(config, transport=FakeTransport())
    """

    def __init__(
        self,
        config: ResourceClientConfig | None = None,
        transport: ResourceTransport | None = None,
    ):
        """Initialize the factory.

        Args:
            config: Configuration (loads from environment if None)
            transport: Optional pre-configured transport. If provided, config
                is still used for the API key and ticket header.

        Raises:
            ValueError: If the configuration has no API key.
        """
        self.config = config or ResourceClientConfig()
        self.config.validate_config()
        self._transport = transport or create_transport(self.config)

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False

    @property
    def transport(self) -> ResourceTransport:
        return self._transport

    def close(self) -> None:
        """Close the transport and release resources."""
        self._transport.close()

    def create_resource(self, name: str, timeout: int) -> Resource:
        """Create a resource on the server and return a handle on it.

        Args:
            name: Resource name
            timeout: Lock timeout the server applies to this resource, in seconds

        Returns:
            A handle bound to ``name`` with no ticket

        Raises:
            ResourceError: ALREADY_EXISTS on 409, UNAUTHORIZED on 401,
                SERVER_UNAVAILABLE if the server cannot be reached, UNKNOWN
                for any other non-success status.
        """
        try:
            response = self._transport.request(
                "POST",
                "/resource",
                headers={API_KEY_HEADER: self.config.api_key},
                json={"name": name, "timeout": timeout},
            )
        except TransportError as e:
            raise ResourceError(
                ErrorKind.SERVER_UNAVAILABLE,
                f"Failed to contact resource server: {e}",
            ) from e

        kind = classify_status("create", response.status_code)
        if kind is ErrorKind.ALREADY_EXISTS:
            raise ResourceError(kind, f"Resource already exists: {name}", response.status_code)
        if kind is ErrorKind.UNAUTHORIZED:
            raise ResourceError(kind, "Unauthorized: check the API key", response.status_code)
        if kind is not None:
            raise ResourceError(
                kind,
                f"Resource creation failed: {read_body(response)}",
                response.status_code,
                read_body(response),
            )

        logger.info(f"Created resource {name} (timeout {timeout}s)")
        return self.get_resource(name)

    def get_resource(self, name: str, ticket: str | None = None) -> Resource:
        """Return a handle on an existing resource without contacting the server.

        Args:
            name: Resource name
            ticket: Ticket issued earlier by the server for this resource, to
                resume a workflow (e.g. one printed by the CLI)
        """
        return Resource(
            name,
            self._transport,
            api_key=self.config.api_key,
            ticket_header=self.config.ticket_header,
            ticket=ticket,
        )
