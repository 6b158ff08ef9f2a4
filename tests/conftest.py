"""Pytest configuration and fixtures."""

import json

import pytest

from small_resource_client.client.config import ResourceClientConfig
from small_resource_client.client.factory import ResourceFactory
from small_resource_client.client.fake import FakeTransport
from small_resource_client.client.transport import TransportResponse


@pytest.fixture
def config():
    """Create a test config."""
    return ResourceClientConfig(
        server_uri="http://localhost:9501",
        api_key="test-key",
        timeout=5.0,
    )


@pytest.fixture
def fake_transport():
    """Create an empty in-memory transport."""
    return FakeTransport()


@pytest.fixture
def factory(config, fake_transport):
    """Create a factory wired to the fake transport."""
    return ResourceFactory(config, transport=fake_transport)


@pytest.fixture
def resource(factory):
    """Create a handle on the 'printer' resource with no ticket."""
    return factory.get_resource("printer")


@pytest.fixture
def make_response():
    """Build canned responses.

    ``data`` is wrapped in the server's read envelope: {"data": "<json>"}.
    """

    def _make(status_code: int, body: str = "", ticket: str | None = None, data=None):
        if data is not None:
            body = json.dumps({"data": json.dumps(data)})
        headers = {"X-Ticket": ticket} if ticket is not None else {}
        return TransportResponse(status_code, body, headers)

    return _make
