"""Tests for ResourceFactory."""

from unittest.mock import patch

import pytest

from small_resource_client.client.config import ResourceClientConfig
from small_resource_client.client.exceptions import ErrorKind, ResourceError, TransportError
from small_resource_client.client.factory import ResourceFactory, create_transport
from small_resource_client.client.fake import FakeTransport
from small_resource_client.client.http import HTTPTransport
from small_resource_client.client.resource import Resource


class TestCreateResource:
    """Tests for ResourceFactory.create_resource."""

    def test_create_returns_handle_and_records_post(self, factory, fake_transport, make_response):
        """Test 201 returns a handle and sends exactly one POST."""
        fake_transport.add_response(make_response(201))

        resource = factory.create_resource("printer", 300)

        assert isinstance(resource, Resource)
        assert resource.name == "printer"
        assert resource.current_ticket() is None
        assert len(fake_transport.calls) == 1
        call = fake_transport.calls[0]
        assert call.method == "POST"
        assert call.path == "/resource"
        assert call.json == {"name": "printer", "timeout": 300}
        assert call.headers["x-api-key"] == "test-key"

    def test_create_accepts_200(self, factory, fake_transport, make_response):
        """Test 200 is also a successful creation."""
        fake_transport.add_response(make_response(200))

        assert factory.create_resource("printer", 10).name == "printer"

    def test_create_409_already_exists(self, factory, fake_transport, make_response):
        """Test 409 raises ALREADY_EXISTS."""
        fake_transport.add_response(make_response(409, "exists"))

        with pytest.raises(ResourceError) as exc_info:
            factory.create_resource("printer", 300)

        assert exc_info.value.kind is ErrorKind.ALREADY_EXISTS
        assert exc_info.value.status_code == 409

    def test_create_401_unauthorized(self, factory, fake_transport, make_response):
        """Test 401 raises UNAUTHORIZED."""
        fake_transport.add_response(make_response(401, "bad key"))

        with pytest.raises(ResourceError) as exc_info:
            factory.create_resource("printer", 300)

        assert exc_info.value.kind is ErrorKind.UNAUTHORIZED

    def test_create_other_status_unknown(self, factory, fake_transport, make_response):
        """Test other statuses raise UNKNOWN with status and body."""
        fake_transport.add_response(make_response(500, "internal error"))

        with pytest.raises(ResourceError) as exc_info:
            factory.create_resource("printer", 300)

        error = exc_info.value
        assert error.kind is ErrorKind.UNKNOWN
        assert error.status_code == 500
        assert error.body == "internal error"
        assert str(error).startswith("HTTP 500:")

    def test_create_transport_failure(self, factory, fake_transport):
        """Test connection errors raise SERVER_UNAVAILABLE, chained."""
        cause = TransportError("connection refused")
        fake_transport.add_error(cause)

        with pytest.raises(ResourceError) as exc_info:
            factory.create_resource("printer", 300)

        assert exc_info.value.kind is ErrorKind.SERVER_UNAVAILABLE
        assert exc_info.value.status_code is None
        assert exc_info.value.__cause__ is cause
        assert len(fake_transport.calls) == 1


class TestGetResource:
    """Tests for ResourceFactory.get_resource."""

    def test_get_resource_makes_no_call(self, factory, fake_transport):
        """Test get_resource never touches the transport."""
        resource = factory.get_resource("printer")

        assert resource.name == "printer"
        assert resource.current_ticket() is None
        assert fake_transport.calls == []

    def test_get_resource_with_ticket(self, factory, fake_transport, make_response):
        """Test a resumed ticket is replayed on the first request."""
        fake_transport.add_response(make_response(200))
        resource = factory.get_resource("printer", ticket="resumed")

        resource.unlock("queue")

        assert fake_transport.calls[0].headers["X-Ticket"] == "resumed"

    def test_each_call_returns_new_handle(self, factory):
        """Test handles are never shared."""
        assert factory.get_resource("printer") is not factory.get_resource("printer")


class TestFactoryLifecycle:
    """Tests for construction and cleanup."""

    def test_requires_api_key(self):
        """Test a missing API key is rejected up front."""
        with pytest.raises(ValueError, match="SMALL_RESOURCE_API_KEY"):
            ResourceFactory(ResourceClientConfig(api_key=None), transport=FakeTransport())

    def test_default_transport_is_http(self, config):
        """Test the factory builds an HTTPTransport when none is given."""
        factory = ResourceFactory(config)

        assert isinstance(factory.transport, HTTPTransport)
        assert factory.transport.config is config

    def test_create_transport_uses_config(self, config):
        """Test create_transport binds the config."""
        transport = create_transport(config)

        assert isinstance(transport, HTTPTransport)
        assert transport.config.server_uri == "http://localhost:9501"

    def test_context_manager_closes_transport(self, config, fake_transport):
        """Test leaving the with-block closes the transport."""
        with ResourceFactory(config, transport=fake_transport):
            pass

        assert fake_transport.closed is True

    def test_loads_config_from_environment(self, monkeypatch):
        """Test environment variables configure the factory."""
        monkeypatch.setenv("SMALL_RESOURCE_API_KEY", "env-key")
        monkeypatch.setenv("SMALL_RESOURCE_TICKET_HEADER", "ticket")

        with patch("small_resource_client.client.factory.create_transport") as mock_create:
            factory = ResourceFactory()

        assert factory.config.api_key == "env-key"
        assert factory.config.ticket_header == "ticket"
        mock_create.assert_called_once_with(factory.config)
