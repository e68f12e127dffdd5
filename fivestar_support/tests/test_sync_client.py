"""Tests for the blocking FiveStar Support client."""

import httpx
import pytest

from fivestar_support.client import FiveStarSyncClient
from fivestar_support.config import Settings
from fivestar_support.errors import FiveStarAPIError
from fivestar_support.models import RegisterCustomerOptions, SubmitResponseOptions


def test_list_response_types(server, sync_client):
    """Test listing response types."""
    server.on(
        "GET",
        "/api/responses/types",
        json_body={
            "types": [{"id": "1", "name": "Bug", "slug": "bug", "color": "red", "icon": "bug"}]
        },
    )

    types = sync_client.list_response_types()

    assert len(types) == 1
    assert types[0].slug == "bug"


def test_generate_customer_id(server, sync_client):
    """Test customer ID generation."""
    server.on(
        "POST",
        "/api/customers/generate",
        json_body={"customerId": "cus_1", "expiresAt": "2026-01-01", "deviceId": "d"},
    )

    result = sync_client.generate_customer_id()

    assert result.customer_id == "cus_1"
    assert server.last_json() == {"clientId": "abc123"}


def test_register_customer(server, sync_client):
    """Test customer registration with null customer."""
    server.on("POST", "/api/customers", json_body={"success": True, "customer": None})

    result = sync_client.register_customer("cus_1", RegisterCustomerOptions(name="Ada"))

    assert result.success is True
    assert result.customer is None
    assert server.last_json()["name"] == "Ada"


def test_verify_customer_failure_is_swallowed(server, sync_client):
    """Test verification converts API errors into an invalid result."""
    server.on("POST", "/api/customers/verify", status=401, json_body={"error": "Unauthorized"})

    result = sync_client.verify_customer("cus_1")

    assert result.valid is False
    assert result.message == "Verification failed"


def test_submit_response_error(server, sync_client):
    """Test submit surfaces server error text and status."""
    server.on("POST", "/api/responses", status=422, json_body={"error": "Invalid type"})
    options = SubmitResponseOptions(customer_id="c", title="t", description="d", type_id="x")

    with pytest.raises(FiveStarAPIError) as exc_info:
        sync_client.submit_response(options)

    assert exc_info.value.message == "Invalid type"
    assert exc_info.value.status_code == 422


def test_transport_error_propagates():
    """Test transport errors outside verification are not converted."""

    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with FiveStarSyncClient("abc123", transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(httpx.ConnectError):
            client.generate_customer_id()

        assert client.verify_customer("cus_1").valid is False


def test_verify_customer_corrupt_encoding():
    """Test body decoding errors become an invalid result."""

    def handler(request):
        return httpx.Response(
            200, headers={"content-encoding": "gzip"}, stream=httpx.ByteStream(b"notgzip")
        )

    with FiveStarSyncClient("abc123", transport=httpx.MockTransport(handler)) as client:
        result = client.verify_customer("cus_1")

    assert result.valid is False
    assert result.message == "Verification failed"


def test_from_settings_returns_subclass():
    """Test from_settings builds the class it is called on."""
    with FiveStarSyncClient.from_settings(Settings(client_id="abc123")) as client:
        assert isinstance(client, FiveStarSyncClient)


def test_context_manager_closes():
    """Test leaving the context releases the HTTP client."""
    with FiveStarSyncClient("abc123") as client:
        pass

    assert client._http.is_closed
