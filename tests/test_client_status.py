"""Tests for credential and authorization polling."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from conftest import json_response
from humanity_sdk.core.errors import HumanityValidationError

CREDENTIALS_RESPONSE = {
    "items": [
        {
            "preset": "is_human",
            "value": True,
            "status": "valid",
            "user_id": "usr_1",
            "expires_at": "2030-01-01T00:00:00Z",
            "updated_at": "2024-06-01T00:00:00Z",
        }
    ],
    "last_modified": "2024-06-01T00:00:00Z",
    "has_more": False,
}

AUTHORIZATIONS_RESPONSE = {
    "items": [
        {
            "authorization_id": "auth_1",
            "organization_id": "org_1",
            "app_scoped_user_id": "usr_1",
            "status": "revoked",
            "updated_at": "2024-06-01T00:00:00Z",
        }
    ],
    "has_more": True,
}


class TestPollCredentialUpdates:
    """Tests for HumanityClient.poll_credential_updates."""

    def test_polls_credentials(self, make_client):
        """Test the request and mapped result."""
        client, transport = make_client(json_response(CREDENTIALS_RESPONSE, headers={"X-RateLimit-Limit": "10"}))

        updates = client.poll_credential_updates(
            "at_123", updated_since=datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC), limit=50
        )

        request = transport.last_request
        assert request.method == "GET"
        assert request.url.path == "/api/v1/credentials"
        assert request.headers["Authorization"] == "Bearer at_123"
        assert dict(request.url.params) == {"updated_since": "2024-01-02T03:04:05.000Z", "limit": "50"}
        assert updates.credentials[0].preset == "isHuman"
        assert updates.last_modified == "2024-06-01T00:00:00Z"
        assert updates.rate_limit.limit == 10

    def test_no_parameters(self, make_client):
        """Test an empty query is sent when nothing is set."""
        client, transport = make_client(json_response(CREDENTIALS_RESPONSE))

        client.poll_credential_updates("at_123")

        assert dict(transport.last_request.url.params) == {}

    def test_naive_datetime_is_utc(self, make_client):
        """Test a naive datetime is treated as UTC."""
        client, transport = make_client(json_response(CREDENTIALS_RESPONSE))

        client.poll_credential_updates("at_123", updated_since=datetime(2024, 1, 1, 12, 0, 0, 250000))

        assert transport.last_request.url.params["updated_since"] == "2024-01-01T12:00:00.250Z"

    def test_offset_datetime_converted(self, make_client):
        """Test an aware datetime is converted to UTC."""
        client, transport = make_client(json_response(CREDENTIALS_RESPONSE))

        client.poll_credential_updates(
            "at_123", updated_since=datetime(2024, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
        )

        assert transport.last_request.url.params["updated_since"] == "2024-01-01T10:00:00.000Z"

    def test_string_passes_through(self, make_client):
        """Test a string timestamp is sent unchanged."""
        client, transport = make_client(json_response(CREDENTIALS_RESPONSE))

        client.poll_credential_updates("at_123", updated_since="2024-01-01T00:00:00+00:00")

        assert transport.last_request.url.params["updated_since"] == "2024-01-01T00:00:00+00:00"

    @pytest.mark.parametrize("limit", [0, -1, 101, True, 2.5, "10"])
    def test_invalid_limit(self, make_client, limit):
        """Test invalid limits are rejected before any request."""
        client, transport = make_client(json_response(CREDENTIALS_RESPONSE))

        with pytest.raises(HumanityValidationError):
            client.poll_credential_updates("at_123", limit=limit)
        assert transport.requests == []

    @pytest.mark.parametrize("limit", [1, 100])
    def test_limit_bounds(self, make_client, limit):
        """Test the limit bounds are inclusive."""
        client, transport = make_client(json_response(CREDENTIALS_RESPONSE))

        client.poll_credential_updates("at_123", limit=limit)

        assert transport.last_request.url.params["limit"] == str(limit)

    def test_requires_access_token(self, make_client):
        """Test a missing access token is rejected."""
        client, _ = make_client(json_response(CREDENTIALS_RESPONSE))

        with pytest.raises(HumanityValidationError):
            client.poll_credential_updates("")


class TestPollAuthorizationUpdates:
    """Tests for HumanityClient.poll_authorization_updates."""

    def test_defaults_to_revoked(self, make_client):
        """Test the status defaults to revoked."""
        client, transport = make_client(json_response(AUTHORIZATIONS_RESPONSE))

        updates = client.poll_authorization_updates("at_123")

        request = transport.last_request
        assert request.url.path == "/api/v1/authorizations"
        assert dict(request.url.params) == {"status": "revoked"}
        assert updates.authorizations[0].authorization_id == "auth_1"
        assert updates.has_more is True

    def test_active_status(self, make_client):
        """Test an explicit active status is sent."""
        client, transport = make_client(json_response(AUTHORIZATIONS_RESPONSE))

        client.poll_authorization_updates("at_123", status="active", limit=5)

        assert dict(transport.last_request.url.params) == {"status": "active", "limit": "5"}

    def test_invalid_status(self, make_client):
        """Test an unknown status is rejected."""
        client, transport = make_client(json_response(AUTHORIZATIONS_RESPONSE))

        with pytest.raises(HumanityValidationError, match="status"):
            client.poll_authorization_updates("at_123", status="pending")
        assert transport.requests == []
