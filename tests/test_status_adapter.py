"""Tests for the status adapter."""

from humanity_sdk.adapters.status import StatusAdapter
from humanity_sdk.presets.registry import PresetRegistry


def make_adapter() -> StatusAdapter:
    return StatusAdapter(PresetRegistry())


class TestQueries:
    """Tests for query normalization."""

    def test_credentials_query_drops_unset(self):
        """Test unset parameters are removed."""
        query = make_adapter().normalize_credentials_query({"updated_since": None, "limit": 10})

        assert query == {"limit": 10}

    def test_authorizations_query_defaults_status(self):
        """Test a missing status defaults to revoked."""
        assert make_adapter().normalize_authorizations_query({}) == {"status": "revoked"}

    def test_authorizations_query_keeps_status(self):
        """Test an explicit status is preserved."""
        query = make_adapter().normalize_authorizations_query({"status": "active", "limit": None})

        assert query == {"status": "active"}


class TestResponses:
    """Tests for feed response mapping."""

    def test_credentials_response(self):
        """Test credential items are resolved through the registry."""
        response = {
            "items": [
                {
                    "preset": "is_accredited_investor",
                    "value": True,
                    "status": "valid",
                    "user_id": "usr_1",
                    "expires_at": "2030-01-01T00:00:00Z",
                    "updated_at": "2024-06-01T00:00:00Z",
                }
            ],
            "last_modified": "2024-06-01T00:00:00Z",
            "has_more": True,
        }

        updates = make_adapter().from_credentials_response(response)

        record = updates.credentials[0]
        assert record.preset == "isAccreditedInvestor"
        assert record.preset_name == "is_accredited_investor"
        assert record.scope == "hp:presets.is_accredited_investor"
        assert record.user_id == "usr_1"
        assert updates.last_modified == "2024-06-01T00:00:00Z"
        assert updates.has_more is True
        assert updates.raw is response

    def test_authorizations_response(self):
        """Test authorization items are mapped."""
        response = {
            "items": [
                {
                    "authorization_id": "auth_1",
                    "organization_id": "org_1",
                    "app_scoped_user_id": "usr_1",
                    "status": "revoked",
                    "updated_at": "2024-06-01T00:00:00Z",
                }
            ]
        }

        updates = make_adapter().from_authorizations_response(response)

        assert updates.authorizations[0].authorization_id == "auth_1"
        assert updates.authorizations[0].status == "revoked"
        assert updates.has_more is False
        assert updates.last_modified is None

    def test_empty_feed(self):
        """Test an empty feed payload."""
        updates = make_adapter().from_credentials_response({})

        assert updates.credentials == []
        assert updates.has_more is False

    def test_credential_without_preset_name(self):
        """Test a credential item with no preset keeps blank identifiers."""
        registry = PresetRegistry()
        response = {"items": [{"value": True, "status": "valid", "user_id": "usr_1"}]}

        updates = StatusAdapter(registry).from_credentials_response(response)

        record = updates.credentials[0]
        assert (record.preset, record.preset_name, record.scope) == ("", "", "")
        assert record.user_id == "usr_1"
        assert len(registry.list()) == 10
