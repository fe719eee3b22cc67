"""Tests for the presets adapter."""

import pytest

from humanity_sdk.adapters.presets import NO_RESULTS_MESSAGE, PresetsAdapter
from humanity_sdk.core.errors import PresetVerificationError
from humanity_sdk.core.models import RateLimitInfo
from humanity_sdk.presets.registry import PresetRegistry

RATE_LIMIT = RateLimitInfo(limit=100, remaining=42, reset=1700000000)

BATCH_RESPONSE = {
    "results": [
        {
            "preset": "is_human",
            "value": True,
            "status": "valid",
            "expires_at": "2030-01-01T00:00:00Z",
            "verified_at": "2024-01-01T00:00:00Z",
            "evidence": {"source": "palm"},
        }
    ],
    "errors": [
        {
            "preset": "is_21_plus",
            "error": {"error_code": "E4004", "error_description": "Credential not found"},
        }
    ],
}


class TestFromBatchResponse:
    """Tests for PresetsAdapter.from_batch_response."""

    def test_maps_results_and_errors(self):
        """Test results and errors are resolved through the registry."""
        batch = PresetsAdapter(PresetRegistry()).from_batch_response(BATCH_RESPONSE, RATE_LIMIT)

        result = batch.results[0]
        assert result.preset == "isHuman"
        assert result.preset_name == "is_human"
        assert result.scope == "hp:presets.is_human"
        assert result.value is True
        assert result.evidence == {"source": "palm"}
        assert result.rate_limit == RATE_LIMIT

        error = batch.errors[0]
        assert error.preset == "is21Plus"
        assert error.error_code == "E4004"
        assert error.message == "Credential not found"

        assert batch.raw is BATCH_RESPONSE
        assert batch.rate_limit == RATE_LIMIT

    def test_empty_response(self):
        """Test a response without results or errors."""
        batch = PresetsAdapter(PresetRegistry()).from_batch_response({})

        assert batch.results == []
        assert batch.errors == []
        assert batch.rate_limit is None

    def test_entries_without_preset_name(self):
        """Test unnamed results and errors pass through without touching the registry."""
        registry = PresetRegistry()
        response = {
            "results": [{"value": False, "status": "unknown"}],
            "errors": [{"preset": "", "error": {"error": "bad_request"}}],
        }

        batch = PresetsAdapter(registry).from_batch_response(response)

        assert batch.results[0].preset == ""
        assert batch.results[0].scope == ""
        assert batch.results[0].status == "unknown"
        assert batch.errors[0].preset_name == ""
        assert batch.errors[0].message == "bad_request"
        assert len(registry.list()) == 10


class TestFromSingleResponse:
    """Tests for PresetsAdapter.from_single_response."""

    def test_returns_first_result(self):
        """Test the first result is returned."""
        result = PresetsAdapter(PresetRegistry()).from_single_response(BATCH_RESPONSE)

        assert result.preset == "isHuman"

    def test_errors_become_message(self):
        """Test error messages are joined into the raised error."""
        response = {
            "results": [],
            "errors": [
                {"preset": "is_human", "error": {"error": "not_found"}},
                {"preset": "is_21_plus", "error": {"error_description": "Expired"}},
            ],
        }

        with pytest.raises(PresetVerificationError, match="not_found; Expired") as exc_info:
            PresetsAdapter(PresetRegistry()).from_single_response(response)

        assert len(exc_info.value.errors) == 2

    def test_no_results_no_errors(self):
        """Test the generic message when nothing was returned."""
        with pytest.raises(PresetVerificationError, match=NO_RESULTS_MESSAGE):
            PresetsAdapter(PresetRegistry()).from_single_response({"results": [], "errors": []})
