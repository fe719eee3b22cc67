"""Shaping of preset verification responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from humanity_sdk.core.errors import PresetVerificationError
from humanity_sdk.core.models import RateLimitInfo
from humanity_sdk.presets.registry import PresetRegistry

NO_RESULTS_MESSAGE = "Preset verification did not return any results"


@dataclass(frozen=True)
class PresetCheckResult:
    """Verification outcome for one preset."""

    preset: str
    preset_name: str
    scope: str
    value: bool
    status: str
    expires_at: str
    verified_at: str | None = None
    evidence: dict[str, Any] | None = None
    rate_limit: RateLimitInfo | None = None


@dataclass(frozen=True)
class PresetErrorResult:
    """Per-preset error reported inside a batch response."""

    preset: str
    preset_name: str
    scope: str
    error: dict[str, Any]

    @property
    def error_code(self) -> str | None:
        """Get the preset error code (e.g. ``E4004``)."""
        return self.error.get("error_code")

    @property
    def message(self) -> str:
        """Get the best available human-readable message."""
        return str(self.error.get("error_description") or self.error.get("error") or "")


@dataclass(frozen=True)
class PresetBatchResult:
    """Normalized batch verification response."""

    results: list[PresetCheckResult]
    errors: list[PresetErrorResult]
    raw: dict[str, Any] = field(default_factory=dict)
    rate_limit: RateLimitInfo | None = None


class PresetsAdapter:
    """Maps verification payloads onto registry-resolved result records."""

    def __init__(self, registry: PresetRegistry) -> None:
        self._registry = registry

    def from_batch_response(
        self,
        response: dict[str, Any],
        rate_limit: RateLimitInfo | None = None,
    ) -> PresetBatchResult:
        """Build a batch result from a ``{results, errors}`` payload."""
        return PresetBatchResult(
            results=[self._map_result(r, rate_limit) for r in response.get("results") or []],
            errors=[self._map_error(e) for e in response.get("errors") or []],
            raw=response,
            rate_limit=rate_limit,
        )

    def from_single_response(
        self,
        response: dict[str, Any],
        rate_limit: RateLimitInfo | None = None,
    ) -> PresetCheckResult:
        """Return the first result of a batch-shaped payload.

        Raises:
            PresetVerificationError: If the payload holds no results.
        """
        batch = self.from_batch_response(response, rate_limit)
        if not batch.results:
            message = "; ".join(e.message for e in batch.errors) if batch.errors else NO_RESULTS_MESSAGE
            raise PresetVerificationError(message, errors=batch.errors)
        return batch.results[0]

    def _map_result(self, result: dict[str, Any], rate_limit: RateLimitInfo | None) -> PresetCheckResult:
        descriptor = self._registry.resolve_reported(result.get("preset"))
        return PresetCheckResult(
            preset=descriptor.developer_key,
            preset_name=descriptor.wire_name,
            scope=descriptor.scope,
            value=result.get("value", False),
            status=result.get("status", ""),
            expires_at=result.get("expires_at", ""),
            verified_at=result.get("verified_at"),
            evidence=result.get("evidence"),
            rate_limit=rate_limit,
        )

    def _map_error(self, error: dict[str, Any]) -> PresetErrorResult:
        descriptor = self._registry.resolve_reported(error.get("preset"))
        return PresetErrorResult(
            preset=descriptor.developer_key,
            preset_name=descriptor.wire_name,
            scope=descriptor.scope,
            error=error.get("error") or {},
        )
