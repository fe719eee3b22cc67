"""Shaping of the credential and authorization polling feeds."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from humanity_sdk.core.models import RateLimitInfo
from humanity_sdk.presets.registry import PresetRegistry

DEFAULT_AUTHORIZATION_STATUS = "revoked"


@dataclass(frozen=True)
class CredentialRecord:
    """One credential change for a user."""

    preset: str
    preset_name: str
    scope: str
    value: bool
    status: str
    user_id: str
    expires_at: str
    updated_at: str


@dataclass(frozen=True)
class CredentialUpdates:
    """Page of credential changes."""

    credentials: list[CredentialRecord]
    last_modified: str | None = None
    has_more: bool = False
    raw: dict[str, Any] = field(default_factory=dict)
    rate_limit: RateLimitInfo | None = None


@dataclass(frozen=True)
class AuthorizationRecord:
    """One authorization status change."""

    authorization_id: str
    organization_id: str
    app_scoped_user_id: str
    status: str
    updated_at: str


@dataclass(frozen=True)
class AuthorizationUpdates:
    """Page of authorization changes."""

    authorizations: list[AuthorizationRecord]
    last_modified: str | None = None
    has_more: bool = False
    raw: dict[str, Any] = field(default_factory=dict)
    rate_limit: RateLimitInfo | None = None


class StatusAdapter:
    """Normalizes polling queries and responses."""

    def __init__(self, registry: PresetRegistry) -> None:
        self._registry = registry

    def from_credentials_response(
        self,
        response: dict[str, Any],
        rate_limit: RateLimitInfo | None = None,
    ) -> CredentialUpdates:
        """Build credential updates from a ``{items, last_modified, has_more}`` payload."""
        credentials = []
        for item in response.get("items") or []:
            descriptor = self._registry.resolve_reported(item.get("preset"))
            credentials.append(
                CredentialRecord(
                    preset=descriptor.developer_key,
                    preset_name=descriptor.wire_name,
                    scope=descriptor.scope,
                    value=item.get("value", False),
                    status=item.get("status", ""),
                    user_id=item.get("user_id", ""),
                    expires_at=item.get("expires_at", ""),
                    updated_at=item.get("updated_at", ""),
                )
            )
        return CredentialUpdates(
            credentials=credentials,
            last_modified=response.get("last_modified"),
            has_more=bool(response.get("has_more") or False),
            raw=response,
            rate_limit=rate_limit,
        )

    def from_authorizations_response(
        self,
        response: dict[str, Any],
        rate_limit: RateLimitInfo | None = None,
    ) -> AuthorizationUpdates:
        """Build authorization updates from a ``{items, last_modified, has_more}`` payload."""
        authorizations = [
            AuthorizationRecord(
                authorization_id=item.get("authorization_id", ""),
                organization_id=item.get("organization_id", ""),
                app_scoped_user_id=item.get("app_scoped_user_id", ""),
                status=item.get("status", ""),
                updated_at=item.get("updated_at", ""),
            )
            for item in response.get("items") or []
        ]
        return AuthorizationUpdates(
            authorizations=authorizations,
            last_modified=response.get("last_modified"),
            has_more=bool(response.get("has_more") or False),
            raw=response,
            rate_limit=rate_limit,
        )

    def normalize_credentials_query(self, query: dict[str, Any]) -> dict[str, Any]:
        """Drop unset parameters from a credentials query."""
        return {k: v for k, v in query.items() if v is not None}

    def normalize_authorizations_query(self, query: dict[str, Any]) -> dict[str, Any]:
        """Drop unset parameters and default ``status`` to ``revoked``."""
        normalized = {k: v for k, v in query.items() if v is not None}
        if not normalized.get("status"):
            normalized["status"] = DEFAULT_AUTHORIZATION_STATUS
        return normalized
