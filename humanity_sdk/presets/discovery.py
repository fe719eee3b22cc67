"""Humanity discovery document (``/.well-known/hp-configuration``)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DISCOVERY_PATH = ".well-known/hp-configuration"


@dataclass(frozen=True)
class ScopeDescriptor:
    """Entry of the discovery ``scopes_catalog``."""

    id: str
    display_name: str = ""
    description: str = ""
    category: str = ""
    implied_scopes: list[str] = field(default_factory=list)
    is_default: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScopeDescriptor:
        """Create from a catalog entry."""
        return cls(
            id=data.get("id", ""),
            display_name=data.get("display_name", ""),
            description=data.get("description", ""),
            category=data.get("category", ""),
            implied_scopes=list(data.get("implied_scopes") or []),
            is_default=bool(data.get("is_default", False)),
        )


@dataclass(frozen=True)
class ConfigurationPreset:
    """Entry of the discovery ``presets_available`` list."""

    name: str
    scope: str
    type: str | None = None
    description: str | None = None
    consent_text: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConfigurationPreset:
        """Create from a preset entry."""
        return cls(
            name=data.get("name", ""),
            scope=data.get("scope", ""),
            type=data.get("type"),
            description=data.get("description"),
            consent_text=data.get("consent_text"),
        )


@dataclass
class DiscoveryConfiguration:
    """Endpoints, scope catalog and preset catalog advertised by the API."""

    issuer: str = ""
    authorization_endpoint: str = ""
    token_endpoint: str = ""
    revoke_endpoint: str = ""
    consent_presets_endpoint: str = ""
    presets_endpoint: str = ""
    presets_batch_endpoint: str = ""
    credentials_endpoint: str = ""
    authorizations_endpoint: str = ""
    hp_configuration_endpoint: str = ""
    scopes_supported: list[str] = field(default_factory=list)
    scopes_catalog: list[ScopeDescriptor] = field(default_factory=list)
    grant_types_supported: list[str] = field(default_factory=list)
    code_challenge_methods_supported: list[str] = field(default_factory=list)
    response_types_supported: list[str] = field(default_factory=list)
    presets_available: list[ConfigurationPreset] = field(default_factory=list)
    rate_limit_default: int | None = None
    rate_limit_unit: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DiscoveryConfiguration:
        """Create from the discovery response body. Missing keys use defaults."""
        return cls(
            issuer=data.get("issuer", ""),
            authorization_endpoint=data.get("authorization_endpoint", ""),
            token_endpoint=data.get("token_endpoint", ""),
            revoke_endpoint=data.get("revoke_endpoint", ""),
            consent_presets_endpoint=data.get("consent_presets_endpoint", ""),
            presets_endpoint=data.get("presets_endpoint", ""),
            presets_batch_endpoint=data.get("presets_batch_endpoint", ""),
            credentials_endpoint=data.get("credentials_endpoint", ""),
            authorizations_endpoint=data.get("authorizations_endpoint", ""),
            hp_configuration_endpoint=data.get("hp_configuration_endpoint", ""),
            scopes_supported=list(data.get("scopes_supported") or []),
            scopes_catalog=[ScopeDescriptor.from_dict(s) for s in data.get("scopes_catalog") or []],
            grant_types_supported=list(data.get("grant_types_supported") or []),
            code_challenge_methods_supported=list(data.get("code_challenge_methods_supported") or []),
            response_types_supported=list(data.get("response_types_supported") or []),
            presets_available=[
                ConfigurationPreset.from_dict(p) for p in data.get("presets_available") or []
            ],
            rate_limit_default=data.get("rate_limit_default"),
            rate_limit_unit=data.get("rate_limit_unit"),
            raw=data,
        )

    def implied_scopes_for(self, scope: str) -> list[str]:
        """Get the implied scopes the catalog lists for a scope id."""
        for descriptor in self.scopes_catalog:
            if descriptor.id == scope:
                return list(descriptor.implied_scopes)
        return []
