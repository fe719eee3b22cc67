"""Translation between developer preset keys and OAuth scopes."""

from __future__ import annotations

from collections.abc import Iterable

from humanity_sdk.core.casing import camel_to_snake, snake_to_camel
from humanity_sdk.presets.discovery import DiscoveryConfiguration
from humanity_sdk.presets.registry import PresetRegistry


class ScopesAdapter:
    """Maps developer keys to scopes and granted scopes back to keys."""

    def __init__(self, registry: PresetRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> PresetRegistry:
        """Get the backing preset registry."""
        return self._registry

    def ingest_configuration(self, configuration: DiscoveryConfiguration) -> None:
        """Feed a discovery document into the registry."""
        self._registry.sync_from_configuration(configuration)

    def to_authorization_scopes(self, keys: Iterable[str]) -> list[str]:
        """Resolve developer keys to OAuth scope strings.

        Keys are trimmed, empty keys dropped and duplicates collapsed before
        resolution. Two keys resolving to the same scope yield it once.
        """
        unique_keys = dict.fromkeys(key.strip() for key in keys if key and key.strip())
        scopes = (self._registry.resolve_by_developer_key(key).scope for key in unique_keys)
        return list(dict.fromkeys(scopes))

    def to_wire_name(self, key: str) -> str:
        """Resolve a developer key to the preset's wire name."""
        return self._registry.resolve_by_developer_key(key).wire_name

    def to_developer_key(self, wire_name: str) -> str:
        """Resolve a wire name to the preset's developer key."""
        return self._registry.resolve_by_wire_name(wire_name).developer_key

    def from_granted_scopes(self, scopes: str | Iterable[str] | None) -> list[str]:
        """Map granted scopes to developer-facing identifiers.

        Produces exactly one identifier per non-empty input scope, in order,
        without de-duplication. Scopes unknown to the registry and outside
        the preset namespace still yield an identifier: snake_case tokens are
        camel-cased, anything else passes through unchanged.

        Args:
            scopes: Space-delimited string or sequence of scope strings.

        Returns:
            Developer identifiers, one per granted scope.
        """
        if not scopes:
            return []
        scope_list = scopes.split(" ") if isinstance(scopes, str) else list(scopes)

        keys: list[str] = []
        for raw_scope in scope_list:
            scope = raw_scope.strip()
            if not scope:
                continue
            descriptor = self._registry.resolve_by_scope(scope)
            if descriptor is not None:
                keys.append(descriptor.developer_key)
            elif camel_to_snake(scope) == scope:
                keys.append(snake_to_camel(scope))
            else:
                keys.append(scope)
        return keys
