"""Preset registry.

Keeps every known preset indexed three ways (developer key, wire name and
OAuth scope). The registry is seeded from the static catalog, upserted from
the live discovery document, and extended on demand: looking up an unknown
identifier synthesizes a placeholder descriptor and stores it, so presets the
SDK was not built with still round-trip through the public API.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from humanity_sdk.core.casing import camel_to_snake, snake_to_camel
from humanity_sdk.core.errors import HumanityValidationError
from humanity_sdk.presets.catalog import PRESET_SCOPE_MAP, PRESET_SCOPE_PREFIX, SCOPE_NAMESPACE_PREFIX
from humanity_sdk.presets.discovery import ConfigurationPreset, DiscoveryConfiguration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PresetDescriptor:
    """One preset known to the registry.

    ``developer_key`` and ``wire_name`` are case transforms of each other
    unless set explicitly. Either may be left empty on input to
    :meth:`PresetRegistry.register`, which derives it from the other.
    """

    developer_key: str = ""
    wire_name: str = ""
    scope: str = ""
    type: str | None = None
    consent_text: str | None = None
    description: str | None = None
    implied_scopes: tuple[str, ...] = field(default_factory=tuple)


UNNAMED_PRESET = PresetDescriptor()


def default_descriptors() -> list[PresetDescriptor]:
    """Descriptors for the built-in preset catalog."""
    return [
        PresetDescriptor(developer_key=snake_to_camel(name), wire_name=name, scope=scope)
        for name, scope in PRESET_SCOPE_MAP.items()
    ]


def _strip_preset_prefix(identifier: str) -> str:
    if identifier.startswith(PRESET_SCOPE_PREFIX):
        return identifier[len(PRESET_SCOPE_PREFIX):]
    return identifier


class PresetRegistry:
    """Multi-index registry of preset descriptors.

    A registry belongs to a single client; it is never shared between
    clients.
    """

    def __init__(self, initial: list[PresetDescriptor] | None = None) -> None:
        """Initialize the registry.

        Args:
            initial: Seed descriptors. Defaults to the built-in catalog.
        """
        self._by_developer_key: dict[str, PresetDescriptor] = {}
        self._by_wire_name: dict[str, PresetDescriptor] = {}
        self._by_scope: dict[str, PresetDescriptor] = {}

        for descriptor in default_descriptors() if initial is None else initial:
            self.register(descriptor)

    def register(self, descriptor: PresetDescriptor) -> PresetDescriptor:
        """Insert or overwrite a descriptor in all three indexes.

        Args:
            descriptor: Descriptor to store. Empty ``developer_key`` or
                ``wire_name`` is derived from the other.

        Returns:
            The normalized descriptor as stored.

        Raises:
            HumanityValidationError: If both identifiers are empty.
        """
        if not descriptor.developer_key and not descriptor.wire_name:
            raise HumanityValidationError("A preset descriptor needs a developer key or a wire name")

        normalized = replace(
            descriptor,
            developer_key=descriptor.developer_key or snake_to_camel(descriptor.wire_name),
            wire_name=descriptor.wire_name or camel_to_snake(descriptor.developer_key),
            implied_scopes=tuple(descriptor.implied_scopes or ()),
        )
        self._by_developer_key[normalized.developer_key] = normalized
        self._by_wire_name[normalized.wire_name] = normalized
        self._by_scope[normalized.scope] = normalized
        return normalized

    def sync_from_configuration(self, configuration: DiscoveryConfiguration) -> None:
        """Upsert one descriptor per preset advertised by discovery."""
        for preset in configuration.presets_available:
            self.upsert_from_config_preset(
                preset,
                implied_scopes=configuration.implied_scopes_for(preset.scope),
            )
        logger.info(f"Synced {len(configuration.presets_available)} presets from discovery")

    def upsert_from_config_preset(
        self,
        preset: ConfigurationPreset,
        implied_scopes: list[str] | None = None,
    ) -> PresetDescriptor:
        """Upsert a single discovery preset entry."""
        return self.register(
            PresetDescriptor(
                developer_key=snake_to_camel(preset.name),
                wire_name=preset.name,
                scope=preset.scope,
                type=preset.type,
                consent_text=preset.consent_text,
                description=preset.description,
                implied_scopes=tuple(implied_scopes or ()),
            )
        )

    def resolve_by_developer_key(self, key: str) -> PresetDescriptor:
        """Resolve a developer key, synthesizing a descriptor if unknown."""
        return (
            self._by_developer_key.get(key)
            or self._by_wire_name.get(camel_to_snake(key))
            or self._create_placeholder(key)
        )

    def resolve_by_wire_name(self, name: str) -> PresetDescriptor:
        """Resolve a wire name, synthesizing a descriptor if unknown."""
        return (
            self._by_wire_name.get(name)
            or self._by_developer_key.get(snake_to_camel(name))
            or self._create_placeholder(name)
        )

    def resolve_reported(self, name: str | None) -> PresetDescriptor:
        """Resolve a preset name taken from an API response.

        Entries sent without a name map to a blank descriptor, which is
        not stored.
        """
        if not name:
            return UNNAMED_PRESET
        return self.resolve_by_wire_name(name)

    def resolve_by_scope(self, scope: str) -> PresetDescriptor | None:
        """Resolve an OAuth scope.

        Scopes outside the preset namespace that are not registered return
        None. Unknown preset scopes are synthesized like unknown names.
        """
        existing = self._by_scope.get(scope)
        if existing is not None:
            return existing
        if not scope.startswith(PRESET_SCOPE_PREFIX):
            return None
        wire_name = _strip_preset_prefix(scope)
        if not wire_name:
            return None
        return self._by_wire_name.get(wire_name) or self._create_placeholder(wire_name)

    def list(self) -> list[PresetDescriptor]:
        """List registered descriptors without duplicates."""
        seen: set[int] = set()
        result: list[PresetDescriptor] = []
        for descriptor in self._by_developer_key.values():
            if id(descriptor) not in seen:
                seen.add(id(descriptor))
                result.append(descriptor)
        return result

    def _create_placeholder(self, identifier: str) -> PresetDescriptor:
        derived = _strip_preset_prefix(identifier)
        wire_name = derived if "_" in derived else camel_to_snake(derived)
        scope = PRESET_SCOPE_MAP.get(wire_name) or (
            identifier if identifier.startswith(SCOPE_NAMESPACE_PREFIX) else f"{PRESET_SCOPE_PREFIX}{wire_name}"
        )
        logger.warning(
            f"Unknown preset identifier {identifier!r}; using synthesized scope {scope!r}"
        )
        return self.register(
            PresetDescriptor(
                developer_key=snake_to_camel(wire_name),
                wire_name=wire_name,
                scope=scope,
            )
        )
