"""Preset catalog, discovery document model and preset registry."""

from humanity_sdk.presets.catalog import (
    PRESET_SCOPE_MAP,
    PRESET_SCOPE_PREFIX,
    PresetErrorCode,
    PresetScope,
)
from humanity_sdk.presets.discovery import (
    ConfigurationPreset,
    DiscoveryConfiguration,
    ScopeDescriptor,
)
from humanity_sdk.presets.registry import (
    PresetDescriptor,
    PresetRegistry,
    default_descriptors,
)

__all__ = [
    # Catalog
    "PRESET_SCOPE_MAP",
    "PRESET_SCOPE_PREFIX",
    "PresetErrorCode",
    "PresetScope",
    # Discovery
    "ConfigurationPreset",
    "DiscoveryConfiguration",
    "ScopeDescriptor",
    # Registry
    "PresetDescriptor",
    "PresetRegistry",
    "default_descriptors",
]
