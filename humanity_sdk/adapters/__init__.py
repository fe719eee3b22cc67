"""Adapters between Humanity API payloads and SDK result types."""

from humanity_sdk.adapters.presets import (
    PresetBatchResult,
    PresetCheckResult,
    PresetErrorResult,
    PresetsAdapter,
)
from humanity_sdk.adapters.scopes import ScopesAdapter
from humanity_sdk.adapters.status import (
    AuthorizationRecord,
    AuthorizationUpdates,
    CredentialRecord,
    CredentialUpdates,
    StatusAdapter,
)

__all__ = [
    "AuthorizationRecord",
    "AuthorizationUpdates",
    "CredentialRecord",
    "CredentialUpdates",
    "PresetBatchResult",
    "PresetCheckResult",
    "PresetErrorResult",
    "PresetsAdapter",
    "ScopesAdapter",
    "StatusAdapter",
]
