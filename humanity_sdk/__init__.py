"""Python client for the Humanity identity and verification API."""

from humanity_sdk.adapters import (
    AuthorizationRecord,
    AuthorizationUpdates,
    CredentialRecord,
    CredentialUpdates,
    PresetBatchResult,
    PresetCheckResult,
    PresetErrorResult,
)
from humanity_sdk.core import (
    EnvironmentDescriptor,
    EnvironmentRegistry,
    HumanityConfigurationError,
    HumanityError,
    HumanitySDKError,
    HumanityValidationError,
    PresetVerificationError,
    RateLimitInfo,
    SdkConfig,
    load_config,
)
from humanity_sdk.core.client import HumanityClient
from humanity_sdk.core.models import (
    AuthorizationUrl,
    ClientUserTokenResult,
    HealthStatus,
    ReadinessStatus,
    RevokeResult,
    TokenResult,
    VerifyPresetOptions,
    VerifyPresetsOptions,
)
from humanity_sdk.presets import PresetDescriptor, PresetErrorCode, PresetRegistry, PresetScope

__version__ = "0.1.0"

__all__ = [
    "AuthorizationRecord",
    "AuthorizationUpdates",
    "AuthorizationUrl",
    "ClientUserTokenResult",
    "CredentialRecord",
    "CredentialUpdates",
    "EnvironmentDescriptor",
    "EnvironmentRegistry",
    "HealthStatus",
    "HumanityClient",
    "HumanityConfigurationError",
    "HumanityError",
    "HumanitySDKError",
    "HumanityValidationError",
    "PresetBatchResult",
    "PresetCheckResult",
    "PresetDescriptor",
    "PresetErrorCode",
    "PresetErrorResult",
    "PresetRegistry",
    "PresetScope",
    "PresetVerificationError",
    "RateLimitInfo",
    "ReadinessStatus",
    "RevokeResult",
    "SdkConfig",
    "TokenResult",
    "VerifyPresetOptions",
    "VerifyPresetsOptions",
    "load_config",
]
