"""Core transport, configuration, errors and protocol logging."""

from humanity_sdk.core.config import SdkConfig, load_config
from humanity_sdk.core.connection import Connection, HttpConnectionFactory
from humanity_sdk.core.environment import EnvironmentDescriptor, EnvironmentRegistry
from humanity_sdk.core.errors import (
    HumanityConfigurationError,
    HumanityError,
    HumanitySDKError,
    HumanityValidationError,
    PresetVerificationError,
)
from humanity_sdk.core.logging import (
    HttpExchange,
    LoggingClient,
    LogLevel,
    OperationLog,
    ProtocolLogger,
    configure_logging,
    get_protocol_logger,
    redact_sensitive,
    set_protocol_logger,
)
from humanity_sdk.core.models import RateLimitInfo

__all__ = [
    "Connection",
    "EnvironmentDescriptor",
    "EnvironmentRegistry",
    "HttpConnectionFactory",
    "HttpExchange",
    "HumanityConfigurationError",
    "HumanityError",
    "HumanitySDKError",
    "HumanityValidationError",
    "LoggingClient",
    "LogLevel",
    "OperationLog",
    "PresetVerificationError",
    "ProtocolLogger",
    "RateLimitInfo",
    "SdkConfig",
    "configure_logging",
    "get_protocol_logger",
    "load_config",
    "redact_sensitive",
    "set_protocol_logger",
]
