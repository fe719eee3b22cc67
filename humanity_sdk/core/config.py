"""SDK configuration management.

Loads client settings from a config.yaml file and environment variables.
``HUMANITY_SDK_*`` variables win over values from the file.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".humanity"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"

ENV_PREFIX = "HUMANITY_SDK_"

DEFAULT_TIMEOUT = 30.0


@dataclass
class SdkConfig:
    """Settings for a :class:`~humanity_sdk.core.client.HumanityClient`."""

    client_id: str = ""
    redirect_uri: str = ""
    client_secret: str | None = None
    environment: str | None = None
    base_url: str | None = None
    default_headers: dict[str, str] = field(default_factory=dict)
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"
    config_path: Path | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], config_path: Path | None = None) -> SdkConfig:
        """Build a config from parsed YAML. Unknown keys are ignored."""
        return cls(
            client_id=data.get("client_id", ""),
            redirect_uri=data.get("redirect_uri", ""),
            client_secret=data.get("client_secret"),
            environment=data.get("environment"),
            base_url=data.get("base_url"),
            default_headers=dict(data.get("default_headers") or {}),
            timeout=float(data.get("timeout", DEFAULT_TIMEOUT)),
            log_level=data.get("log_level", "INFO"),
            config_path=config_path,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the settings that ``save`` persists.

        ``client_secret`` is left out.
        """
        return {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "environment": self.environment,
            "base_url": self.base_url,
            "default_headers": dict(self.default_headers),
            "timeout": self.timeout,
            "log_level": self.log_level,
        }

    def save(self, path: Path | None = None) -> None:
        """Write the settings as YAML, creating the parent directory.

        Args:
            path: Target file. Falls back to ``config_path``, then ``~/.humanity/config.yaml``.
        """
        save_path = path or self.config_path or DEFAULT_CONFIG_FILE
        save_path.parent.mkdir(parents=True, exist_ok=True)

        with open(save_path, "w") as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False)


def _get_env_float(key: str, default: float) -> float:
    """Read a float from the environment, keeping ``default`` if unset or malformed."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def load_config(config_path: Path | None = None) -> SdkConfig:
    """Build an SdkConfig from defaults, the YAML file and the environment.

    Each source overrides the one before it:
    1. dataclass defaults
    2. the YAML file, when present and parseable
    3. ``HUMANITY_SDK_*`` environment variables

    Args:
        config_path: YAML file to read. Defaults to ``~/.humanity/config.yaml``.

    Returns:
        The merged configuration.
    """
    config = SdkConfig()

    file_path = config_path or DEFAULT_CONFIG_FILE
    if file_path.exists():
        try:
            with open(file_path) as f:
                data = yaml.safe_load(f) or {}
            config = SdkConfig.from_dict(data, config_path=file_path)
        except (OSError, yaml.YAMLError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Ignoring invalid config file {file_path}: {e}")

    for attr in ("client_id", "redirect_uri", "client_secret", "environment", "base_url", "log_level"):
        value = os.environ.get(f"{ENV_PREFIX}{attr.upper()}")
        if value:
            setattr(config, attr, value)

    config.timeout = _get_env_float(f"{ENV_PREFIX}TIMEOUT", config.timeout)

    return config


def get_default_config_yaml() -> str:
    """Return a commented starter config.yaml.

    Every documented key is present; the secret is shown commented out.
    """
    return """\
# Humanity SDK Configuration File
# Environment variables override these settings (prefix: HUMANITY_SDK_)

# OAuth client registered with Humanity
client_id: ""

# Redirect URI registered for the client
redirect_uri: ""

# Environment profile: production, staging or testnet
environment: production

# Explicit API base URL (overrides environment)
# base_url: https://api.example.org

# Headers sent with every request
default_headers: {}

# HTTP timeout in seconds
timeout: 30.0

# Protocol log level: ERROR, INFO, DEBUG or TRACE
log_level: INFO

# Client secret for server-to-server token issuance.
# Prefer HUMANITY_SDK_CLIENT_SECRET; save() never writes this key.
# client_secret: ""
"""
