"""Per-call connection settings.

A :class:`Connection` is the base URL plus headers for one request. The
factory chooses between the core API (``/api/v1``), root (OAuth), discovery
and health base URLs and injects bearer tokens.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from humanity_sdk.core.environment import EnvironmentDescriptor

CORE_API_PATH = "api/v1"


def _strip_trailing_slash(value: str) -> str:
    return value[:-1] if value.endswith("/") else value


def _strip_leading_slash(value: str) -> str:
    return value[1:] if value.startswith("/") else value


def join_url(base: str, path: str) -> str:
    """Join a base URL and a relative path with exactly one slash."""
    return f"{_strip_trailing_slash(base)}/{_strip_leading_slash(path)}"


@dataclass(frozen=True)
class Connection:
    """Base URL and headers for one outbound call."""

    host: str
    headers: dict[str, str] = field(default_factory=dict)

    def url(self, path: str = "") -> str:
        """Build an absolute URL for a path under this connection's host."""
        if not path:
            return self.host
        return join_url(self.host, path)


class HttpConnectionFactory:
    """Builds :class:`Connection` objects for an environment."""

    def __init__(
        self,
        environment: EnvironmentDescriptor,
        default_headers: dict[str, str] | None = None,
    ) -> None:
        self._environment = environment
        self._default_headers = dict(default_headers or {})

    @property
    def environment(self) -> EnvironmentDescriptor:
        """Get the environment this factory targets."""
        return self._environment

    def get_default_headers(self) -> dict[str, str]:
        """Return a copy of the default headers."""
        return dict(self._default_headers)

    def create_core_connection(
        self,
        access_token: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> Connection:
        """Connection for the versioned core API (presets, status feeds)."""
        return self._create(join_url(self._environment.api_base_url, CORE_API_PATH), access_token, headers)

    def create_root_connection(
        self,
        access_token: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> Connection:
        """Connection for the API root (OAuth endpoints)."""
        return self._create(self._environment.api_base_url, access_token, headers)

    def create_discovery_connection(self, headers: dict[str, str] | None = None) -> Connection:
        """Connection for the discovery document. Never authenticated."""
        return self._create(self._discovery_base_url, None, headers)

    def create_health_connection(self, headers: dict[str, str] | None = None) -> Connection:
        """Connection for liveness/readiness probes. Never authenticated."""
        return self._create(self._discovery_base_url, None, headers)

    @property
    def _discovery_base_url(self) -> str:
        return self._environment.discovery_base_url or self._environment.api_base_url

    def _create(
        self,
        base_url: str,
        access_token: str | None,
        headers: dict[str, str] | None,
    ) -> Connection:
        resolved = {**self._default_headers, **(headers or {})}
        if access_token:
            resolved["Authorization"] = f"Bearer {access_token}"
        return Connection(host=_strip_trailing_slash(base_url), headers=resolved)
