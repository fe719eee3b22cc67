"""Deployment environment profiles.

Each client owns an :class:`EnvironmentRegistry`. The registry always starts
with the built-in ``production``, ``staging`` and ``testnet`` profiles and
accepts caller-registered overrides.
"""

from __future__ import annotations

from dataclasses import dataclass

from humanity_sdk.core.errors import HumanityConfigurationError

DEFAULT_ENVIRONMENT = "production"


@dataclass(frozen=True)
class EnvironmentDescriptor:
    """Base URLs for one deployment of the Humanity API."""

    name: str
    api_base_url: str
    discovery_base_url: str | None = None


BUILTIN_ENVIRONMENTS: tuple[EnvironmentDescriptor, ...] = (
    EnvironmentDescriptor(
        name="production",
        api_base_url="https://api.humanity.org",
        discovery_base_url="https://api.humanity.org",
    ),
    EnvironmentDescriptor(
        name="staging",
        api_base_url="https://api-staging.humanity.org",
        discovery_base_url="https://api-staging.humanity.org",
    ),
    EnvironmentDescriptor(
        name="testnet",
        api_base_url="https://api-testnet.humanity.org",
        discovery_base_url="https://api-testnet.humanity.org",
    ),
)


class EnvironmentRegistry:
    """Named environment profiles with override support."""

    def __init__(self, initial: list[EnvironmentDescriptor] | None = None) -> None:
        """Initialize the registry.

        Args:
            initial: Extra descriptors registered after the built-in ones.
                A descriptor named like a built-in replaces it.
        """
        self._descriptors: dict[str, EnvironmentDescriptor] = {
            descriptor.name: descriptor for descriptor in BUILTIN_ENVIRONMENTS
        }
        for descriptor in initial or []:
            self.register(descriptor)

    def register(self, descriptor: EnvironmentDescriptor) -> None:
        """Register or replace an environment profile."""
        self._descriptors[descriptor.name] = EnvironmentDescriptor(
            name=descriptor.name,
            api_base_url=descriptor.api_base_url,
            discovery_base_url=descriptor.discovery_base_url or descriptor.api_base_url,
        )

    def resolve(self, name: str | None = None) -> EnvironmentDescriptor:
        """Look up an environment by name.

        Exact (case-sensitive) names win; otherwise the first profile whose
        name matches case-insensitively is returned.

        Args:
            name: Environment name. ``None`` or empty selects production.

        Returns:
            The matching descriptor.

        Raises:
            HumanityConfigurationError: If no profile matches.
        """
        if not name:
            return self._descriptors[DEFAULT_ENVIRONMENT]

        descriptor = self._descriptors.get(name)
        if descriptor is not None:
            return descriptor

        lowered = name.lower()
        for candidate in self._descriptors.values():
            if candidate.name.lower() == lowered:
                return candidate

        raise HumanityConfigurationError(f'Unknown Humanity SDK environment "{name}"')

    def list(self) -> list[EnvironmentDescriptor]:
        """List all registered environment profiles."""
        return list(self._descriptors.values())
