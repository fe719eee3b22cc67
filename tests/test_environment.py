"""Tests for environment profiles."""

import pytest

from humanity_sdk.core.environment import EnvironmentDescriptor, EnvironmentRegistry
from humanity_sdk.core.errors import HumanityConfigurationError


class TestEnvironmentRegistry:
    """Tests for EnvironmentRegistry."""

    def test_builtin_profiles(self):
        """Test that production, staging and testnet are always present."""
        names = [descriptor.name for descriptor in EnvironmentRegistry().list()]
        assert names == ["production", "staging", "testnet"]

    @pytest.mark.parametrize("name", [None, ""])
    def test_default_is_production(self, name):
        """Test that no name resolves to production."""
        descriptor = EnvironmentRegistry().resolve(name)
        assert descriptor.name == "production"
        assert descriptor.api_base_url == "https://api.humanity.org"

    def test_resolve_is_case_insensitive(self):
        """Test case-insensitive fallback lookup."""
        assert EnvironmentRegistry().resolve("STAGING").api_base_url == "https://api-staging.humanity.org"

    def test_exact_match_wins(self):
        """Test that an exact name beats a case-insensitive match."""
        registry = EnvironmentRegistry(
            [EnvironmentDescriptor(name="Sandbox", api_base_url="https://upper.example.com")]
        )
        registry.register(EnvironmentDescriptor(name="sandbox", api_base_url="https://lower.example.com"))

        assert registry.resolve("Sandbox").api_base_url == "https://upper.example.com"
        assert registry.resolve("sandbox").api_base_url == "https://lower.example.com"

    def test_unknown_environment(self):
        """Test that an unknown name raises a configuration error."""
        with pytest.raises(HumanityConfigurationError, match='Unknown Humanity SDK environment "moon"'):
            EnvironmentRegistry().resolve("moon")

    def test_register_defaults_discovery_url(self):
        """Test that discovery falls back to the API base URL."""
        registry = EnvironmentRegistry()
        registry.register(EnvironmentDescriptor(name="local", api_base_url="http://localhost:8080"))

        descriptor = registry.resolve("local")
        assert descriptor.discovery_base_url == "http://localhost:8080"

    def test_register_overrides_builtin(self):
        """Test that a registered profile replaces a built-in one."""
        registry = EnvironmentRegistry()
        registry.register(EnvironmentDescriptor(name="staging", api_base_url="https://staging.internal"))

        assert registry.resolve("staging").api_base_url == "https://staging.internal"

    def test_registries_are_independent(self):
        """Test that registering on one registry does not affect another."""
        first = EnvironmentRegistry()
        first.register(EnvironmentDescriptor(name="local", api_base_url="http://localhost:8080"))

        with pytest.raises(HumanityConfigurationError):
            EnvironmentRegistry().resolve("local")
