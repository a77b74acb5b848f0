"""Tests for provider configuration parsing."""

import pytest

from remotefed.config import (
    ADD_ROLES_TO_TOKEN,
    DEBUG_ENABLED,
    RESOURCE_CLIENT_ID,
    FederationConfig,
    Settings,
    parse_flag,
)


class TestParseFlag:
    """Test lenient boolean parsing of component flags."""

    @pytest.mark.parametrize("value", ["true", "TRUE", "True", True])
    def test_truthy(self, value):
        assert parse_flag(value) is True

    @pytest.mark.parametrize(
        "value",
        ["false", "", "yes", "1", "on", None, 1, False, "tru", " true", "true "],
    )
    def test_falsy(self, value):
        """Test anything but "true" disables the flag instead of raising."""
        assert parse_flag(value) is False


class TestFederationConfig:
    """Test typed provider configuration."""

    def test_defaults(self):
        config = FederationConfig()
        assert config.add_roles_to_token is False
        assert config.resource_client_id is None
        assert config.debug_enabled is False

    def test_from_component(self):
        """Test string-keyed component settings are parsed once."""
        config = FederationConfig.from_component(
            {
                ADD_ROLES_TO_TOKEN: "true",
                RESOURCE_CLIENT_ID: " portal ",
                DEBUG_ENABLED: "TRUE",
                "unrelated": "ignored",
            }
        )

        assert config.add_roles_to_token is True
        assert config.resource_client_id == " portal "
        assert config.debug_enabled is True

    def test_from_empty_component(self):
        """Test absent keys disable features rather than fail."""
        assert FederationConfig.from_component({}) == FederationConfig()

    def test_invalid_values_disable_features(self):
        config = FederationConfig.from_component(
            {ADD_ROLES_TO_TOKEN: "maybe", RESOURCE_CLIENT_ID: "", DEBUG_ENABLED: None}
        )
        assert config.add_roles_to_token is False
        assert config.resource_client_id is None
        assert config.debug_enabled is False

    def test_frozen(self):
        config = FederationConfig()
        with pytest.raises(ValueError):
            config.add_roles_to_token = True


class TestSettings:
    """Test process settings sources."""

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("REMOTEFED_PROVIDER_ID", "ldap-bridge")
        monkeypatch.setenv("REMOTEFED_FEDERATION__ADD_ROLES_TO_TOKEN", "true")
        monkeypatch.setenv("REMOTEFED_FEDERATION__RESOURCE_CLIENT_ID", "portal")

        settings = Settings()

        assert settings.provider_id == "ldap-bridge"
        assert settings.federation.add_roles_to_token is True
        assert settings.federation.resource_client_id == "portal"

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("REMOTEFED_PROVIDER_ID", raising=False)
        settings = Settings()
        assert settings.provider_id == "remote-user-federation"
        assert settings.federation == FederationConfig()
