"""
Configuration management for the remote user federation provider.

Non-secret configuration loaded from YAML file, secrets from environment variables.
Per-component provider settings arrive from the host as string key/value pairs
and are parsed once into a typed FederationConfig.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Component configuration keys as stored by the host
ADD_ROLES_TO_TOKEN = "add_roles_to_token"
RESOURCE_CLIENT_ID = "resource_client_id"
DEBUG_ENABLED = "debug_enabled"


def yaml_config_settings_source() -> dict[str, Any]:
    """Load configuration from YAML file."""
    config_path = Path("/etc/remotefed/config.yaml")
    if config_path.exists():
        with open(config_path) as f:
            return yaml.safe_load(f) or {}
    return {}


def parse_flag(value: Any) -> bool:
    """Parse a component flag leniently.

    Only a real ``True`` or the exact string ``"true"`` (any case, no
    surrounding whitespace) enables a flag.
    Anything else, including ``None`` and unparseable values, is ``False``.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() == "true"
    return False


# --- Provider Configuration Model ---


class FederationConfig(BaseModel):
    """Typed settings for one federation provider instance."""

    model_config = ConfigDict(frozen=True)

    add_roles_to_token: bool = Field(
        default=False,
        description="Attach roles from the remote record to the user's role mappings",
    )
    resource_client_id: str | None = Field(
        default=None,
        description="Client to scope federation roles to. Realm roles are used when unset.",
    )
    debug_enabled: bool = Field(default=False, description="Emit adapter diagnostic logs")

    @field_validator("add_roles_to_token", "debug_enabled", mode="before")
    @classmethod
    def validate_flag(cls, v: Any) -> bool:
        return parse_flag(v)

    @field_validator("resource_client_id", mode="before")
    @classmethod
    def validate_client_id(cls, v: Any) -> str | None:
        """Blank client ids mean "no resource client".

        Non-blank ids are kept as given and looked up verbatim.
        """
        if v is None:
            return None
        v = str(v)
        if not v.strip():
            return None
        return v

    @classmethod
    def from_component(cls, component: Mapping[str, Any]) -> "FederationConfig":
        """Build config from the host's string-keyed component settings.

        Missing keys fall back to defaults; unknown keys are ignored.
        """
        return cls(
            add_roles_to_token=component.get(ADD_ROLES_TO_TOKEN),
            resource_client_id=component.get(RESOURCE_CLIENT_ID),
            debug_enabled=component.get(DEBUG_ENABLED),
        )


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="REMOTEFED_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="remotefed")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    json_logs: bool = Field(default=True, description="JSON logging in production")

    # Storage provider id, first half of every federated user id
    provider_id: str = Field(
        default="remote-user-federation",
        description="Component id of this federation provider",
    )

    # Database - URL from environment (may contain secrets)
    database_url: str = Field(
        default="sqlite:///./remotefed.db",
        description="SQLAlchemy URL of the reference role store",
    )

    # Federation provider defaults
    federation: FederationConfig = Field(default_factory=FederationConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Customize settings sources: env vars override YAML config."""
        return (
            init_settings,
            env_settings,
            yaml_config_settings_source,
            dotenv_settings,
            file_secret_settings,
        )


# Global settings instance
settings = Settings()
