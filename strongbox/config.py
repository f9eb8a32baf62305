"""Application configuration."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class RegistrySettings(BaseModel):
    """Registry API configuration."""

    url: str = "https://registry.strongbox.sh/v1"

    # Bearer token for direct registry calls
    token: str | None = None

    # Seconds before a registry request is abandoned
    timeout: float = 10.0


class DaemonSettings(BaseModel):
    """Local daemon configuration."""

    socket_path: Path = Path.home() / ".strongbox" / "daemon.socket"

    # Daemon requests include local crypto work, so they get more time
    timeout: float = 60.0


class AddressDefaults(BaseModel):
    """Per-flag defaults for credential addressing.

    Applied to every addressing flag the user omits. An empty list means the
    flag has no default and must be supplied.
    """

    org: str | None = None
    project: str | None = None
    environment: list[str] = []
    service: list[str] = ["default"]
    identity: list[str] = ["*"]
    instance: list[str] = ["*"]


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via STRONGBOX_OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise local only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Set environment variables to override, for example::

        STRONGBOX_REGISTRY__URL=https://registry.example.com/v1
        STRONGBOX_DAEMON__SOCKET_PATH=/run/strongbox/daemon.socket
        STRONGBOX_DEFAULTS__ORG=acme
        STRONGBOX_DEFAULTS__ENVIRONMENT='["dev-alice"]'
    """

    model_config = SettingsConfigDict(
        env_prefix="STRONGBOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows REGISTRY__URL syntax
        extra="ignore",
    )

    environment: Literal["test", "development", "production"] = "production"
    debug: bool = False

    # Nested settings
    registry: RegistrySettings = RegistrySettings()
    daemon: DaemonSettings = DaemonSettings()
    defaults: AddressDefaults = AddressDefaults()
    observability: ObservabilitySettings = ObservabilitySettings()
