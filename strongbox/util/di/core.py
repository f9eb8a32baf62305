"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from strongbox.config import AddressDefaults, Settings
from strongbox.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Config provider.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_address_defaults(self, settings: Settings) -> AddressDefaults:
        """Provide per-flag addressing defaults."""
        return settings.defaults
