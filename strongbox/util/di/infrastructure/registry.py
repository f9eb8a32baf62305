"""Registry infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide

from strongbox.adapter.registry import Dispatcher, HttpDispatcher
from strongbox.config import Settings
from strongbox.util.di.base import ProviderBase
from strongbox.util.observability import instrument_httpx


class RegistryProvider(ProviderBase):
    """Registry component base."""

    __mock_component__ = "registry"


class ProdRegistryProvider(RegistryProvider):
    """Production registry provider talking HTTP to the registry and daemon."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_dispatcher(self, settings: Settings) -> AsyncIterator[Dispatcher]:
        """Provide the HTTP dispatcher, closing its connections on exit."""
        instrument_httpx()
        dispatcher = HttpDispatcher.from_settings(settings)
        try:
            yield dispatcher
        finally:
            await dispatcher.aclose()
            logfire.debug("Registry connections closed")
