"""Mock registry provider for testing."""

from dishka import Scope, provide

from strongbox.adapter.registry import Dispatcher, InMemoryDispatcher, InMemoryRegistry
from strongbox.util.di.infrastructure.registry import RegistryProvider


class MockRegistryProvider(RegistryProvider):
    """Mock registry provider backed by an in-process registry.

    The registry is APP-scoped so tests can seed it and read it back; each
    test builds its own container, so state never leaks between tests.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_registry(self) -> InMemoryRegistry:
        """Provide in-memory registry state."""
        return InMemoryRegistry()

    @provide(scope=Scope.APP)
    def get_dispatcher(self, registry: InMemoryRegistry) -> Dispatcher:
        """Provide dispatcher serving the in-memory registry."""
        return InMemoryDispatcher(registry)
