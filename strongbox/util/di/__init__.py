"""Providers and provider selection for the client container."""

from typing import Type

from strongbox.util.di.adapter import ProdAdapterProvider
from strongbox.util.di.application import ProdApplicationProvider
from strongbox.util.di.base import Component, ProviderBase
from strongbox.util.di.core import ProdConfigProvider
from strongbox.util.di.domain import ProdDomainProvider
from strongbox.util.di.infrastructure import ProdRegistryProvider, RegistryProvider
from strongbox.util.error import DependencyInjectionError

# Order matters only for readability; dishka resolves by type
PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdAdapterProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    RegistryProvider,
]


def mockable_components() -> set[Component]:
    """Names of the components that have a mock implementation."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.__subclasses__() and base.__mock_component__
    }


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the implementation of a provider.

    Fixed providers come back unchanged. For a swappable component, the
    subclass whose ``__is_mock__`` matches ``use_mock`` is returned; tests
    register their mock subclasses by importing ``tests.di``.

    Raises:
        DependencyInjectionError: The component has no such implementation.
    """
    candidates = base.__subclasses__()
    if not candidates:
        return base

    for candidate in candidates:
        if candidate.__is_mock__ == use_mock:
            return candidate

    raise DependencyInjectionError(
        base.__mock_component__ or base.__name__, mock=use_mock
    )


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "mockable_components",
    "ProdAdapterProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "RegistryProvider",
    "ProdRegistryProvider",
]
