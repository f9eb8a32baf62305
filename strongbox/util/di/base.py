"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with swappable implementations
Component = Literal["registry"]


class ProviderBase(Provider):
    """Base for every provider in the container.

    A provider whose subclasses carry ``__is_mock__`` is a swappable
    component named by ``__mock_component__``; a provider without subclasses
    is used as-is in every container.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
