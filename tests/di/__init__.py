"""Mock providers for testing."""

from .registry import MockRegistryProvider
from .container import build_test_container

__all__ = [
    "MockRegistryProvider",
    "build_test_container",
]
