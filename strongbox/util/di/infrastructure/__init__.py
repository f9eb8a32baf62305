"""Infrastructure providers."""

# Import bases
from .registry import RegistryProvider

# Import implementations (needed for __subclasses__())
from .registry import ProdRegistryProvider  # noqa: F401

__all__ = [
    "ProdRegistryProvider",
    "RegistryProvider",
]
