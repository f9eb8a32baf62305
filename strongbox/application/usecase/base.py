"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel


class BaseUseCase(ABC):
    """One command of the client.

    Use cases take a validated request model, call domain services and return
    a response model the interface layer can print. Long running ones also
    take an optional progress callback.
    """

    @abstractmethod
    async def execute(self, request: BaseModel, *args: Any, **kwargs: Any) -> Any:
        pass
