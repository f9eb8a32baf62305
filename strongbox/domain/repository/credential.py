"""Credential repository interface."""

from abc import ABC, abstractmethod

from strongbox.domain.model import CredentialEnvelope
from strongbox.domain.value import PathExp, ProgressFunc


class CredentialRepository(ABC):
    """Registry access to credentials."""

    @abstractmethod
    async def create(
        self, credential: CredentialEnvelope, progress: ProgressFunc | None = None
    ) -> CredentialEnvelope:
        """Submit a credential envelope.

        Goes through the daemon, which encrypts the value before forwarding.

        Args:
            credential: Envelope to store
            progress: Optional callback for daemon progress events

        Returns:
            The stored envelope with the registry-confirmed id and version
        """
        pass

    @abstractmethod
    async def list(self, pattern: PathExp) -> list[CredentialEnvelope]:
        """List credentials whose path expression matches ``pattern``."""
        pass
