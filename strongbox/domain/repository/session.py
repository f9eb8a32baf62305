"""Session repository interface."""

from abc import ABC, abstractmethod

from strongbox.domain.model import UserEnvelope


class SessionRepository(ABC):
    """Identity of the authenticated caller."""

    @abstractmethod
    async def who_am_i(self) -> UserEnvelope:
        """Return the user the current session belongs to."""
        pass
