"""Session client."""

from strongbox.adapter.registry.base import RegistryClient
from strongbox.domain.model import UserBody, UserEnvelope
from strongbox.domain.repository import SessionRepository
from strongbox.domain.value import EntityKind


class SessionClient(RegistryClient, SessionRepository):
    """Registry client for ``/self``."""

    async def who_am_i(self) -> UserEnvelope:
        raw = await self.dispatcher.call("GET", "/self")
        return self.decode_one(EntityKind.USER, raw, UserBody)
