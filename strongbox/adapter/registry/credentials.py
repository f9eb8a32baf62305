"""Credential client."""

from strongbox.adapter.registry.base import RegistryClient
from strongbox.domain.model import (
    CredentialEnvelope,
    CredentialV1Body,
    CredentialV2Body,
)
from strongbox.domain.repository import CredentialRepository
from strongbox.domain.value import EntityKind, PathExp, ProgressFunc


class CredentialsClient(RegistryClient, CredentialRepository):
    """Client for ``/credentials``.

    Writes go through the daemon, which encrypts values before they reach the
    registry. Reads go to the registry directly.
    """

    async def create(
        self, credential: CredentialEnvelope, progress: ProgressFunc | None = None
    ) -> CredentialEnvelope:
        raw = await self.dispatcher.call_with_progress(
            "POST",
            "/credentials",
            body=credential.model_dump(mode="json"),
            progress=progress,
        )
        return self.decode_one(
            EntityKind.CREDENTIAL, raw, CredentialV1Body, CredentialV2Body
        )

    async def list(self, pattern: PathExp) -> list[CredentialEnvelope]:
        raw = await self.dispatcher.call(
            "GET", "/credentials", query=[("path", str(pattern))]
        )
        return self.decode_many(
            EntityKind.CREDENTIAL, raw, CredentialV1Body, CredentialV2Body
        )
