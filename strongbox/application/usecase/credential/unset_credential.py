"""Unset credential use case."""

import logfire
from pydantic import BaseModel, Field

from strongbox.config import AddressDefaults
from strongbox.domain.service import CredentialService
from strongbox.domain.value import AddressFlags, ProgressFunc

from ..base import BaseUseCase
from .common import CredentialItem


class UnsetCredentialRequest(BaseModel):
    """Unset credential request."""

    name_or_path: str
    flags: AddressFlags = Field(default_factory=AddressFlags)


class UnsetCredentialResponse(BaseModel):
    """Unset credential response."""

    credentials: list[CredentialItem]


class UnsetCredentialUseCase(BaseUseCase):
    """Use case for withdrawing a credential's value.

    The credential is written again with ``state=unset`` and no value, so its
    history is kept.
    """

    def __init__(
        self, credential_service: CredentialService, defaults: AddressDefaults
    ) -> None:
        self.credential_service = credential_service
        self.defaults = defaults

    async def execute(
        self, request: UnsetCredentialRequest, progress: ProgressFunc | None = None
    ) -> UnsetCredentialResponse:
        with logfire.span(
            "unset_credential.execute", name_or_path=request.name_or_path
        ):
            stored = await self.credential_service.unset_credential(
                request.name_or_path, request.flags, self.defaults, progress
            )
            return UnsetCredentialResponse(
                credentials=[CredentialItem.from_envelope(c) for c in stored]
            )
