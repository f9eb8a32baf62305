"""Set credential use case."""

import logfire
from pydantic import BaseModel, Field

from strongbox.config import AddressDefaults
from strongbox.domain.model import CredentialValue
from strongbox.domain.service import CredentialService
from strongbox.domain.value import AddressFlags, ProgressFunc

from ..base import BaseUseCase
from .common import CredentialItem


class SetCredentialRequest(BaseModel):
    """Set credential request."""

    name_or_path: str
    value: str
    flags: AddressFlags = Field(default_factory=AddressFlags)


class SetCredentialResponse(BaseModel):
    """Set credential response."""

    credentials: list[CredentialItem]


class SetCredentialUseCase(BaseUseCase):
    """Use case for storing a credential value."""

    def __init__(
        self, credential_service: CredentialService, defaults: AddressDefaults
    ) -> None:
        """Initialize set credential use case.

        Args:
            credential_service: Credential domain service
            defaults: Configured addressing defaults
        """
        self.credential_service = credential_service
        self.defaults = defaults

    async def execute(
        self, request: SetCredentialRequest, progress: ProgressFunc | None = None
    ) -> SetCredentialResponse:
        """Execute set credential flow.

        Steps:
        1. Resolve the path expressions and name
        2. Resolve org and project
        3. Write one credential per path expression through the daemon

        Args:
            request: Set credential request
            progress: Optional callback for daemon progress events

        Returns:
            Stored credentials

        Raises:
            ParseError: If the path or a flag is malformed
            ValidationError: If the name is the wildcard or an address part
                is missing
            NotFoundError: If the org or project does not exist
            TransportError: If the registry or daemon request fails
        """
        with logfire.span("set_credential.execute", name_or_path=request.name_or_path):
            stored = await self.credential_service.set_credential(
                request.name_or_path,
                request.flags,
                self.defaults,
                lambda: CredentialValue.string(request.value),
                progress,
            )
            return SetCredentialResponse(
                credentials=[CredentialItem.from_envelope(c) for c in stored]
            )
