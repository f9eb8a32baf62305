"""Application layer DI providers."""

from dishka import Scope, provide

from strongbox.application.usecase.credential import (
    SetCredentialUseCase,
    UnsetCredentialUseCase,
)
from strongbox.application.usecase.invite import (
    AcceptInviteUseCase,
    ApproveInviteUseCase,
    ListInvitesUseCase,
    SendInvitesUseCase,
)
from strongbox.config import AddressDefaults
from strongbox.domain.repository import SessionRepository
from strongbox.domain.service import CredentialService, InviteService, OrgService
from strongbox.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Application use cases provider - concrete, no mocks needed."""

    # Credential use cases
    @provide(scope=Scope.REQUEST)
    def get_set_credential_use_case(
        self, credential_service: CredentialService, defaults: AddressDefaults
    ) -> SetCredentialUseCase:
        """Provide set credential use case."""
        return SetCredentialUseCase(
            credential_service=credential_service, defaults=defaults
        )

    @provide(scope=Scope.REQUEST)
    def get_unset_credential_use_case(
        self, credential_service: CredentialService, defaults: AddressDefaults
    ) -> UnsetCredentialUseCase:
        """Provide unset credential use case."""
        return UnsetCredentialUseCase(
            credential_service=credential_service, defaults=defaults
        )

    # Invite use cases
    @provide(scope=Scope.REQUEST)
    def get_send_invites_use_case(
        self,
        org_service: OrgService,
        invite_service: InviteService,
        session_repository: SessionRepository,
    ) -> SendInvitesUseCase:
        """Provide send invites use case."""
        return SendInvitesUseCase(
            org_service=org_service,
            invite_service=invite_service,
            session_repository=session_repository,
        )

    @provide(scope=Scope.REQUEST)
    def get_accept_invite_use_case(
        self, invite_service: InviteService
    ) -> AcceptInviteUseCase:
        """Provide accept invite use case."""
        return AcceptInviteUseCase(invite_service=invite_service)

    @provide(scope=Scope.REQUEST)
    def get_approve_invite_use_case(
        self, invite_service: InviteService
    ) -> ApproveInviteUseCase:
        """Provide approve invite use case."""
        return ApproveInviteUseCase(invite_service=invite_service)

    @provide(scope=Scope.REQUEST)
    def get_list_invites_use_case(
        self, org_service: OrgService, invite_service: InviteService
    ) -> ListInvitesUseCase:
        """Provide list invites use case."""
        return ListInvitesUseCase(
            org_service=org_service, invite_service=invite_service
        )
