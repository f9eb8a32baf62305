"""Domain layer DI providers."""

from dishka import Scope, provide

from strongbox.domain.repository import (
    CredentialRepository,
    OrgInviteRepository,
    OrgRepository,
    ProjectRepository,
    TeamRepository,
)
from strongbox.domain.service import CredentialService, InviteService, OrgService
from strongbox.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped; each command runs in one request scope.
    """

    scope = Scope.REQUEST

    @provide
    def get_org_service(
        self,
        org_repository: OrgRepository,
        project_repository: ProjectRepository,
        team_repository: TeamRepository,
    ) -> OrgService:
        """Provide org resolution service."""
        return OrgService(
            org_repository=org_repository,
            project_repository=project_repository,
            team_repository=team_repository,
        )

    @provide
    def get_credential_service(
        self, credential_repository: CredentialRepository, org_service: OrgService
    ) -> CredentialService:
        """Provide credential domain service."""
        return CredentialService(
            credential_repository=credential_repository, org_service=org_service
        )

    @provide
    def get_invite_service(
        self, invite_repository: OrgInviteRepository
    ) -> InviteService:
        """Provide invite domain service."""
        return InviteService(invite_repository=invite_repository)
