"""Adapter DI providers."""

from dishka import Scope, provide

from strongbox.adapter.registry import (
    CredentialsClient,
    Dispatcher,
    OrgInvitesClient,
    OrgsClient,
    ProjectsClient,
    SessionClient,
    TeamsClient,
)
from strongbox.domain.repository import (
    CredentialRepository,
    OrgInviteRepository,
    OrgRepository,
    ProjectRepository,
    SessionRepository,
    TeamRepository,
)
from strongbox.util.di.base import ProviderBase


class ProdAdapterProvider(ProviderBase):
    """Registry clients over whichever dispatcher the registry component gives.

    Concrete, no mocks needed: tests swap the dispatcher, not the clients.
    """

    scope = Scope.REQUEST

    @provide
    def get_org_repository(self, dispatcher: Dispatcher) -> OrgRepository:
        return OrgsClient(dispatcher)

    @provide
    def get_project_repository(self, dispatcher: Dispatcher) -> ProjectRepository:
        return ProjectsClient(dispatcher)

    @provide
    def get_team_repository(self, dispatcher: Dispatcher) -> TeamRepository:
        return TeamsClient(dispatcher)

    @provide
    def get_session_repository(self, dispatcher: Dispatcher) -> SessionRepository:
        return SessionClient(dispatcher)

    @provide
    def get_invite_repository(self, dispatcher: Dispatcher) -> OrgInviteRepository:
        return OrgInvitesClient(dispatcher)

    @provide
    def get_credential_repository(
        self, dispatcher: Dispatcher
    ) -> CredentialRepository:
        return CredentialsClient(dispatcher)
