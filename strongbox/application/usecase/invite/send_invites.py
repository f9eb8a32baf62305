"""Send invites use case."""

import logfire
from pydantic import BaseModel, Field

from strongbox.adapter.error import TransportError
from strongbox.domain.error import DomainError
from strongbox.domain.repository import SessionRepository
from strongbox.domain.service import InviteService, OrgService

from ..base import BaseUseCase
from .common import InviteItem


class SendInvitesRequest(BaseModel):
    """Send invites request."""

    org: str
    emails: list[str] = Field(min_length=1)
    teams: list[str] = Field(default_factory=list)


class FailedInvite(BaseModel):
    """An email that could not be invited, and why."""

    email: str
    error: str


class SendInvitesResponse(BaseModel):
    """Send invites response."""

    sent: list[InviteItem]
    failed: list[FailedInvite]


class SendInvitesUseCase(BaseUseCase):
    """Use case for inviting people to an org."""

    def __init__(
        self,
        org_service: OrgService,
        invite_service: InviteService,
        session_repository: SessionRepository,
    ) -> None:
        """Initialize send invites use case.

        Args:
            org_service: Org resolution service
            invite_service: Invite domain service
            session_repository: Session repository, for the inviter identity
        """
        self.org_service = org_service
        self.invite_service = invite_service
        self.session_repository = session_repository

    async def execute(self, request: SendInvitesRequest) -> SendInvitesResponse:
        """Execute send invites flow.

        Steps:
        1. Resolve the org and the teams by name
        2. Look up the inviter from the session
        3. Send one invite per email; a failed email does not stop the others

        Raises:
            NotFoundError: If the org or a team does not exist
            TransportError: If the session lookup fails
        """
        with logfire.span(
            "send_invites.execute", org=request.org, count=len(request.emails)
        ):
            org = await self.org_service.resolve_org(request.org)
            teams = await self.org_service.resolve_teams(org.id, request.teams)
            inviter = await self.session_repository.who_am_i()

            team_ids = [team.id for team in teams]
            sent: list[InviteItem] = []
            failed: list[FailedInvite] = []
            for email in request.emails:
                try:
                    invite = await self.invite_service.send(
                        email, org.id, inviter.id, team_ids
                    )
                except (DomainError, TransportError) as e:
                    logfire.warn("Invite failed", email=email, error=str(e))
                    failed.append(FailedInvite(email=email, error=str(e)))
                    continue
                sent.append(InviteItem.from_envelope(invite))

            return SendInvitesResponse(sent=sent, failed=failed)
