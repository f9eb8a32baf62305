"""List invites use case."""

import logfire
from pydantic import BaseModel, Field

from strongbox.domain.service import InviteService, OrgService
from strongbox.domain.value import InviteState

from ..base import BaseUseCase
from .common import InviteItem


class ListInvitesRequest(BaseModel):
    """List invites request."""

    org: str
    states: list[InviteState] = Field(default_factory=list)


class ListInvitesResponse(BaseModel):
    """List invites response."""

    invites: list[InviteItem]


class ListInvitesUseCase(BaseUseCase):
    """Use case for listing an org's invites."""

    def __init__(self, org_service: OrgService, invite_service: InviteService) -> None:
        self.org_service = org_service
        self.invite_service = invite_service

    async def execute(self, request: ListInvitesRequest) -> ListInvitesResponse:
        """List invites, keeping only those in one of ``request.states``.

        An empty state filter lists every invite.
        """
        with logfire.span(
            "list_invites.execute",
            org=request.org,
            states=[state.value for state in request.states],
        ):
            org = await self.org_service.resolve_org(request.org)
            invites = await self.invite_service.list(org.id, request.states)
            return ListInvitesResponse(
                invites=[InviteItem.from_envelope(invite) for invite in invites]
            )
