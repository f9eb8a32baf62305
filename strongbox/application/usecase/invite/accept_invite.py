"""Accept invite use case."""

import logfire
from pydantic import BaseModel

from strongbox.domain.service import InviteService

from ..base import BaseUseCase
from .common import InviteItem


class AcceptInviteRequest(BaseModel):
    """Accept invite request."""

    org: str
    email: str
    code: str


class AcceptInviteUseCase(BaseUseCase):
    """Use case for redeeming an invite code.

    Accepting and associating happen back to back: the code is redeemed, then
    the invite is bound to the logged-in identity.
    """

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(self, request: AcceptInviteRequest) -> InviteItem:
        with logfire.span("accept_invite.execute", org=request.org):
            await self.invite_service.accept(request.org, request.email, request.code)
            invite = await self.invite_service.associate(
                request.org, request.email, request.code
            )
            return InviteItem.from_envelope(invite)
