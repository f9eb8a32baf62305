"""Approve invite use case."""

import logfire
from pydantic import BaseModel, field_validator

from strongbox.domain.service import InviteService
from strongbox.domain.value import EntityKind, Identifier, ProgressFunc

from ..base import BaseUseCase


class ApproveInviteRequest(BaseModel):
    """Approve invite request."""

    invite_id: str

    @field_validator("invite_id")
    @classmethod
    def validate_invite_id(cls, v: str) -> str:
        if Identifier.parse(v).kind is not EntityKind.ORG_INVITE:
            raise ValueError("Not an invite identifier")
        return v


class ApproveInviteUseCase(BaseUseCase):
    """Use case for approving an associated invite."""

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(
        self, request: ApproveInviteRequest, progress: ProgressFunc | None = None
    ) -> None:
        with logfire.span("approve_invite.execute", invite_id=request.invite_id):
            await self.invite_service.approve(
                Identifier.parse(request.invite_id), progress
            )
