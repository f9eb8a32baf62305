"""Org invite domain service."""

from typing import Sequence

import logfire

from strongbox.domain.model import OrgInviteEnvelope
from strongbox.domain.repository import OrgInviteRepository
from strongbox.domain.value import (
    InviteId,
    InviteState,
    OrgId,
    ProgressFunc,
    TeamId,
    UserId,
)

from .base import Service


class InviteService(Service):
    """Domain service for the org invite lifecycle.

    Invites move through ``sent -> accepted -> associated -> approved``. Each
    step is a request to the registry; ordering rules are the registry's, and
    a step taken out of order surfaces as the registry's error.
    """

    def __init__(self, invite_repository: OrgInviteRepository) -> None:
        """Initialize invite service.

        Args:
            invite_repository: Org invite repository
        """
        self.invite_repository = invite_repository

    async def send(
        self,
        email: str,
        org_id: OrgId,
        inviter_id: UserId,
        team_ids: Sequence[TeamId],
    ) -> OrgInviteEnvelope:
        """Create and deliver an invite.

        Duplicate sends create duplicate invites; the registry decides whether
        to allow them.

        Args:
            email: Invitee email address
            org_id: Org the invitee joins
            inviter_id: User sending the invite
            team_ids: Teams the invitee joins on approval

        Returns:
            The submitted invite envelope
        """
        with logfire.span(
            "invite_service.send",
            org_id=str(org_id),
            inviter_id=str(inviter_id),
            team_count=len(team_ids),
        ):
            invite = await self.invite_repository.send(
                email, org_id, inviter_id, team_ids
            )
            logfire.info("Invite sent", invite_id=str(invite.id), org_id=str(org_id))
            return invite

    async def accept(self, org: str, email: str, code: str) -> None:
        """Accept an invite with the code delivered to ``email``."""
        with logfire.span("invite_service.accept", org=org):
            await self.invite_repository.accept(org, email, code)
            logfire.info("Invite accepted", org=org)

    async def associate(self, org: str, email: str, code: str) -> OrgInviteEnvelope:
        """Bind an accepted invite to the authenticated identity.

        Must follow :meth:`accept` and precede :meth:`approve`.

        Returns:
            The updated invite with ``invitee_id`` set
        """
        with logfire.span("invite_service.associate", org=org):
            invite = await self.invite_repository.associate(org, email, code)
            logfire.info(
                "Invite associated",
                invite_id=str(invite.id),
                invitee_id=str(invite.body.invitee_id),
            )
            return invite

    async def approve(
        self, invite_id: InviteId, progress: ProgressFunc | None = None
    ) -> None:
        """Approve an invite, adding the invitee to its pending teams."""
        with logfire.span("invite_service.approve", invite_id=str(invite_id)):
            await self.invite_repository.approve(invite_id, progress)
            logfire.info("Invite approved", invite_id=str(invite_id))

    async def list(
        self, org_id: OrgId, states: Sequence[InviteState] = ()
    ) -> list[OrgInviteEnvelope]:
        """List an org's invites, optionally filtered by exact state."""
        with logfire.span(
            "invite_service.list",
            org_id=str(org_id),
            states=[state.value for state in states],
        ):
            return await self.invite_repository.list(org_id, states)
