"""Org invite client.

Listing, sending, accepting and associating go straight to the registry.
Approval goes through the daemon, which completes the membership work and
reports progress while doing so.
"""

from datetime import datetime, timezone
from typing import Sequence

from strongbox.adapter.registry.base import RegistryClient
from strongbox.domain.model import OrgInviteBody, OrgInviteEnvelope, wrap
from strongbox.domain.repository import OrgInviteRepository
from strongbox.domain.value import (
    EntityKind,
    InviteId,
    InviteState,
    OrgId,
    ProgressFunc,
    TeamId,
    UserId,
    new_identifier,
)


class OrgInvitesClient(RegistryClient, OrgInviteRepository):
    """Registry and daemon client for ``/org-invites``."""

    async def send(
        self,
        email: str,
        org_id: OrgId,
        inviter_id: UserId,
        team_ids: Sequence[TeamId],
    ) -> OrgInviteEnvelope:
        body = OrgInviteBody(
            org_id=org_id,
            inviter_id=inviter_id,
            pending_teams=list(team_ids),
            email=email,
            created=datetime.now(timezone.utc),
        )
        invite = wrap(new_identifier(EntityKind.ORG_INVITE), 1, body)
        await self.dispatcher.call(
            "POST", "/org-invites", body=invite.model_dump(mode="json")
        )
        return invite

    async def accept(self, org: str, email: str, code: str) -> None:
        await self.dispatcher.call(
            "POST",
            "/org-invites/accept",
            body={"org": org, "email": email, "code": code},
        )

    async def associate(self, org: str, email: str, code: str) -> OrgInviteEnvelope:
        # Same payload as accept
        raw = await self.dispatcher.call(
            "POST",
            "/org-invites/associate",
            body={"org": org, "email": email, "code": code},
        )
        return self.decode_one(EntityKind.ORG_INVITE, raw, OrgInviteBody)

    async def approve(
        self, invite_id: InviteId, progress: ProgressFunc | None = None
    ) -> None:
        await self.dispatcher.call_with_progress(
            "POST", f"/org-invites/{invite_id}/approve", progress=progress
        )

    async def list(
        self, org_id: OrgId, states: Sequence[InviteState] = ()
    ) -> list[OrgInviteEnvelope]:
        query = [("org_id", str(org_id))]
        query.extend(("state", InviteState(state).value) for state in states)
        raw = await self.dispatcher.call("GET", "/org-invites", query=query)
        return self.decode_many(EntityKind.ORG_INVITE, raw, OrgInviteBody)
