"""Org invite repository interface."""

from abc import ABC, abstractmethod
from typing import Sequence

from strongbox.domain.model import OrgInviteEnvelope
from strongbox.domain.value import (
    InviteId,
    InviteState,
    OrgId,
    ProgressFunc,
    TeamId,
    UserId,
)


class OrgInviteRepository(ABC):
    """Registry access to org invites.

    Lifecycle rules are enforced by the registry, not by implementations.
    """

    @abstractmethod
    async def list(
        self, org_id: OrgId, states: Sequence[InviteState] = ()
    ) -> list[OrgInviteEnvelope]:
        """List invites for an org.

        Args:
            org_id: Org to list invites for
            states: Optional state filter; empty means all states

        Returns:
            Invites, freshly fetched
        """
        pass

    @abstractmethod
    async def send(
        self,
        email: str,
        org_id: OrgId,
        inviter_id: UserId,
        team_ids: Sequence[TeamId],
    ) -> OrgInviteEnvelope:
        """Create and deliver a new invite.

        Returns:
            The envelope that was submitted
        """
        pass

    @abstractmethod
    async def accept(self, org: str, email: str, code: str) -> None:
        """Redeem an invite code."""
        pass

    @abstractmethod
    async def associate(self, org: str, email: str, code: str) -> OrgInviteEnvelope:
        """Bind an accepted invite to the authenticated identity.

        Returns:
            The updated invite
        """
        pass

    @abstractmethod
    async def approve(
        self, invite_id: InviteId, progress: ProgressFunc | None = None
    ) -> None:
        """Approve an associated invite through the daemon."""
        pass
