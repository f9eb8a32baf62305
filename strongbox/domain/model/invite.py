"""Org invite body and its lifecycle.

An invite moves through ``sent -> accepted -> associated -> approved``. Each
lifecycle field is filled exactly once, in that order:

- ``accepted`` when the invitee redeems the code
- ``invitee_id`` when the invite is bound to the invitee's identity
- ``approver_id`` and ``approved`` when an org admin approves it

The transition methods are the registry's rules. The client never applies them
to an invite it fetched; it asks the registry to and receives the new envelope.
"""

from datetime import datetime
from typing import Literal

from pydantic import Field, model_validator

from strongbox.domain.error import InviteTransitionError
from strongbox.domain.model.common import DomainModel
from strongbox.domain.value import InviteState, OrgId, TeamId, UserId


class OrgInviteBody(DomainModel):
    """Invitation for an email address to join an org."""

    type: Literal["org-invite"] = "org-invite"
    org_id: OrgId
    inviter_id: UserId
    invitee_id: UserId | None = None
    approver_id: UserId | None = None
    pending_teams: list[TeamId] = Field(default_factory=list)
    email: str
    created: datetime
    accepted: datetime | None = None
    approved: datetime | None = None

    @model_validator(mode="after")
    def validate_lifecycle_order(self) -> "OrgInviteBody":
        """Lifecycle fields must be filled in order."""
        if self.invitee_id is not None and self.accepted is None:
            raise ValueError("An invite is associated only after it is accepted")
        if (self.approved is None) != (self.approver_id is None):
            raise ValueError("Approval sets both approver and approval time")
        if self.approved is not None and self.invitee_id is None:
            raise ValueError("An invite is approved only after it is associated")
        return self

    @property
    def state(self) -> InviteState:
        if self.approved is not None:
            return InviteState.APPROVED
        if self.invitee_id is not None:
            return InviteState.ASSOCIATED
        if self.accepted is not None:
            return InviteState.ACCEPTED
        return InviteState.SENT

    def _require(self, transition: str, state: InviteState) -> None:
        if self.state != state:
            raise InviteTransitionError(transition, self.state.value)

    def accept(self, at: datetime) -> "OrgInviteBody":
        """Mark the invite accepted."""
        self._require("accept", InviteState.SENT)
        return self.model_copy(update={"accepted": at})

    def associate(self, invitee_id: UserId) -> "OrgInviteBody":
        """Bind the accepted invite to the invitee's identity."""
        self._require("associate", InviteState.ACCEPTED)
        return self.model_copy(update={"invitee_id": invitee_id})

    def approve(self, approver_id: UserId, at: datetime) -> "OrgInviteBody":
        """Approve the invite. Terminal."""
        self._require("approve", InviteState.ASSOCIATED)
        return self.model_copy(update={"approver_id": approver_id, "approved": at})
