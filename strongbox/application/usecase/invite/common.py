"""Response items shared by invite use cases."""

from datetime import datetime

from pydantic import BaseModel

from strongbox.domain.model import OrgInviteEnvelope


class InviteItem(BaseModel):
    """An org invite as reported back to the caller."""

    invite_id: str
    org_id: str
    email: str
    state: str
    inviter_id: str
    invitee_id: str | None
    pending_teams: list[str]
    created: datetime

    @classmethod
    def from_envelope(cls, invite: OrgInviteEnvelope) -> "InviteItem":
        body = invite.body
        return cls(
            invite_id=str(invite.id),
            org_id=str(body.org_id),
            email=body.email,
            state=body.state.value,
            inviter_id=str(body.inviter_id),
            invitee_id=str(body.invitee_id) if body.invitee_id else None,
            pending_teams=[str(team_id) for team_id in body.pending_teams],
            created=body.created,
        )
