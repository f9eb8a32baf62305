"""Domain models."""

from strongbox.domain.model.credential import (
    CredentialV1Body,
    CredentialV2Body,
    CredentialValue,
    build_credential_body,
)
from strongbox.domain.model.envelope import (
    BODY_VARIANTS,
    CredentialEnvelope,
    Envelope,
    OrgEnvelope,
    OrgInviteEnvelope,
    ProjectEnvelope,
    TeamEnvelope,
    UserEnvelope,
    unwrap,
    unwrap_body,
    wrap,
)
from strongbox.domain.model.invite import OrgInviteBody
from strongbox.domain.model.org import OrgBody, ProjectBody, TeamBody, UserBody

__all__ = [
    "BODY_VARIANTS",
    "CredentialEnvelope",
    "CredentialV1Body",
    "CredentialV2Body",
    "CredentialValue",
    "Envelope",
    "OrgBody",
    "OrgEnvelope",
    "OrgInviteBody",
    "OrgInviteEnvelope",
    "ProjectBody",
    "ProjectEnvelope",
    "TeamBody",
    "TeamEnvelope",
    "UserBody",
    "UserEnvelope",
    "build_credential_body",
    "unwrap",
    "unwrap_body",
    "wrap",
]
