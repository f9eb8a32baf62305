"""Domain repository interfaces."""

from strongbox.domain.repository.credential import CredentialRepository
from strongbox.domain.repository.invite import OrgInviteRepository
from strongbox.domain.repository.org import (
    OrgRepository,
    ProjectRepository,
    TeamRepository,
)
from strongbox.domain.repository.session import SessionRepository

__all__ = [
    "CredentialRepository",
    "OrgInviteRepository",
    "OrgRepository",
    "ProjectRepository",
    "SessionRepository",
    "TeamRepository",
]
