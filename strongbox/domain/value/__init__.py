"""Domain value objects."""

from strongbox.domain.value.identifiers import (
    CredentialId,
    EntityKind,
    Identifier,
    InviteId,
    OrgId,
    ProjectId,
    TeamId,
    UserId,
    canonical_bytes,
    derive_identifier,
    new_identifier,
)
from strongbox.domain.value.pathexp import (
    WILDCARD,
    PathExp,
    construct,
    parse_full,
    parse_partial,
    validate_credential_name,
)
from strongbox.domain.value.types import (
    AddressFlags,
    CredentialState,
    InviteState,
    ProgressEvent,
    ProgressFunc,
)

__all__ = [
    # Identifiers
    "EntityKind",
    "Identifier",
    "OrgId",
    "ProjectId",
    "TeamId",
    "UserId",
    "CredentialId",
    "InviteId",
    "canonical_bytes",
    "derive_identifier",
    "new_identifier",
    # Path expressions
    "WILDCARD",
    "PathExp",
    "construct",
    "parse_full",
    "parse_partial",
    "validate_credential_name",
    # Types
    "AddressFlags",
    "CredentialState",
    "InviteState",
    "ProgressEvent",
    "ProgressFunc",
]
