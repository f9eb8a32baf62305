"""Domain services."""

from .base import Service
from .credential_service import (
    CredentialService,
    ValueMaker,
    apply_defaults,
    determine_credential,
)
from .invite_service import InviteService
from .org_service import OrgService

__all__ = [
    "CredentialService",
    "InviteService",
    "OrgService",
    "Service",
    "ValueMaker",
    "apply_defaults",
    "determine_credential",
]
