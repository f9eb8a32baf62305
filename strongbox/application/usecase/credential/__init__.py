"""Credential use cases."""

from .common import CredentialItem
from .set_credential import (
    SetCredentialRequest,
    SetCredentialResponse,
    SetCredentialUseCase,
)
from .unset_credential import (
    UnsetCredentialRequest,
    UnsetCredentialResponse,
    UnsetCredentialUseCase,
)

__all__ = [
    "CredentialItem",
    "SetCredentialRequest",
    "SetCredentialResponse",
    "SetCredentialUseCase",
    "UnsetCredentialRequest",
    "UnsetCredentialResponse",
    "UnsetCredentialUseCase",
]
