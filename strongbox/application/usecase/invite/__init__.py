"""Org invite use cases."""

from .accept_invite import AcceptInviteRequest, AcceptInviteUseCase
from .approve_invite import ApproveInviteRequest, ApproveInviteUseCase
from .common import InviteItem
from .list_invites import ListInvitesRequest, ListInvitesResponse, ListInvitesUseCase
from .send_invites import (
    FailedInvite,
    SendInvitesRequest,
    SendInvitesResponse,
    SendInvitesUseCase,
)

__all__ = [
    "AcceptInviteRequest",
    "AcceptInviteUseCase",
    "ApproveInviteRequest",
    "ApproveInviteUseCase",
    "FailedInvite",
    "InviteItem",
    "ListInvitesRequest",
    "ListInvitesResponse",
    "ListInvitesUseCase",
    "SendInvitesRequest",
    "SendInvitesResponse",
    "SendInvitesUseCase",
]
