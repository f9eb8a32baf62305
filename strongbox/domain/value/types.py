"""Domain value objects for the registry client."""

from enum import Enum
from typing import Callable

from pydantic import Field

from strongbox.domain.value.common import ValueObject


class CredentialState(str, Enum):
    """Whether a credential currently holds a value."""

    SET = "set"
    UNSET = "unset"


class InviteState(str, Enum):
    """Lifecycle state of an org invite.

    Creation implies delivery, so a freshly created invite is already sent.
    """

    SENT = "sent"
    ACCEPTED = "accepted"
    ASSOCIATED = "associated"
    APPROVED = "approved"


class AddressFlags(ValueObject):
    """Contextual addressing flags typed by the user.

    Org and project are single valued. The remaining dimensions may carry
    several alternatives; an empty list means the flag was omitted.
    """

    org: str | None = None
    project: str | None = None
    environment: list[str] = Field(default_factory=list)
    service: list[str] = Field(default_factory=list)
    identity: list[str] = Field(default_factory=list)
    instance: list[str] = Field(default_factory=list)


class ProgressEvent(ValueObject):
    """Progress notification streamed by the daemon for one request.

    ``id`` is the request correlation id the event belongs to.
    """

    id: str
    type: str = "message"
    message: str = ""
    completed: int | None = None
    total: int | None = None


ProgressFunc = Callable[[ProgressEvent], None]
