"""Versioned envelopes.

Every stored entity travels as ``{id, version, body}``. The body is one of a
closed set of variants per entity kind, selected by its ``type`` field. The
identifier stays fixed across versions and ``version`` grows by one with each
accepted change of the body.
"""

import json
from typing import Any, Generic, TypeVar

import pydantic
from pydantic import Field

from strongbox.domain.error import DecodeError
from strongbox.domain.model.common import DomainModel
from strongbox.domain.model.credential import CredentialV1Body, CredentialV2Body
from strongbox.domain.model.invite import OrgInviteBody
from strongbox.domain.model.org import OrgBody, ProjectBody, TeamBody, UserBody
from strongbox.domain.value import EntityKind, Identifier

BodyT = TypeVar("BodyT")


class Envelope(DomainModel, Generic[BodyT]):
    """Identifier, version and tagged body."""

    id: Identifier
    version: int = Field(ge=1)
    body: BodyT

    def revise(self, body: BodyT) -> "Envelope[BodyT]":
        """Next version of this envelope carrying ``body``."""
        return self.model_copy(update={"version": self.version + 1, "body": body})


# Closed set of body variants per entity kind, keyed by discriminant
BODY_VARIANTS: dict[EntityKind, dict[str, type[DomainModel]]] = {
    EntityKind.ORG: {"org": OrgBody},
    EntityKind.PROJECT: {"project": ProjectBody},
    EntityKind.TEAM: {"team": TeamBody},
    EntityKind.USER: {"user": UserBody},
    EntityKind.CREDENTIAL: {
        "credential": CredentialV1Body,
        "credential-v2": CredentialV2Body,
    },
    EntityKind.ORG_INVITE: {"org-invite": OrgInviteBody},
}

OrgEnvelope = Envelope[OrgBody]
ProjectEnvelope = Envelope[ProjectBody]
TeamEnvelope = Envelope[TeamBody]
UserEnvelope = Envelope[UserBody]
CredentialEnvelope = Envelope[CredentialV1Body | CredentialV2Body]
OrgInviteEnvelope = Envelope[OrgInviteBody]


def wrap(id: Identifier, version: int, body: BodyT) -> Envelope[BodyT]:
    """Wrap a body in an envelope."""
    return Envelope[type(body)](id=id, version=version, body=body)


def unwrap(kind: EntityKind, raw: Any) -> tuple[str, Envelope]:
    """Decode an envelope of the given kind.

    Args:
        kind: Expected entity kind
        raw: Decoded JSON object, or JSON text

    Returns:
        Tuple of (variant tag, envelope)

    Raises:
        DecodeError: If the discriminant is unknown for the kind, the envelope
            is malformed, or the identifier belongs to another kind
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise DecodeError(f"Envelope is not valid JSON: {e}") from e

    if not isinstance(raw, dict) or not isinstance(raw.get("body"), dict):
        raise DecodeError(f"Malformed {kind.value} envelope")

    tag = raw["body"].get("type")
    if not isinstance(tag, str):
        raise DecodeError(f"Missing {kind.value} body type")
    variant = BODY_VARIANTS[kind].get(tag)
    if variant is None:
        raise DecodeError(f"Unknown {kind.value} body type: {tag!r}")

    try:
        envelope = Envelope[variant].model_validate(raw)
    except pydantic.ValidationError as e:
        raise DecodeError(f"Malformed {kind.value} envelope: {e}") from e

    if envelope.id.kind is not kind:
        raise DecodeError(
            f"Expected a {kind.value} identifier, got {envelope.id.kind.value}"
        )
    return tag, envelope


def unwrap_body(kind: EntityKind, raw: Any, *variants: type[BodyT]) -> Envelope[BodyT]:
    """Decode an envelope and require its body to be one of ``variants``."""
    tag, envelope = unwrap(kind, raw)
    if variants and not isinstance(envelope.body, variants):
        raise DecodeError(f"Invalid {kind.value} body: {tag}")
    return envelope
