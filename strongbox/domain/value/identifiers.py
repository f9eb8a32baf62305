"""Strongly typed identifiers for registry entities.

An identifier is 18 bytes: a format version byte, an entity kind byte and a
16 byte digest. Its text form is unpadded lowercase base32.

Each entity kind has exactly one derivation mode:

- content-derived: the digest is a hash of the entity's canonical bytes, so the
  same immutable entity always gets the same identifier (orgs, projects, teams)
- mutable-derived: the digest is random, assigned once at creation and kept for
  every later version of the body (users, credentials, invites)
"""

import base64
import binascii
import hashlib
import json
import secrets
from enum import Enum
from typing import NewType

from pydantic import BaseModel, field_validator

from strongbox.domain.value.common import RootValueObject

ID_FORMAT_VERSION = 0x01
DIGEST_SIZE = 16
RAW_SIZE = DIGEST_SIZE + 2
ENCODED_SIZE = 29


class EntityKind(str, Enum):
    """Kinds of entity stored in the registry."""

    ORG = "org"
    PROJECT = "project"
    TEAM = "team"
    USER = "user"
    CREDENTIAL = "credential"
    ORG_INVITE = "org_invite"

    @property
    def type_byte(self) -> int:
        return _TYPE_BYTES[self]

    @property
    def mutable(self) -> bool:
        """Whether identifiers of this kind are mutable-derived."""
        return self in _MUTABLE_KINDS


_TYPE_BYTES: dict[EntityKind, int] = {
    EntityKind.ORG: 0x01,
    EntityKind.PROJECT: 0x02,
    EntityKind.TEAM: 0x03,
    EntityKind.USER: 0x04,
    EntityKind.CREDENTIAL: 0x05,
    EntityKind.ORG_INVITE: 0x06,
}
_KINDS_BY_BYTE = {byte: kind for kind, byte in _TYPE_BYTES.items()}
_MUTABLE_KINDS = frozenset(
    {EntityKind.USER, EntityKind.CREDENTIAL, EntityKind.ORG_INVITE}
)


def _encode(kind: EntityKind, digest: bytes) -> str:
    raw = bytes([ID_FORMAT_VERSION, kind.type_byte]) + digest
    return base64.b32encode(raw).decode("ascii").rstrip("=").lower()


def _decode(text: str) -> bytes:
    if len(text) != ENCODED_SIZE or text != text.lower():
        raise ValueError(f"Malformed identifier: {text!r}")

    padded = text.upper() + "=" * (-len(text) % 8)
    try:
        raw = base64.b32decode(padded)
    except binascii.Error as e:
        raise ValueError(f"Malformed identifier: {text!r}") from e

    if len(raw) != RAW_SIZE or raw[0] != ID_FORMAT_VERSION:
        raise ValueError(f"Unsupported identifier format: {text!r}")
    if raw[1] not in _KINDS_BY_BYTE:
        raise ValueError(f"Unknown identifier kind in {text!r}")
    return raw


class Identifier(RootValueObject[str]):
    """Opaque, typed, globally unique identifier."""

    @field_validator("root")
    @classmethod
    def validate_identifier(cls, v: str) -> str:
        """Validate the base32 text form and embedded kind."""
        _decode(v)
        return v

    @classmethod
    def parse(cls, text: str) -> "Identifier":
        return cls(text)

    @property
    def kind(self) -> EntityKind:
        """Entity kind embedded in the identifier."""
        return _KINDS_BY_BYTE[_decode(self.root)[1]]


# Typed aliases keep signatures self-documenting
OrgId = NewType("OrgId", Identifier)
ProjectId = NewType("ProjectId", Identifier)
TeamId = NewType("TeamId", Identifier)
UserId = NewType("UserId", Identifier)
CredentialId = NewType("CredentialId", Identifier)
InviteId = NewType("InviteId", Identifier)


def canonical_bytes(model: BaseModel) -> bytes:
    """Canonical byte representation of a model.

    Sorted keys and compact separators, so equal models always hash equally.
    """
    return json.dumps(
        model.model_dump(mode="json"),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    ).encode("utf-8")


def derive_identifier(kind: EntityKind, data: bytes) -> Identifier:
    """Derive a content identifier from canonical bytes.

    Args:
        kind: Entity kind; must be content-derived
        data: Canonical bytes of the immutable entity

    Returns:
        Deterministic identifier for the content

    Raises:
        ValueError: If the kind uses mutable identifiers
    """
    if kind.mutable:
        raise ValueError(f"{kind.value} identifiers are not content-derived")
    digest = hashlib.blake2b(data, digest_size=DIGEST_SIZE).digest()
    return Identifier(_encode(kind, digest))


def new_identifier(kind: EntityKind) -> Identifier:
    """Assign a fresh mutable identifier.

    Raises:
        ValueError: If the kind uses content-derived identifiers
    """
    if not kind.mutable:
        raise ValueError(f"{kind.value} identifiers are content-derived")
    return Identifier(_encode(kind, secrets.token_bytes(DIGEST_SIZE)))
