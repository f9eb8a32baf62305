"""Unit tests for envelope encoding and decoding."""

import json

import pytest

from strongbox.domain.error import DecodeError
from strongbox.domain.model import (
    CredentialV1Body,
    CredentialV2Body,
    CredentialValue,
    OrgBody,
    OrgInviteBody,
    build_credential_body,
    unwrap,
    unwrap_body,
    wrap,
)
from strongbox.domain.value import (
    CredentialState,
    EntityKind,
    canonical_bytes,
    derive_identifier,
    new_identifier,
    parse_full,
)


@pytest.fixture
def org():
    body = OrgBody(name="acme")
    return wrap(derive_identifier(EntityKind.ORG, canonical_bytes(body)), 1, body)


@pytest.fixture
def credential(org):
    project_id = derive_identifier(EntityKind.PROJECT, b"api")
    body = build_credential_body(
        org.id,
        project_id,
        "database_url",
        parse_full("/acme/api/dev/web/*/*"),
        CredentialValue.string("postgres://db"),
    )
    return wrap(new_identifier(EntityKind.CREDENTIAL), 1, body)


class TestWrap:
    """Tests for building envelopes."""

    def test_wrap(self, org):
        assert org.version == 1
        assert org.body.name == "acme"
        assert org.id.kind is EntityKind.ORG

    def test_revise_keeps_identity(self, credential):
        unset = credential.body.model_copy(
            update={"value": None, "state": CredentialState.UNSET}
        )

        revised = credential.revise(unset)

        assert revised.id == credential.id
        assert revised.version == 2
        assert credential.version == 1


class TestUnwrap:
    """Tests for decoding envelopes."""

    def test_decode_from_json_text(self, credential):
        tag, envelope = unwrap(EntityKind.CREDENTIAL, credential.model_dump_json())

        assert tag == "credential-v2"
        assert isinstance(envelope.body, CredentialV2Body)
        assert envelope.body == credential.body
        assert envelope.id == credential.id

    def test_decode_v1_body(self, credential):
        raw = credential.model_dump(mode="json")
        raw["body"] = {
            "type": "credential",
            "org_id": raw["body"]["org_id"],
            "project_id": raw["body"]["project_id"],
            "name": "legacy",
            "path_exp": "/acme/api/dev/web/*/*",
            "value": {"type": "undefined"},
        }

        tag, envelope = unwrap(EntityKind.CREDENTIAL, raw)

        assert tag == "credential"
        assert isinstance(envelope.body, CredentialV1Body)
        assert envelope.body.state.value == "unset"

    def test_unknown_tag(self, credential):
        raw = credential.model_dump(mode="json")
        raw["body"]["type"] = "credential-v9"

        with pytest.raises(DecodeError):
            unwrap(EntityKind.CREDENTIAL, raw)

    def test_non_string_tag(self, credential):
        raw = credential.model_dump(mode="json")
        raw["body"]["type"] = ["credential"]

        with pytest.raises(DecodeError):
            unwrap(EntityKind.CREDENTIAL, raw)

    def test_missing_tag(self, org):
        raw = org.model_dump(mode="json")
        del raw["body"]["type"]

        with pytest.raises(DecodeError):
            unwrap(EntityKind.ORG, raw)

    def test_tag_of_another_kind(self, org):
        """An org body is not a valid credential body."""
        with pytest.raises(DecodeError):
            unwrap(EntityKind.CREDENTIAL, org.model_dump(mode="json"))

    def test_identifier_of_another_kind(self, org, credential):
        raw = credential.model_dump(mode="json")
        raw["id"] = str(org.id)

        with pytest.raises(DecodeError):
            unwrap(EntityKind.CREDENTIAL, raw)

    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            b'{"id": "\xff"}',
            json.dumps([1, 2]),
            {"id": "x", "version": 1},
        ],
    )
    def test_malformed(self, raw):
        with pytest.raises(DecodeError):
            unwrap(EntityKind.ORG, raw)

    def test_invalid_version(self, org):
        raw = org.model_dump(mode="json")
        raw["version"] = 0

        with pytest.raises(DecodeError):
            unwrap(EntityKind.ORG, raw)

    def test_unwrap_body_restricts_variants(self, credential):
        raw = credential.model_dump(mode="json")

        with pytest.raises(DecodeError):
            unwrap_body(EntityKind.CREDENTIAL, raw, CredentialV1Body)

        envelope = unwrap_body(EntityKind.CREDENTIAL, raw, CredentialV2Body)
        assert envelope.body.name == "database_url"

    def test_invite_round_trip(self, org):
        body = OrgInviteBody(
            org_id=org.id,
            inviter_id=new_identifier(EntityKind.USER),
            email="newbie@acme.test",
            created="2026-01-01T00:00:00Z",
        )
        invite = wrap(new_identifier(EntityKind.ORG_INVITE), 1, body)

        _, decoded = unwrap(EntityKind.ORG_INVITE, invite.model_dump(mode="json"))

        assert decoded.body == invite.body
