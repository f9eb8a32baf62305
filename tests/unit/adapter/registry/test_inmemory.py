"""Unit tests for the in-process registry's server-side rules."""

import pytest

from strongbox.adapter.error import TransportError
from strongbox.adapter.registry import InMemoryDispatcher, InMemoryRegistry
from strongbox.domain.model import OrgInviteBody, wrap
from strongbox.domain.value import EntityKind, new_identifier
from tests.conftest import seed_registry


@pytest.fixture
def seeded():
    return seed_registry(InMemoryRegistry())


class TestRouting:
    @pytest.mark.asyncio
    async def test_unknown_route(self, seeded):
        dispatcher = InMemoryDispatcher(seeded.registry)

        with pytest.raises(TransportError) as exc_info:
            await dispatcher.call("DELETE", "/orgs")

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_session_required(self, seeded):
        seeded.registry.login(None)
        dispatcher = InMemoryDispatcher(seeded.registry)

        with pytest.raises(TransportError) as exc_info:
            await dispatcher.call("GET", "/self")

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_self(self, seeded):
        dispatcher = InMemoryDispatcher(seeded.registry)

        raw = await dispatcher.call("GET", "/self")

        assert raw["id"] == str(seeded.admin.id)
        assert raw["body"]["username"] == "admin"


class TestInviteRules:
    @pytest.mark.asyncio
    async def test_used_invite_rejected_on_create(self, seeded):
        """New invites must arrive unused."""
        body = OrgInviteBody(
            org_id=seeded.org.id,
            inviter_id=seeded.admin.id,
            email="newbie@acme.test",
            created="2026-01-01T00:00:00Z",
            accepted="2026-01-02T00:00:00Z",
        )
        invite = wrap(new_identifier(EntityKind.ORG_INVITE), 1, body)
        dispatcher = InMemoryDispatcher(seeded.registry)

        with pytest.raises(TransportError) as exc_info:
            await dispatcher.call(
                "POST", "/org-invites", body=invite.model_dump(mode="json")
            )

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_state_filter(self, seeded):
        dispatcher = InMemoryDispatcher(seeded.registry)

        with pytest.raises(TransportError) as exc_info:
            await dispatcher.call(
                "GET",
                "/org-invites",
                query=[("org_id", str(seeded.org.id)), ("state", "pending")],
            )

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_malformed_envelope(self, seeded):
        dispatcher = InMemoryDispatcher(seeded.registry)

        with pytest.raises(TransportError) as exc_info:
            await dispatcher.call("POST", "/org-invites", body={"id": "nope"})

        assert exc_info.value.status_code == 400


class TestCredentialRules:
    @pytest.mark.asyncio
    async def test_list_requires_path(self, seeded):
        dispatcher = InMemoryDispatcher(seeded.registry)

        with pytest.raises(TransportError):
            await dispatcher.call("GET", "/credentials")

    @pytest.mark.asyncio
    async def test_list_rejects_malformed_path(self, seeded):
        dispatcher = InMemoryDispatcher(seeded.registry)

        with pytest.raises(TransportError) as exc_info:
            await dispatcher.call("GET", "/credentials", query=[("path", "/*")])

        assert exc_info.value.status_code == 400
