"""Tests for CLI commands and argument parsing."""

import pytest
import pytest_asyncio

from strongbox.adapter.registry import InMemoryRegistry
from strongbox.interface.cli.app import build_parser, parse_set_args, run
from strongbox.interface.error import UsageError
from tests.conftest import seed_registry
from tests.di import build_test_container

ADDRESS = ["-o", "acme", "-p", "api", "-e", "dev"]


@pytest_asyncio.fixture
async def container():
    container = build_test_container()
    yield container
    await container.close()


@pytest_asyncio.fixture
async def seeded(container):
    return seed_registry(await container.get(InMemoryRegistry))


class TestParseSetArgs:
    """Tests for parse_set_args."""

    def test_name_and_value(self):
        assert parse_set_args(["secretA", "value1"]) == ("secretA", "value1")

    def test_env_var_syntax(self):
        assert parse_set_args(["secretA=value1"]) == ("secretA", "value1")

    def test_value_may_contain_equals(self):
        assert parse_set_args(["url=a=b"]) == ("url", "a=b")

    @pytest.mark.parametrize("args", [[], ["secretA"]])
    def test_missing_value(self, args):
        with pytest.raises(UsageError, match="A secret name and value must be supplied."):
            parse_set_args(args)

    @pytest.mark.parametrize("args", [["secretA="], ["=value"], ["", "value"]])
    def test_empty_name_or_value(self, args):
        with pytest.raises(UsageError, match="A secret must have a name and value."):
            parse_set_args(args)

    def test_too_many_arguments(self):
        with pytest.raises(UsageError, match="Too many arguments were provided."):
            parse_set_args(["a", "b", "c"])


class TestParser:
    """Tests for flag parsing."""

    def test_repeatable_flags(self):
        args = build_parser().parse_args(
            ["set", "token", "abc", "-e", "dev", "-e", "prod", "-i", "1"]
        )

        assert args.environment == ["dev", "prod"]
        assert args.instance == ["1"]
        assert args.service == []

    def test_missing_command(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args([])

        assert exc_info.value.code == 2


class TestSetCommand:
    """Tests for the set command."""

    @pytest.mark.asyncio
    async def test_set(self, container, seeded, capsys):
        code = await run(container, ["set", "secretA=value1", *ADDRESS])

        out = capsys.readouterr().out
        assert code == 0
        assert (
            "Credential secreta has been set at /acme/api/dev/default/*/*/secreta"
            in out
        )
        assert len(seeded.registry.credentials) == 1

    @pytest.mark.asyncio
    async def test_usage_error_makes_no_request(self, container, seeded, capsys):
        code = await run(container, ["set", "secretA", *ADDRESS])

        assert code == 2
        assert "A secret name and value must be supplied." in capsys.readouterr().err
        assert seeded.registry.credentials == {}

    @pytest.mark.asyncio
    async def test_unknown_org(self, container, seeded, capsys):
        code = await run(
            container,
            ["set", "token", "abc", "-o", "umbrella", "-p", "api", "-e", "dev"],
        )

        err = capsys.readouterr().err
        assert code == 1
        assert "Could not set credential." in err
        assert "Org not found" in err

    @pytest.mark.asyncio
    async def test_wildcard_name(self, container, seeded, capsys):
        code = await run(container, ["set", "/acme/api/dev/*", "abc"])

        assert code == 1
        assert "Secret name cannot be wildcard" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_wildcard_name_from_flags(self, container, seeded, capsys):
        code = await run(container, ["set", "*", "abc", *ADDRESS])

        assert code == 1
        assert "Secret name cannot be wildcard" in capsys.readouterr().err
        assert seeded.registry.credentials == {}


class TestUnsetCommand:
    @pytest.mark.asyncio
    async def test_unset(self, container, seeded, capsys):
        await run(container, ["set", "token", "abc", *ADDRESS])

        code = await run(container, ["unset", "token", *ADDRESS])

        assert code == 0
        assert (
            "Credential token has been unset at /acme/api/dev/default/*/*/token"
            in capsys.readouterr().out
        )


class TestInvitesCommands:
    """Tests for the invites commands."""

    @pytest.mark.asyncio
    async def test_send_and_list(self, container, seeded, capsys):
        code = await run(
            container, ["invites", "send", "a@acme.test", "-o", "acme", "-t", "ops"]
        )
        assert code == 0
        assert "has been sent to a@acme.test" in capsys.readouterr().out

        code = await run(container, ["invites", "list", "-o", "acme", "--state", "sent"])

        out = capsys.readouterr().out
        assert code == 0
        assert "a@acme.test\tsent" in out

    @pytest.mark.asyncio
    async def test_list_empty(self, container, seeded, capsys):
        code = await run(container, ["invites", "list", "-o", "acme"])

        assert code == 0
        assert "No invites found." in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_accept(self, container, seeded, capsys):
        await run(container, ["invites", "send", "newbie@acme.test", "-o", "acme"])
        [invite_id] = seeded.registry.invites
        code_word = seeded.registry.invite_code(invite_id)
        seeded.registry.login(seeded.invitee.id)

        code = await run(
            container,
            ["invites", "accept", "newbie@acme.test", code_word, "-o", "acme"],
        )

        assert code == 0
        assert "pending approval" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_approve_invalid_identifier(self, container, seeded, capsys):
        code = await run(container, ["invites", "approve", "not-an-id"])

        assert code == 2
        assert "Invalid invite identifier" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_approve_out_of_order(self, container, seeded, capsys):
        await run(container, ["invites", "send", "newbie@acme.test", "-o", "acme"])
        [invite_id] = seeded.registry.invites

        code = await run(container, ["invites", "approve", str(invite_id)])

        assert code == 1
        assert "Could not approve invite." in capsys.readouterr().err
