"""Unit tests for credential resolution and writes."""

import pytest

from strongbox.adapter.registry import InMemoryRegistry
from strongbox.config import AddressDefaults
from strongbox.domain.error import NotFoundError, ParseError, ValidationError
from strongbox.domain.model import CredentialValue
from strongbox.domain.service import CredentialService, determine_credential
from strongbox.domain.value import AddressFlags, CredentialState, parse_partial
from tests.conftest import seed_registry
from tests.harness import create_env_fixture

# Unit test fixture - in-memory registry
unit_env = create_env_fixture()


def string_value(value: str):
    return lambda: CredentialValue.string(value)


class TestDetermineCredential:
    """Tests for working out path expressions and name from user input."""

    def test_name_uses_flags_and_defaults(self, defaults):
        path_exps, name = determine_credential("secretA", AddressFlags(), defaults)

        assert name == "secretA"
        assert [str(p) for p in path_exps] == ["/acme/api/dev-alice/default/*/*"]

    def test_flags_override_defaults(self, defaults):
        flags = AddressFlags(
            org="umbrella", project="web", environment=["prod"], service=["worker"]
        )

        path_exps, _ = determine_credential("token", flags, defaults)

        assert [str(p) for p in path_exps] == ["/umbrella/web/prod/worker/*/*"]

    def test_relative_path(self, defaults):
        """A relative path starts at the environment."""
        path_exps, name = determine_credential(
            "myenv/myservice/secretB", AddressFlags(), defaults
        )

        assert name == "secretB"
        assert len(path_exps) == 1
        assert path_exps[0].environment == "myenv"
        assert path_exps[0].service == "myservice"
        assert path_exps[0].identity == "*"
        assert path_exps[0].instance == "*"

    def test_relative_path_uses_org_flag(self, defaults):
        path_exps, _ = determine_credential(
            "myenv/secret", AddressFlags(org="umbrella", project="web"), defaults
        )

        assert str(path_exps[0]) == "/umbrella/web/myenv/*/*/*"

    def test_absolute_path_ignores_flags(self, defaults):
        flags = AddressFlags(environment=["prod"], service=["worker"])

        path_exps, name = determine_credential(
            "/acme/api/staging/web/token", flags, defaults
        )

        assert name == "token"
        assert [str(p) for p in path_exps] == ["/acme/api/staging/web/*/*"]

    def test_wildcard_name(self, defaults):
        with pytest.raises(ValidationError):
            determine_credential("/acme/api/dev/*", AddressFlags(), defaults)

    def test_wildcard_name_with_flags(self, defaults):
        flags = AddressFlags(environment=["prod"], service=["web"])

        with pytest.raises(ValidationError):
            determine_credential("*", flags, defaults)

    def test_empty_name(self, defaults):
        with pytest.raises(ValidationError):
            determine_credential("/acme/api/dev/", AddressFlags(), defaults)

    def test_missing_environment(self):
        """No environment flag and no default is an error."""
        defaults = AddressDefaults(org="acme", project="api")

        with pytest.raises(ValidationError):
            determine_credential("token", AddressFlags(), defaults)

    def test_relative_path_without_org(self):
        with pytest.raises(ValidationError):
            determine_credential("dev/token", AddressFlags(), AddressDefaults())

    def test_malformed_path(self, defaults):
        with pytest.raises(ParseError):
            determine_credential("/acme/api/de v/token", AddressFlags(), defaults)

    def test_multiple_alternatives(self, defaults):
        flags = AddressFlags(environment=["dev", "prod"], instance=["1", "2"])

        path_exps, _ = determine_credential("token", flags, defaults)

        assert len(path_exps) == 4


class TestSetCredential:
    """Tests for set_credential."""

    @pytest.mark.asyncio
    async def test_set_by_name(self, unit_env, defaults):
        registry = await unit_env.get(InMemoryRegistry)
        seeded = seed_registry(registry)
        service = await unit_env.get(CredentialService)

        stored = await service.set_credential(
            "secretA", AddressFlags(), defaults, string_value("value1")
        )

        assert len(stored) == 1
        credential = stored[0]
        assert credential.version == 1
        assert credential.body.name == "secreta"
        assert credential.body.org_id == seeded.org.id
        assert credential.body.project_id == seeded.project.id
        assert credential.body.state == CredentialState.SET
        assert credential.body.value == CredentialValue.string("value1")
        assert str(credential.body.path_exp) == "/acme/api/dev-alice/default/*/*"
        assert credential.id in registry.credentials

    @pytest.mark.asyncio
    async def test_set_by_relative_path(self, unit_env, defaults):
        seed_registry(await unit_env.get(InMemoryRegistry))
        service = await unit_env.get(CredentialService)

        stored = await service.set_credential(
            "myenv/myservice/secretB", AddressFlags(), defaults, string_value("value2")
        )

        assert stored[0].body.name == "secretb"
        assert str(stored[0].body.path_exp) == "/acme/api/myenv/myservice/*/*"

    @pytest.mark.asyncio
    async def test_unknown_org_writes_nothing(self, unit_env, defaults):
        registry = await unit_env.get(InMemoryRegistry)
        seed_registry(registry)
        service = await unit_env.get(CredentialService)

        with pytest.raises(NotFoundError) as exc_info:
            await service.set_credential(
                "secret",
                AddressFlags(org="umbrella"),
                defaults,
                string_value("value"),
            )

        assert str(exc_info.value) == "Org not found"
        assert registry.credentials == {}

    @pytest.mark.asyncio
    async def test_unknown_project_writes_nothing(self, unit_env, defaults):
        registry = await unit_env.get(InMemoryRegistry)
        seed_registry(registry)
        service = await unit_env.get(CredentialService)

        with pytest.raises(NotFoundError):
            await service.set_credential(
                "secret",
                AddressFlags(project="nope"),
                defaults,
                string_value("value"),
            )

        assert registry.credentials == {}

    @pytest.mark.asyncio
    async def test_wildcard_project_rejected(self, unit_env, defaults):
        seed_registry(await unit_env.get(InMemoryRegistry))
        service = await unit_env.get(CredentialService)

        with pytest.raises(ValidationError):
            await service.set_credential(
                "/acme/secret", AddressFlags(), defaults, string_value("value")
            )

    @pytest.mark.asyncio
    async def test_one_credential_per_combination(self, unit_env, defaults, progress):
        registry = await unit_env.get(InMemoryRegistry)
        seed_registry(registry)
        service = await unit_env.get(CredentialService)

        stored = await service.set_credential(
            "token",
            AddressFlags(environment=["dev", "prod"]),
            defaults,
            string_value("abc"),
            progress,
        )

        assert len(stored) == 2
        assert len({c.id for c in stored}) == 2
        assert {str(c.body.path_exp) for c in stored} == {
            "/acme/api/dev/default/*/*",
            "/acme/api/prod/default/*/*",
        }
        assert len(registry.credentials) == 2
        # Each write reports progress under its own correlation id
        assert len({event.id for event in progress.events}) == 2

    @pytest.mark.asyncio
    async def test_overwrite_bumps_version(self, unit_env, defaults):
        seed_registry(await unit_env.get(InMemoryRegistry))
        service = await unit_env.get(CredentialService)

        [first] = await service.set_credential(
            "token", AddressFlags(), defaults, string_value("one")
        )
        [second] = await service.set_credential(
            "TOKEN", AddressFlags(), defaults, string_value("two")
        )

        assert second.id == first.id
        assert second.version == 2
        assert second.body.credential_version == 2
        assert second.body.value == CredentialValue.string("two")


class TestUnsetCredential:
    """Tests for unset_credential."""

    @pytest.mark.asyncio
    async def test_unset_keeps_history(self, unit_env, defaults):
        registry = await unit_env.get(InMemoryRegistry)
        seed_registry(registry)
        service = await unit_env.get(CredentialService)
        [created] = await service.set_credential(
            "token", AddressFlags(), defaults, string_value("abc")
        )

        [unset] = await service.unset_credential("token", AddressFlags(), defaults)

        assert unset.id == created.id
        assert unset.version == 2
        assert unset.body.state == CredentialState.UNSET
        assert unset.body.value is None
        assert registry.credentials[created.id].body.state == CredentialState.UNSET


class TestListCredentials:
    """Tests for list_credentials."""

    @pytest.mark.asyncio
    async def test_list_by_pattern(self, unit_env, defaults):
        seed_registry(await unit_env.get(InMemoryRegistry))
        service = await unit_env.get(CredentialService)
        await service.set_credential(
            "token",
            AddressFlags(environment=["dev", "prod"]),
            defaults,
            string_value("abc"),
        )

        dev = await service.list_credentials(parse_partial("/acme/api/dev"))
        everything = await service.list_credentials(parse_partial("/acme"))

        assert [str(c.body.path_exp) for c in dev] == ["/acme/api/dev/default/*/*"]
        assert len(everything) == 2
