"""Credential resolution and write protocol.

Turns what the user typed (a name, or a path ending in a name, plus addressing
flags) into concrete path expressions, resolves the org and project they name,
and submits one versioned credential per expression.
"""

import asyncio
from typing import Callable

import logfire

from strongbox.config import AddressDefaults
from strongbox.domain.error import ValidationError
from strongbox.domain.model import (
    CredentialEnvelope,
    CredentialValue,
    build_credential_body,
    wrap,
)
from strongbox.domain.repository import CredentialRepository
from strongbox.domain.value import (
    AddressFlags,
    EntityKind,
    PathExp,
    ProgressFunc,
    construct,
    new_identifier,
    parse_partial,
    validate_credential_name,
)

from .base import Service
from .org_service import OrgService

ValueMaker = Callable[[], CredentialValue]


def apply_defaults(flags: AddressFlags, defaults: AddressDefaults) -> AddressFlags:
    """Fill every omitted flag with its configured default."""
    return AddressFlags(
        org=flags.org or defaults.org,
        project=flags.project or defaults.project,
        environment=flags.environment or defaults.environment,
        service=flags.service or defaults.service,
        identity=flags.identity or defaults.identity,
        instance=flags.instance or defaults.instance,
    )


def determine_credential(
    name_or_path: str, flags: AddressFlags, defaults: AddressDefaults
) -> tuple[list[PathExp], str]:
    """Work out where a credential lives and what it is called.

    With a ``/`` in the input, everything left of the last slash is an explicit
    path that overrides the environment, service, identity and instance flags.
    An absolute path (leading ``/``) names the org and project itself; a
    relative one starts at the environment, under the contextual org and
    project. Without a slash the input is the name and the flags, filled from
    ``defaults``, build one expression per combination.

    Returns:
        Tuple of (path expressions, credential name)

    Raises:
        ValidationError: If the name is the wildcard or empty, or a required
            flag has no value
        ParseError: If the path or a flag value is malformed
    """
    idx = name_or_path.rfind("/")
    name = validate_credential_name(name_or_path[idx + 1 :])

    if idx == -1:
        filled = apply_defaults(flags, defaults)
        path_exps = construct(
            filled.org or "",
            filled.project or "",
            filled.environment,
            filled.service,
            filled.identity,
            filled.instance,
        )
        return path_exps, name

    path = name_or_path[:idx]
    if path and not path.startswith("/"):
        org = flags.org or defaults.org
        project = flags.project or defaults.project
        if not org:
            raise ValidationError("An org must be supplied")
        if not project:
            raise ValidationError("A project must be supplied")
        path = f"/{org}/{project}/{path}"

    return [parse_partial(path)], name


class CredentialService(Service):
    """Domain service for writing credentials."""

    def __init__(
        self, credential_repository: CredentialRepository, org_service: OrgService
    ) -> None:
        """Initialize credential service.

        Args:
            credential_repository: Credential repository
            org_service: Org resolution service
        """
        self.credential_repository = credential_repository
        self.org_service = org_service

    async def set_credential(
        self,
        name_or_path: str,
        flags: AddressFlags,
        defaults: AddressDefaults,
        value_maker: ValueMaker,
        progress: ProgressFunc | None = None,
    ) -> list[CredentialEnvelope]:
        """Resolve and write a credential.

        The org and project are resolved before anything is written, so a
        failed lookup never leaves a credential behind. Each path expression is
        written as its own credential; the writes run concurrently.

        Args:
            name_or_path: Name, or path ending in a name
            flags: Addressing flags typed by the user
            defaults: Configured per-flag defaults
            value_maker: Produces the value, or the unset marker
            progress: Optional callback for daemon progress events

        Returns:
            Stored credential envelopes, one per path expression

        Raises:
            ParseError: Malformed path or flag value
            ValidationError: Wildcard name or missing required address part
            NotFoundError: Org or project does not exist
            TransportError: The registry or daemon request failed
        """
        with logfire.span(
            "credential_service.set_credential", name_or_path=name_or_path
        ):
            path_exps, name = determine_credential(name_or_path, flags, defaults)
            for path_exp in path_exps:
                path_exp.require_concrete("org", "project")

            # construct and parse_partial share one org and project per call
            org = await self.org_service.resolve_org(path_exps[0].org)
            project = await self.org_service.resolve_project(
                org.id, path_exps[0].project
            )

            name = name.lower()
            value = value_maker()

            envelopes = [
                wrap(
                    new_identifier(EntityKind.CREDENTIAL),
                    1,
                    build_credential_body(org.id, project.id, name, path_exp, value),
                )
                for path_exp in path_exps
            ]
            stored = await asyncio.gather(
                *(
                    self.credential_repository.create(envelope, progress)
                    for envelope in envelopes
                )
            )

            logfire.info(
                "Credential written",
                name=name,
                state=envelopes[0].body.state.value,
                paths=[str(path_exp) for path_exp in path_exps],
            )
            return list(stored)

    async def unset_credential(
        self,
        name_or_path: str,
        flags: AddressFlags,
        defaults: AddressDefaults,
        progress: ProgressFunc | None = None,
    ) -> list[CredentialEnvelope]:
        """Withdraw a credential's value, keeping its history."""
        return await self.set_credential(
            name_or_path, flags, defaults, CredentialValue.unset, progress
        )

    async def list_credentials(self, pattern: PathExp) -> list[CredentialEnvelope]:
        """List stored credentials matched by ``pattern``."""
        with logfire.span("credential_service.list_credentials", pattern=str(pattern)):
            return await self.credential_repository.list(pattern)
