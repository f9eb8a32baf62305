"""Org, project and team clients."""

from strongbox.adapter.registry.base import RegistryClient
from strongbox.domain.error import DecodeError
from strongbox.domain.model import (
    OrgBody,
    OrgEnvelope,
    ProjectBody,
    ProjectEnvelope,
    TeamBody,
    TeamEnvelope,
)
from strongbox.domain.repository import (
    OrgRepository,
    ProjectRepository,
    TeamRepository,
)
from strongbox.domain.value import EntityKind, OrgId


def _scoped_query(org_id: OrgId, name: str | None) -> list[tuple[str, str]]:
    query = [("org_id", str(org_id))]
    if name is not None:
        query.append(("name", name))
    return query


class OrgsClient(RegistryClient, OrgRepository):
    """Registry client for ``/orgs``."""

    async def get_by_name(self, name: str) -> OrgEnvelope | None:
        raw = await self.dispatcher.call("GET", "/orgs", query=[("name", name)])
        orgs = self.decode_many(EntityKind.ORG, raw, OrgBody)
        if len(orgs) > 1:
            raise DecodeError(f"Expected at most one org named {name!r}")
        return orgs[0] if orgs else None

    async def list(self) -> list[OrgEnvelope]:
        raw = await self.dispatcher.call("GET", "/orgs")
        return self.decode_many(EntityKind.ORG, raw, OrgBody)


class ProjectsClient(RegistryClient, ProjectRepository):
    """Registry client for ``/projects``."""

    async def list(
        self, org_id: OrgId, name: str | None = None
    ) -> list[ProjectEnvelope]:
        raw = await self.dispatcher.call(
            "GET", "/projects", query=_scoped_query(org_id, name)
        )
        return self.decode_many(EntityKind.PROJECT, raw, ProjectBody)


class TeamsClient(RegistryClient, TeamRepository):
    """Registry client for ``/teams``."""

    async def list(self, org_id: OrgId, name: str | None = None) -> list[TeamEnvelope]:
        raw = await self.dispatcher.call(
            "GET", "/teams", query=_scoped_query(org_id, name)
        )
        return self.decode_many(EntityKind.TEAM, raw, TeamBody)
